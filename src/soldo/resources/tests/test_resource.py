import hashlib

import pytest

from ...exceptions import (
    CastError,
    InvalidClassError,
    InvalidPathError,
    InvalidRelationshipError,
    MalformedInputError,
)
from ..base import Resource
from .testing import (
    MockCastResource,
    MockNestedPathResource,
    MockRelatedResource,
    MockResource,
    MockSingletonResource,
)


class TestAttributes:
    def test_fill(self):
        resource = MockResource()
        assert resource.foo is None

        resource.fill(
            {
                "foo": "bar",
                "castable_attribute": {
                    "foo": "bar",
                    "john": "doe",
                },
            }
        )

        assert resource.foo == "bar"
        assert resource.castable_attribute == {"foo": "bar", "john": "doe"}

    def test_fill_returns_resource(self):
        resource = MockResource()
        assert resource.fill({"foo": "bar"}) is resource

    @pytest.mark.parametrize("data", ["not-a-dict", ["foo", "bar"], 1])
    def test_fill_malformed(self, data):
        with pytest.raises(MalformedInputError, match="malformed data"):
            MockResource().fill(data)
        with pytest.raises(TypeError):
            MockResource(data)

    def test_get_unknown(self):
        resource = MockResource({"foo": "bar"})
        assert resource.get("unknown") is None
        assert resource.get("unknown", 1) == 1
        assert resource.unknown is None
        with pytest.raises(KeyError):
            resource["unknown"]

    def test_set_through_attribute_and_item(self):
        resource = MockResource()
        resource.id = 1
        resource["name"] = "John"
        assert resource["id"] == 1
        assert resource.get("name") == "John"
        assert "id" in resource
        assert list(resource) == ["id", "name"]
        assert len(resource) == 2

    def test_dunder_attributes_raise(self):
        with pytest.raises(AttributeError):
            MockResource().__missing__

    def test_underscore_payload_keys(self):
        links = {"self": "/resources/1"}
        resource = MockResource({"_links": links})
        assert resource._links == links
        assert resource._missing is None

        resource._embedded = {"cards": []}
        assert resource["_embedded"] == {"cards": []}
        assert resource.to_dict() == {"_links": links, "_embedded": {"cards": []}}

    def test_fill_with_castable_attribute(self):
        resource = MockCastResource()
        resource.fill(
            {
                "foo": "bar",
                "castable_attribute": {
                    "foo": "bar",
                    "john": "doe",
                },
            }
        )

        assert isinstance(resource.castable_attribute, MockResource)
        assert resource.castable_attribute.foo == "bar"
        assert resource.castable_attribute.john == "doe"

    def test_replacing_cast_attribute(self):
        resource = MockCastResource({"castable_attribute": {"foo": "bar"}})
        first = resource.castable_attribute
        resource.castable_attribute = {"lorem": "ipsum"}
        assert resource.castable_attribute is not first
        assert resource.castable_attribute.to_dict() == {"lorem": "ipsum"}

    def test_cast_accepts_resource_of_target_kind(self):
        nested = MockResource({"foo": "bar"})
        resource = MockCastResource({"castable_attribute": nested})
        assert resource.castable_attribute is nested

    def test_fill_castable_invalid_class_name(self):
        class Target(MockResource):
            cast = {"castable_attribute": "NotExistentClassName"}

        with pytest.raises(CastError) as e:
            Target({"castable_attribute": {"foo": "bar", "john": "doe"}})
        assert (
            e.value.message == "Could not cast castable_attribute. NotExistentClassName doesn't exist"
        )
        assert e.value.attribute == "castable_attribute"

    def test_fill_castable_not_a_resource(self):
        class Target(MockResource):
            cast = {"castable_attribute": object}

        with pytest.raises(CastError) as e:
            Target({"castable_attribute": {"foo": "bar", "john": "doe"}})
        assert e.value.message == "Could not cast castable_attribute. object is not a Resource child"

    def test_fill_castable_abstract_resource(self):
        with pytest.raises(CastError):

            class Target(MockResource):
                cast = {"castable_attribute": Resource}

            Target({"castable_attribute": {}})

    def test_fill_castable_not_valid_dataset(self):
        with pytest.raises(CastError, match="is not a valid data set"):
            MockCastResource({"castable_attribute": "not_an_array"})

    def test_equality(self):
        assert MockResource({"foo": "bar"}) == MockResource({"foo": "bar"})
        assert MockResource({"foo": "bar"}) != MockResource({"foo": "baz"})
        assert MockResource({"foo": "bar"}) != MockCastResource({"foo": "bar"})


class TestToDict:
    def test_empty(self):
        assert MockResource().to_dict() == {}

    def test_linear_data(self):
        data = {"foo": "bar"}
        assert MockResource(data).to_dict() == data

    def test_multidimensional_data(self):
        data = {
            "foo": "bar",
            "lorem_ipsum": {
                "foo": "bar",
                "john": "doe",
            },
            "list": [1, 2, {"a": "b"}],
        }
        assert MockResource(data).to_dict() == data

    def test_with_cast_attributes(self):
        data = {
            "foo": "bar",
            "castable_attribute": {
                "foo": "bar",
                "nested": {"john": "doe"},
            },
        }
        resource = MockCastResource(data)
        assert isinstance(resource.castable_attribute, MockResource)
        assert resource.to_dict() == data

    def test_keeps_insertion_order(self):
        resource = MockCastResource({"z": 1, "castable_attribute": {"b": 1, "a": 2}, "a": 3})
        result = resource.to_dict()
        assert list(result) == ["z", "castable_attribute", "a"]
        assert list(result["castable_attribute"]) == ["b", "a"]


class TestPaths:
    def test_get_base_path(self):
        assert MockResource.get_base_path() == "/resources"

    @pytest.mark.parametrize("base_path", [None, "", "/", "resources", "/with space", "/foo\n", 1])
    def test_invalid_base_path(self, base_path):
        class Target(Resource):
            pass

        Target.base_path = base_path

        with pytest.raises(InvalidPathError) as e:
            Target.get_base_path()
        assert e.value.message == "Target base_path seems to be invalid"
        assert e.value.kind == "Target"

    def test_singleton_remote_path(self):
        resource = MockSingletonResource({"name": "ACME"})
        assert resource.get_remote_path() == "/resource"

    def test_get_remote_path(self):
        resource = MockResource()

        resource.id = 42
        assert resource.get_remote_path() == "/resources/42"

        resource.id = "a-string"
        assert resource.get_remote_path() == "/resources/a-string"

        resource.id = "a string with spaces"
        assert resource.get_remote_path() == "/resources/a+string+with+spaces"

        resource.id = "a/b&c"
        assert resource.get_remote_path() == "/resources/a%2Fb%26c"

    @pytest.mark.parametrize("data", [{}, {"id": None}])
    def test_get_remote_path_missing_placeholder(self, data):
        with pytest.raises(InvalidPathError) as e:
            MockResource(data).get_remote_path()
        assert e.value.message == "MockResource id is not defined"

    def test_get_remote_path_multiple_placeholders(self):
        resource = MockNestedPathResource({"wallet_id": "W 1", "id": 7})
        assert resource.get_remote_path() == "/wallets/W+1/cards/7"

        with pytest.raises(InvalidPathError, match="wallet_id is not defined"):
            MockNestedPathResource({"id": 7}).get_remote_path()

    def test_invalid_path(self):
        class Target(MockResource):
            path = "{id} with spaces"

        with pytest.raises(InvalidPathError, match="path seems to be invalid"):
            Target({"id": 1}).get_remote_path()

    def test_get_relationship_remote_path(self):
        resource = MockRelatedResource({"id": 1})
        assert resource.get_relationship_remote_path("resources") == "/resources/1/resources"

    def test_get_relationship_remote_path_undefined(self):
        with pytest.raises(InvalidRelationshipError):
            MockResource({"id": 1}).get_relationship_remote_path("resources")


class TestRelationships:
    def test_not_mapped_relationship(self):
        with pytest.raises(InvalidRelationshipError) as e:
            MockResource().build_relationship("resources", {})
        assert e.value.message == 'There is no relationship mapped with "resources" name'

    def test_invalid_class_name(self):
        class Target(MockResource):
            relationships = {"resources": "InvalidClassName"}

        with pytest.raises(InvalidClassError) as e:
            Target().build_relationship("resources", {"resources": []})
        assert e.value.message == "Invalid resource class name InvalidClassName doesn't exist"

    def test_raw_data_not_a_dict(self):
        with pytest.raises(InvalidRelationshipError):
            MockRelatedResource().build_relationship("resources", "not-an-array")

    def test_missing_key(self):
        with pytest.raises(InvalidRelationshipError):
            MockRelatedResource().build_relationship("resources", {})

    @pytest.mark.parametrize(
        "raw_data",
        [
            {"resources": {"foo": "bar"}},
            {"resources": ["foo", "bar"]},
            {"resources": "foo"},
        ],
    )
    def test_not_a_list_of_data_sets(self, raw_data):
        with pytest.raises(InvalidRelationshipError):
            MockRelatedResource().build_relationship("resources", raw_data)

    def test_empty(self):
        assert MockRelatedResource().build_relationship("resources", {"resources": []}) == []

    def test_build_relationship(self):
        resources = MockRelatedResource().build_relationship(
            "resources",
            {
                "resources": [
                    {"foo": "bar"},
                    {"lorem": "ipsum"},
                ]
            },
        )

        assert len(resources) == 2
        assert all(isinstance(r, MockResource) for r in resources)
        assert resources[0].foo == "bar"
        assert resources[1].lorem == "ipsum"


class TestWhiteList:
    def test_filter_white_list(self):
        assert MockRelatedResource.filter_white_list({"foo": 1, "bar": 2}) == {"foo": 1}

    def test_nothing_white_listed(self):
        assert MockResource.filter_white_list({"foo": 1}) == {}


class TestFingerprint:
    def test_token_appended(self):
        resource = MockResource({"id": "abc", "name": "John", "amount": 12.5})
        expected = hashlib.sha512(b"abcJohn12.5secret").hexdigest()
        assert resource.build_fingerprint(["id", "name", "amount"], "secret") == expected

    def test_token_placement(self):
        resource = MockResource({"id": "abc", "name": "John"})
        expected = hashlib.sha512(b"abcsecretJohn").hexdigest()
        assert resource.build_fingerprint(["id", "token", "name"], "secret") == expected

    def test_missing_and_boolean_values(self):
        resource = MockResource({"id": "abc", "active": True, "blocked": False})
        expected = hashlib.sha512(b"abc1secret").hexdigest()
        assert (
            resource.build_fingerprint(["id", "unknown", "active", "blocked"], "secret")
            == expected
        )

    def test_algorithm(self):
        class Target(MockResource):
            fingerprint_algorithm = "sha256"

        expected = hashlib.sha256(b"abcsecret").hexdigest()
        assert Target({"id": "abc"}).build_fingerprint(["id"], "secret") == expected
