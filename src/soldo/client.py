import abc
import logging
import typing

from .exceptions import InvalidClassError
from .registry import KindRef, registry
from .resources.base import Resource
from .resources.collection import Collection
from .resources.collections import COLLECTIONS
from .types import JSONObject, JSONValue

logger = logging.getLogger(__name__)

CollectionRef = typing.Union[str, typing.Type[Collection]]


class Transport(metaclass=abc.ABCMeta):
    """
    Performs requests against the API and returns the decoded response body.
    """

    @abc.abstractmethod
    def request(
        self,
        method: str,
        path: str,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        json: typing.Optional[JSONObject] = None,
    ) -> JSONValue:
        ...  # pragma: nocover


def resolve_collection(ref: CollectionRef) -> typing.Type[Collection]:
    if isinstance(ref, str):
        try:
            return COLLECTIONS[ref]
        except KeyError:
            raise InvalidClassError(ref, f"{ref} doesn't exist") from None
    return ref


class SoldoClient:
    """
    Translates resource level operations into transport requests.

    :param Transport transport: the transport doing the actual requests.
    """

    transport: Transport

    def _request(
        self,
        method: str,
        path: str,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        json: typing.Optional[JSONObject] = None,
    ) -> JSONValue:
        logger.debug("%s %s", method, path)
        return self.transport.request(method, path, params=params, json=json)

    def get_collection(
        self,
        collection_type: CollectionRef,
        search_fields: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> Collection:
        collection = resolve_collection(collection_type)()
        envelope = self._request("GET", collection.get_remote_path(), params=search_fields)
        return collection.fill(typing.cast(JSONObject, envelope))

    def get_item(self, resource_type: KindRef, id: typing.Any = None) -> Resource:
        resource = registry.resolve(resource_type)({} if id is None else {"id": id})
        data = self._request("GET", resource.get_remote_path())
        return resource.fill(typing.cast(JSONObject, data))

    def update_item(self, resource_type: KindRef, id: typing.Any, data: JSONObject) -> Resource:
        """
        Sends the white listed part of ``data`` to the resource and returns it
        as updated by the API.
        """
        kind = registry.resolve(resource_type)
        resource = kind({"id": id})
        payload = kind.filter_white_list(data)
        if not payload:
            logger.warning("nothing to update on %s %s: no white listed field given", kind.__name__, id)
        updated = self._request("PUT", resource.get_remote_path(), json=payload)
        return resource.fill(typing.cast(JSONObject, updated))

    def get_relationship(
        self, resource_type: KindRef, id: typing.Any, relationship_name: str
    ) -> typing.List[Resource]:
        resource = registry.resolve(resource_type)({"id": id})
        raw_data = self._request("GET", resource.get_relationship_remote_path(relationship_name))
        return resource.build_relationship(relationship_name, raw_data)

    def __init__(self, transport: Transport):
        self.transport = transport
