import abc
import hashlib
import logging
import re
import typing
import urllib.parse
from collections import OrderedDict

from ..exceptions import (
    CastError,
    InvalidClassError,
    InvalidPathError,
    InvalidRelationshipError,
    MalformedInputError,
)
from ..registry import KindRef, registry
from ..types import JSONObject
from ..utils import is_dataset, is_sequence_of_datasets

logger = logging.getLogger(__name__)

PATH_PATTERN = re.compile(r"/\S+")
PLACEHOLDER_PATTERN = re.compile(r"\{(\S+?)\}")

FINGERPRINT_TOKEN = "token"
"""
Entry of a fingerprint order that stands for the shared secret.
"""


def _is_reserved(name: str) -> bool:
    # payload keys such as "_links" stay reachable as attributes
    return name == "_attributes" or (name.startswith("__") and name.endswith("__"))


class Resource(metaclass=abc.ABCMeta):
    """
    A :py:class:`Resource` is the local representation of one remote entity.

    Attributes are stored in insertion order and are reachable both as
    Python attributes (``card.id``) and as items (``card["id"]``).  Reading
    an attribute that was never set yields :py:const:`None`.

    Concrete kinds are pure configuration:

    * ``base_path``: the remote path of the kind's list, e.g. ``/wallets``.
    * ``path``: a template appended to ``base_path`` to address one instance,
      e.g. ``/{id}``.  :py:const:`None` makes the instance live at ``base_path``.
    * ``white_listed``: the attributes that may be sent back on update.
    * ``relationships``: relationship name to resource kind.
    * ``cast``: attribute name to resource kind; values of those attributes
      are turned into resources of that kind when set.
    * ``event_type``: the label reported by webhook events carrying the kind.
    * ``fingerprint_algorithm``: the :py:mod:`hashlib` algorithm used by
      :py:meth:`build_fingerprint`.

    Kinds may be given as classes or as names known to the registry.
    """

    __abstract__ = True

    base_path: typing.ClassVar[typing.Optional[str]] = None
    path: typing.ClassVar[typing.Optional[str]] = None
    white_listed: typing.ClassVar[typing.Sequence[str]] = ()
    relationships: typing.ClassVar[typing.Mapping[str, KindRef]] = {}
    cast: typing.ClassVar[typing.Mapping[str, KindRef]] = {}
    event_type: typing.ClassVar[typing.Optional[str]] = None
    fingerprint_algorithm: typing.ClassVar[str] = "sha512"

    _attributes: typing.MutableMapping[str, typing.Any]

    def fill(self, data: JSONObject) -> "Resource":
        """
        Populates the resource with the pairs in ``data``, in order.

        :param Mapping[str, Any] data: the raw payload.
        :return: the resource itself.
        :raises MalformedInputError: if ``data`` is not a mapping.
        """
        if not is_dataset(data):
            raise MalformedInputError("Trying to fill resource with malformed data")

        for name, value in data.items():
            self.set(name, value)

        return self

    def set(self, name: str, value: typing.Any) -> None:
        if name in self.cast:
            value = self._cast(name, value)
        self._attributes[name] = value

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        return self._attributes.get(name, default)

    def _cast(self, name: str, value: typing.Any) -> "Resource":
        try:
            kind = registry.resolve(self.cast[name])
        except InvalidClassError as e:
            raise CastError(name, e.message) from e

        if isinstance(value, kind):
            return value
        if not is_dataset(value):
            raise CastError(name, f"{value!r} is not a valid data set")
        return kind(value)

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        """
        Returns the attributes as a plain dictionary, unwrapping cast
        attributes recursively.
        """
        return {
            name: value.to_dict() if name in self.cast and isinstance(value, Resource) else value
            for name, value in self._attributes.items()
        }

    @classmethod
    def filter_white_list(cls, data: JSONObject) -> typing.Dict[str, typing.Any]:
        """
        Drops every key of ``data`` that is not white listed for update.
        """
        return {name: value for name, value in data.items() if name in cls.white_listed}

    @classmethod
    def get_base_path(cls) -> str:
        if not isinstance(cls.base_path, str) or PATH_PATTERN.fullmatch(cls.base_path) is None:
            raise InvalidPathError(cls.__name__, "base_path seems to be invalid")
        return cls.base_path

    @classmethod
    def get_event_type(cls) -> typing.Optional[str]:
        return cls.event_type

    def get_remote_path(self) -> str:
        """
        Returns the full remote path of this instance.

        :raises InvalidPathError: if a path is malformed or one of its
            placeholders refers to an attribute that is not set.
        """
        base_path = self.get_base_path()
        if self.path is None:
            return base_path
        return base_path + self._resolve_path(self.path)

    def _resolve_path(self, path: str) -> str:
        kind = type(self).__name__
        if PATH_PATTERN.fullmatch(path) is None:
            raise InvalidPathError(kind, "path seems to be invalid")

        def substitute(match: "re.Match") -> str:
            name = match.group(1)
            value = self._attributes.get(name)
            if value is None:
                raise InvalidPathError(kind, f"{name} is not defined")
            return urllib.parse.quote_plus(str(value))

        return PLACEHOLDER_PATTERN.sub(substitute, path)

    def _get_relationship_kind(self, name: str) -> typing.Type["Resource"]:
        try:
            ref = self.relationships[name]
        except KeyError:
            raise InvalidRelationshipError(
                f'There is no relationship mapped with "{name}" name'
            ) from None

        try:
            return registry.resolve(ref)
        except InvalidClassError as e:
            raise InvalidClassError(e.name, f"Invalid resource class name {e.message}") from e

    def get_relationship_remote_path(self, name: str) -> str:
        kind = self._get_relationship_kind(name)
        return self.get_remote_path() + kind.get_base_path()

    def build_relationship(self, name: str, raw_data: typing.Any) -> typing.List["Resource"]:
        """
        Builds the resources found under ``raw_data[name]``, keeping their order.

        :param str name: a relationship declared in ``relationships``.
        :param Mapping[str, Any] raw_data: the payload holding the relationship.
        :return: a list of resources of the related kind, possibly empty.
        :raises InvalidRelationshipError: if the relationship is not declared, or
            ``raw_data`` does not carry a list of data sets under ``name``.
        :raises InvalidClassError: if the related kind cannot be resolved.
        """
        kind = self._get_relationship_kind(name)

        if (
            not is_dataset(raw_data)
            or name not in raw_data
            or not is_sequence_of_datasets(raw_data[name])
        ):
            raise InvalidRelationshipError("Trying to build a relationship with invalid data")

        related = [kind(data) for data in raw_data[name]]
        logger.debug(
            "built %d %s for %s relationship %s",
            len(related),
            kind.__name__,
            type(self).__name__,
            name,
        )
        return related

    def build_fingerprint(
        self, fingerprint_order: typing.Iterable[str], internal_token: str
    ) -> str:
        """
        Computes the fingerprint of this resource as signed by the API.

        The string form of each attribute named in ``fingerprint_order`` is
        concatenated; the entry ``token`` is replaced by ``internal_token``,
        which is appended last when the order does not mention it.  The
        result is hashed with ``fingerprint_algorithm`` and hex encoded.
        """
        order = list(fingerprint_order)
        parts = []
        for name in order:
            if name == FINGERPRINT_TOKEN:
                parts.append(internal_token)
            else:
                parts.append(self._fingerprint_value(self._attributes.get(name)))
        if FINGERPRINT_TOKEN not in order:
            parts.append(internal_token)

        digest = hashlib.new(self.fingerprint_algorithm)
        digest.update("".join(parts).encode("utf-8"))
        return digest.hexdigest()

    @staticmethod
    def _fingerprint_value(value: typing.Any) -> str:
        """
        Renders one attribute the way the API renders it when signing:
        :py:const:`None` and ``False`` become an empty string, ``True``
        becomes ``"1"``.
        """
        if value is None or value is False:
            return ""
        if value is True:
            return "1"
        return str(value)

    def __getattr__(self, name: str) -> typing.Any:
        # only reached when normal lookup fails
        if _is_reserved(name):
            raise AttributeError(name)
        return self._attributes.get(name)

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if _is_reserved(name):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __getitem__(self, name: str) -> typing.Any:
        return self._attributes[name]

    def __setitem__(self, name: str, value: typing.Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"

    def __init__(self, data: typing.Optional[JSONObject] = None) -> None:
        self._attributes = OrderedDict()
        self.fill(data if data is not None else {})
