"""
Resource kinds are referenced by name from cast maps, relationship maps,
collections and webhook events.  :py:class:`ResourceRegistry` turns those
references into concrete :py:class:`~soldo.resources.base.Resource` classes and
refuses anything else.
"""
import inspect
import typing

from .exceptions import InvalidClassError

if typing.TYPE_CHECKING:
    from .resources.base import Resource  # noqa: F401

KindRef = typing.Union[str, typing.Type["Resource"]]


def is_resource_kind(kind: typing.Any) -> bool:
    """
    Returns :py:const:`True` if ``kind`` is a concrete subclass of ``Resource``.

    A class is abstract when it declares ``__abstract__ = True`` in its own body
    or has unimplemented abstract methods.
    """
    from .resources.base import Resource

    return (
        isinstance(kind, type)
        and issubclass(kind, Resource)
        and not kind.__dict__.get("__abstract__", False)
        and not inspect.isabstract(kind)
    )


def kind_name(kind: typing.Any) -> str:
    if isinstance(kind, str):
        return kind
    return getattr(kind, "__name__", repr(kind))


class ResourceRegistry:
    _kinds: typing.Dict[str, typing.Type["Resource"]]

    def register(self, kind: typing.Type["Resource"]) -> typing.Type["Resource"]:
        """
        Registers ``kind`` under its class name.  Usable as a class decorator.
        """
        if not is_resource_kind(kind):
            raise InvalidClassError(kind, f"{kind_name(kind)} is not a concrete Resource")
        self._kinds[kind.__name__] = kind
        return kind

    def query_by_name(self, name: str) -> typing.Type["Resource"]:
        try:
            return self._kinds[name]
        except KeyError:
            raise InvalidClassError(name, f"{name} doesn't exist") from None

    def resolve(self, ref: KindRef) -> typing.Type["Resource"]:
        """
        Resolves a class or a registered name to a concrete resource kind.

        :param ref: a resource class or the name it was registered with.
        :raises InvalidClassError: if ``ref`` names nothing known, or the class is
            not a concrete resource.
        """
        kind = self.query_by_name(ref) if isinstance(ref, str) else ref
        if not is_resource_kind(kind):
            raise InvalidClassError(ref, f"{kind_name(ref)} is not a Resource child")
        return kind

    @property
    def names(self) -> typing.Sequence[str]:
        return sorted(self._kinds)

    def __contains__(self, name: str) -> bool:
        return name in self._kinds

    def __init__(self):
        self._kinds = {}


registry = ResourceRegistry()
