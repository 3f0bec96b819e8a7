import logging
import typing

from ..exceptions import InvalidClassError, InvalidCollectionError
from ..registry import KindRef, registry
from ..types import JSONObject
from ..utils import is_dataset, is_integer, is_sequence_of_datasets
from .base import Resource

logger = logging.getLogger(__name__)


class EnvelopeField(typing.NamedTuple):
    name: str
    expected: str
    check: typing.Callable[[typing.Any], bool]


ENVELOPE_FIELDS: typing.Sequence[EnvelopeField] = (
    EnvelopeField("total", "an integer", is_integer),
    EnvelopeField("pages", "an integer", is_integer),
    EnvelopeField("page_size", "an integer", is_integer),
    EnvelopeField("current_page", "an integer", is_integer),
    EnvelopeField("results_size", "an integer", is_integer),
    EnvelopeField("results", "a list of data sets", is_sequence_of_datasets),
)


class Collection:
    """
    A :py:class:`Collection` holds one page of a paginated list of resources.

    The envelope is validated as a whole by :py:meth:`fill` before any item is
    built.  A collection can be filled only once.

    :param item_type: the resource kind of the items, as a class or a
        registered name.  Subclasses may declare it as a class attribute instead.
    :raises InvalidClassError: if the item type does not resolve to a concrete
        resource kind.
    """

    item_type: typing.ClassVar[typing.Optional[KindRef]] = None

    _item_type: typing.Type[Resource]
    _items: typing.Optional[typing.List[Resource]]
    _pagination: typing.Dict[str, int]

    @property
    def item_kind(self) -> typing.Type[Resource]:
        return self._item_type

    @property
    def filled(self) -> bool:
        return self._items is not None

    @property
    def total(self) -> typing.Optional[int]:
        return self._pagination.get("total")

    @property
    def pages(self) -> typing.Optional[int]:
        return self._pagination.get("pages")

    @property
    def page_size(self) -> typing.Optional[int]:
        return self._pagination.get("page_size")

    @property
    def current_page(self) -> typing.Optional[int]:
        return self._pagination.get("current_page")

    @property
    def results_size(self) -> typing.Optional[int]:
        return self._pagination.get("results_size")

    def fill(self, envelope: JSONObject) -> "Collection":
        """
        Validates ``envelope`` and builds one item per entry of ``results``.

        :param Mapping[str, Any] envelope: the raw list response.
        :return: the collection itself.
        :raises InvalidCollectionError: if the collection was already filled, a
            pagination field is missing or mistyped, or ``results_size`` does not
            match the number of results.
        """
        if self._items is not None:
            raise InvalidCollectionError("Collection has already been filled")

        if not is_dataset(envelope):
            raise InvalidCollectionError("Trying to fill collection with malformed data")

        for field in ENVELOPE_FIELDS:
            if field.name not in envelope:
                raise InvalidCollectionError(f'Collection "{field.name}" is missing', field.name)
            if not field.check(envelope[field.name]):
                raise InvalidCollectionError(
                    f'Collection "{field.name}" must be {field.expected}', field.name
                )

        items = [self._item_type(data) for data in envelope["results"]]
        if len(items) != envelope["results_size"]:
            raise InvalidCollectionError(
                f"Collection results_size ({envelope['results_size']}) does not match "
                f"the number of results ({len(items)})",
                "results_size",
            )

        self._pagination = {
            field.name: envelope[field.name] for field in ENVELOPE_FIELDS if field.name != "results"
        }
        self._items = items
        logger.debug(
            "filled %s page %d/%d with %d items",
            type(self).__name__,
            self.current_page,
            self.pages,
            len(items),
        )
        return self

    def get(self) -> typing.List[Resource]:
        return list(self._items) if self._items is not None else []

    def get_remote_path(self) -> str:
        return self._item_type.get_base_path()

    def __iter__(self) -> typing.Iterator[Resource]:
        return iter(self.get())

    def __len__(self) -> int:
        return len(self._items) if self._items is not None else 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(item_type={self._item_type.__name__}, items={len(self)})"

    def __init__(self, item_type: typing.Optional[KindRef] = None) -> None:
        ref = item_type if item_type is not None else type(self).item_type
        if ref is None:
            raise InvalidClassError(None, "Could not generate a Soldo collection without an item type")
        try:
            self._item_type = registry.resolve(ref)
        except InvalidClassError as e:
            raise InvalidClassError(e.name, f"Could not generate a Soldo collection {e.message}") from e
        self._items = None
        self._pagination = {}
