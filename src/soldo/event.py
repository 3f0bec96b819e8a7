"""
Webhook events.

Soldo signs every webhook notification with a fingerprint: a digest over a
subset of the resource's fields, in an order given out of band, plus the
internal token shared with the receiver.  :py:class:`SoldoEvent` rebuilds the
resource from the notification and only accepts it when the fingerprints match.
"""
import enum
import hmac
import logging
import typing

from .exceptions import InvalidEventError
from .registry import registry
from .resources.base import Resource
from .types import JSONObject
from .utils import english_enumerate, is_dataset

logger = logging.getLogger(__name__)


class EventType(enum.Enum):
    CARD = "Card"
    TRANSACTION = "Transaction"
    EMPLOYEE = "Employee"

    @classmethod
    def values(cls) -> typing.Sequence[str]:
        return [member.value for member in cls]


def parse_fingerprint_order(fingerprint_order: str) -> typing.List[str]:
    return [name.strip() for name in fingerprint_order.split(",") if name.strip()]


class SoldoEvent:
    """
    An authenticated webhook notification.

    :param Mapping[str, Any] data: the decoded webhook body, holding
        ``event_type``, ``event_name`` and ``data``.
    :param str fingerprint: the fingerprint sent along with the notification.
    :param str fingerprint_order: the comma separated attribute names the
        fingerprint was computed over.
    :param str internal_token: the secret shared with Soldo.
    :raises InvalidEventError: if the body is malformed, the event type is not
        supported, or the fingerprint cannot be verified.
    """

    _type: typing.Optional[str]
    _name: str
    _resource: Resource

    def type(self) -> typing.Optional[str]:
        return self._type

    def name(self) -> str:
        return self._name

    def get(self) -> Resource:
        return self._resource

    @staticmethod
    def types() -> typing.Sequence[str]:
        return EventType.values()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self._type!r}, name={self._name!r})"

    def __init__(
        self,
        data: JSONObject,
        fingerprint: str,
        fingerprint_order: str,
        internal_token: str,
    ) -> None:
        if (
            not is_dataset(data)
            or not data.get("event_type")
            or not data.get("event_name")
            or not is_dataset(data.get("data"))
        ):
            logger.warning("rejected webhook: invalid webhook data")
            raise InvalidEventError("Invalid webhook data")

        event_type = data["event_type"]
        try:
            EventType(event_type)
        except ValueError:
            logger.warning(
                "rejected webhook: event type %r is not one of %s",
                event_type,
                english_enumerate(self.types(), "or"),
            )
            raise InvalidEventError("Event type not supported") from None

        resource = registry.query_by_name(event_type)(data["data"])

        expected = resource.build_fingerprint(
            parse_fingerprint_order(fingerprint_order), internal_token
        )
        if not isinstance(fingerprint, str) or not hmac.compare_digest(
            fingerprint.encode("utf-8"), expected.encode("utf-8")
        ):
            logger.warning("rejected webhook %s: fingerprint mismatch", data["event_name"])
            raise InvalidEventError("Cannot verify the given fingerprint")

        self._resource = resource
        self._name = data["event_name"]
        self._type = resource.get_event_type()
        logger.debug("accepted webhook %s (%s)", self._name, self._type)
