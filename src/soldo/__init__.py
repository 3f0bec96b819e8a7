from .client import SoldoClient, Transport  # noqa
from .config import Config  # noqa
from .event import EventType, SoldoEvent  # noqa
from .exceptions import (  # noqa
    CastError,
    InvalidClassError,
    InvalidCollectionError,
    InvalidEventError,
    InvalidPathError,
    InvalidRelationshipError,
    MalformedInputError,
    SoldoError,
    SoldoSDKError,
    TransportError,
)
from .registry import ResourceRegistry, registry  # noqa
from .resources import Collection, Resource  # noqa
from .soldo import Soldo  # noqa
from .transport import HTTPTransport, OAuthCredential  # noqa
