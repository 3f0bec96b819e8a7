"""
HTTP transport for the Soldo business API, authenticated with OAuth client
credentials.
"""
import dataclasses
import logging
import time
import typing

import httpx

from .client import Transport
from .exceptions import SoldoSDKError, TransportError
from .types import JSONObject, JSONValue

logger = logging.getLogger(__name__)

ENVIRONMENTS: typing.Mapping[str, str] = {
    "demo": "https://api-demo.soldocloud.net",
    "live": "https://api.soldo.com",
}
API_PREFIX = "/business/v1"
TOKEN_PATH = "/oauth/authorize"

# renew the token slightly before the API expires it
EXPIRY_MARGIN = 30.0

# lifetime assumed when the token response carries no expires_in
DEFAULT_TOKEN_LIFETIME = 3600.0


@dataclasses.dataclass
class OAuthCredential:
    client_id: str
    client_secret: str
    access_token: typing.Optional[str] = None
    expires_at: typing.Optional[float] = None

    def is_valid(self, now: typing.Optional[float] = None) -> bool:
        if self.access_token is None or self.expires_at is None:
            return False
        return (now if now is not None else time.monotonic()) < self.expires_at

    def update(self, access_token: str, expires_in: float, now: typing.Optional[float] = None) -> None:
        self.access_token = access_token
        self.expires_at = (now if now is not None else time.monotonic()) + expires_in - EXPIRY_MARGIN


class HTTPTransport(Transport):
    """
    A :py:class:`~soldo.client.Transport` backed by :py:class:`httpx.Client`.

    :param OAuthCredential credential: the client credentials.
    :param str environment: ``demo`` or ``live``.
    :param Optional[httpx.Client] http_client: the HTTP client to use; one is
        created when omitted.
    :param float timeout: the timeout of a created HTTP client, in seconds.
    """

    credential: OAuthCredential
    base_url: str
    _http: httpx.Client

    def authenticate(self) -> str:
        try:
            response = self._http.post(
                self.base_url + TOKEN_PATH,
                data={
                    "client_id": self.credential.client_id,
                    "client_secret": self.credential.client_secret,
                },
            )
            response.raise_for_status()
            body = response.json()
            expires_in = body.get("expires_in")
            if expires_in is None:
                logger.warning(
                    "token response carries no expires_in, assuming %d seconds",
                    DEFAULT_TOKEN_LIFETIME,
                )
                expires_in = DEFAULT_TOKEN_LIFETIME
            self.credential.update(body["access_token"], float(expires_in))
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"OAuth authentication failed: {e.response.status_code} {e.response.text}",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error during OAuth authentication: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise TransportError(f"OAuth authentication returned an unexpected response: {e}") from e

        logger.info("obtained a new access token for client %s", self.credential.client_id)
        return typing.cast(str, self.credential.access_token)

    def get_access_token(self) -> str:
        if self.credential.is_valid():
            return typing.cast(str, self.credential.access_token)
        return self.authenticate()

    def request(
        self,
        method: str,
        path: str,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        json: typing.Optional[JSONObject] = None,
    ) -> JSONValue:
        token = self.get_access_token()
        url = self.base_url + API_PREFIX + path
        try:
            response = self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"API request {method} {path} failed: {e.response.status_code} {e.response.text}",
                e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error during {method} {path}: {e}") from e
        except ValueError as e:
            raise TransportError(f"API request {method} {path} returned a non JSON body") from e

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __init__(
        self,
        credential: OAuthCredential,
        environment: str = "demo",
        http_client: typing.Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        try:
            self.base_url = ENVIRONMENTS[environment]
        except KeyError:
            raise SoldoSDKError(f'Unknown environment "{environment}"') from None
        self.credential = credential
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)
