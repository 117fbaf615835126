"""Authentication and signing utilities for the Buda API."""

import base64
import hashlib
import hmac
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..errors import AuthenticationError
from ..utils.config import Config
from ..utils.timing import get_timestamp_us

API_KEY_HEADER = "X-SBTC-APIKEY"
NONCE_HEADER = "X-SBTC-NONCE"
SIGNATURE_HEADER = "X-SBTC-SIGNATURE"

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class Credentials:
    """API key pair owned by a single client."""

    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"

    @classmethod
    def from_env(cls) -> "Credentials | None":
        """Credentials from BUDA_API_KEY / BUDA_API_SECRET, or None if unset."""
        if not Config.validate():
            return None
        return cls(Config.API_KEY, Config.API_SECRET)


def sign(parts: Sequence[str], secret: str) -> str:
    """
    Sign request parts using HMAC-SHA384.

    Args:
        parts: Ordered request parts, joined with single spaces
        secret: API secret used as the HMAC key

    Returns:
        Lowercase hex digest
    """
    message = " ".join(parts)
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha384,
    ).hexdigest()


def signature_parts(
    method: str, request_uri: str, nonce: int, body: bytes | None = None
) -> list[str]:
    """
    Build the ordered parts signed for a request.

    GET:  [method, uri, nonce]
    POST: [method, uri, base64(body), nonce]
    """
    method = method.upper()
    if method in BODY_METHODS:
        encoded_body = base64.b64encode(body or b"").decode("ascii")
        return [method, request_uri, encoded_body, str(nonce)]
    return [method, request_uri, str(nonce)]


class NonceGenerator:
    """Strictly increasing microsecond nonces.

    Uses the wall clock, but never hands out a value less than or equal to the
    previous one, so requests signed back to back (or from several tasks or
    threads) still arrive with distinct, increasing nonces.
    """

    def __init__(self, clock: Callable[[], int] = get_timestamp_us):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            nonce = max(self._clock(), self._last + 1)
            self._last = nonce
            return nonce


class Authenticator:
    """Produces the identity, nonce and signature headers for private requests."""

    def __init__(
        self,
        credentials: Credentials | None,
        nonce_generator: NonceGenerator | None = None,
    ):
        self.credentials = credentials
        self._next_nonce = nonce_generator or NonceGenerator()

    @property
    def has_credentials(self) -> bool:
        return bool(
            self.credentials and self.credentials.api_key and self.credentials.api_secret
        )

    def authenticate(
        self, method: str, request_uri: str, body: bytes | None = None
    ) -> dict[str, str]:
        """
        Get authentication headers for a request.

        Args:
            method: HTTP method
            request_uri: Path and query exactly as sent (e.g. "/api/v2/balances")
            body: Request body bytes for methods that carry one

        Returns:
            Dictionary of headers

        Raises:
            AuthenticationError: If no credentials are configured
        """
        if not self.has_credentials:
            raise AuthenticationError("API credentials are required for this endpoint")

        nonce = self._next_nonce()
        signature = sign(
            signature_parts(method, request_uri, nonce, body),
            self.credentials.api_secret,
        )
        return {
            API_KEY_HEADER: self.credentials.api_key,
            NONCE_HEADER: str(nonce),
            SIGNATURE_HEADER: signature,
        }
