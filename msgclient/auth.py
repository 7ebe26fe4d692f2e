"""HMAC request signing.

Every request carries an Authorization header of the form

    HMAC-SHA256 apiKey=<key>, date=<ISO-8601 UTC>, salt=<nonce>, signature=<hex>

where `signature = HMAC-SHA256(secret, date + salt)`. The provider re-derives
the signature from the same fields, so date and salt travel in clear text and
must be fresh for each request.
"""

from __future__ import annotations

import hashlib
import hmac
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generator, Optional

import httpx

from msgclient.types import ErrorKind, MessagingError

SCHEME = "HMAC-SHA256"


@dataclass(frozen=True)
class Credentials:
    api_key: str
    api_secret_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise MessagingError(ErrorKind.INVALID_CREDENTIALS, "API key is missing")
        if not self.api_secret_key or not self.api_secret_key.strip():
            raise MessagingError(ErrorKind.INVALID_CREDENTIALS, "API secret key is missing")


@dataclass(frozen=True)
class AuthHeader:
    api_key: str
    date: str
    salt: str
    signature: str
    scheme: str = SCHEME

    def render(self) -> str:
        return (
            f"{self.scheme} apiKey={self.api_key}, date={self.date}, "
            f"salt={self.salt}, signature={self.signature}"
        )

    def __str__(self) -> str:
        return self.render()


def format_date(now: datetime) -> str:
    """Render `now` as ISO-8601 in UTC with a `Z` suffix. Naive values are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_salt() -> str:
    return uuid.uuid4().hex


def compute_signature(api_secret_key: str, date: str, salt: str) -> str:
    return hmac.new(
        api_secret_key.encode("utf-8"),
        (date + salt).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def sign(
    api_key: str,
    api_secret_key: str,
    now: Optional[datetime] = None,
    salt: Optional[str] = None,
) -> AuthHeader:
    """Build an AuthHeader.

    `now` and `salt` default to the current time and a random nonce; pass both
    to get a reproducible header.
    """
    date = format_date(now or datetime.now(timezone.utc))
    salt = salt or new_salt()
    return AuthHeader(
        api_key=api_key,
        date=date,
        salt=salt,
        signature=compute_signature(api_secret_key, date, salt),
    )


class Signer:
    """Binds Credentials so callers only supply the time/nonce sources."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    def sign(self, now: Optional[datetime] = None, salt: Optional[str] = None) -> AuthHeader:
        return sign(self._credentials.api_key, self._credentials.api_secret_key, now, salt)


class SignatureAuth(httpx.Auth):
    """httpx auth flow that signs each outgoing request independently."""

    def __init__(self, signer: Signer) -> None:
        self._signer = signer

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._signer.sign().render()
        yield request
