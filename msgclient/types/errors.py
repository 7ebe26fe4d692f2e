from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

from pydantic import Field, field_validator

from .enums import ErrorKind
from .messages import WireModel
from .results import FailedMessage


class ErrorBody(WireModel):
    """Error payload the provider returns with any non-2xx status."""

    error_code: Optional[str] = Field(default=None, alias="errorCode")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    @field_validator("error_code", "error_message", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> Optional[str]:
        # some endpoints report numeric codes such as 1062
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class MessagingError(Exception):
    """Single error type raised by the client.

    The failure is identified by `kind`, not by subclass, so callers branch on
    it instead of catching one class per provider error:

        >>> try:
        ...     service.send(messages)
        ... except MessagingError as exc:
        ...     if exc.kind is ErrorKind.MESSAGE_NOT_RECEIVED:
        ...         for failed in exc.failed_messages:
        ...             print(failed.to, failed.error_code)

    Attributes:
        kind: ErrorKind of the failure.
        message: Human-readable message, verbatim from the provider when it sent one.
        error_code: Provider `errorCode`, when known.
        status_code: HTTP status of the response, when there was one.
        failed_messages: Rejected messages, populated for MESSAGE_NOT_RECEIVED.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        failed_messages: Iterable[FailedMessage] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.failed_messages: Tuple[FailedMessage, ...] = tuple(failed_messages)

    def __str__(self) -> str:
        if self.error_code:
            return f"{self.kind.value}: {self.error_code}: {self.message}"
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"MessagingError(kind={self.kind.value!r}, error_code={self.error_code!r}, "
            f"status_code={self.status_code!r}, failed={len(self.failed_messages)})"
        )
