from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from .messages import (
    BatchSendRequest,
    FileUploadRequest,
    MessageListRequest,
    MultipleMessageSendingRequest,
    SingleMessageSendingRequest,
)


@dataclass(frozen=True)
class GatewayResponse:
    """Raw outcome of one provider call.

    Attributes:
        status_code: HTTP status returned by the provider.
        body: Parsed JSON body, or None when the body was empty, `null` or not JSON.
        text: Raw response text, kept for error reporting.
    """

    status_code: int
    body: Optional[Any] = None
    text: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class TransportGateway(Protocol):
    """Protocol for the HTTP boundary consumed by `MessageService`.

    Implementations attach a freshly signed Authorization header to every call
    and return a `GatewayResponse` for any HTTP status; only network-level
    failures raise. Connection reuse, TLS and timeouts are theirs to own.

    Minimal example:
        >>> from msgclient.types import GatewayResponse, TransportGateway
        >>> class StaticTransport(TransportGateway):
        ...     def get_balance(self) -> GatewayResponse:
        ...         return GatewayResponse(200, {"balance": 1000, "point": 0})
        ...     # remaining operations omitted
    """

    def upload_file(self, request: FileUploadRequest) -> GatewayResponse:
        """POST an attachment (already base64 encoded) to storage."""
        ...

    def list_messages(self, query: Dict[str, str]) -> GatewayResponse:
        """GET the message list with flat string filters."""
        ...

    def send_single(self, request: SingleMessageSendingRequest) -> GatewayResponse:
        ...

    def send_many(self, request: MultipleMessageSendingRequest) -> GatewayResponse:
        ...

    def send_batch_detailed(self, request: BatchSendRequest) -> GatewayResponse:
        """Submit a batch and receive per-message failure detail."""
        ...

    def get_balance(self) -> GatewayResponse:
        ...

    def close(self) -> None:
        """Release the underlying connection resources."""
        ...
