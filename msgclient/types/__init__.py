"""Core types for the messaging client.

This package centralizes enums, request/response models, the error type and
the transport protocol in one place. Most modules should import types from
here rather than directly from submodules.

Usage:
    from msgclient.types import Message, BatchSendResult, MessagingError
"""

from .enums import ErrorKind, MessageType, OutcomeStatus, StorageType
from .messages import (
    BatchSendRequest,
    FileUploadRequest,
    KakaoOptions,
    Message,
    MessageListRequest,
    MultipleMessageSendingRequest,
    SingleMessageSendingRequest,
    WireModel,
)
from .results import (
    Balance,
    BatchSendResult,
    Count,
    FailedMessage,
    FileUploadResult,
    GroupInfo,
    MessageListResult,
    MessageReceipt,
    MultipleMessageSentResult,
    Outcome,
    ResponseModel,
    SingleSendResult,
)
from .errors import ErrorBody, MessagingError
from .protocols import GatewayResponse, TransportGateway

__all__ = [
    "ErrorKind",
    "MessageType",
    "OutcomeStatus",
    "StorageType",
    "WireModel",
    "Message",
    "KakaoOptions",
    "FileUploadRequest",
    "MessageListRequest",
    "SingleMessageSendingRequest",
    "MultipleMessageSendingRequest",
    "BatchSendRequest",
    "ResponseModel",
    "Count",
    "GroupInfo",
    "FailedMessage",
    "MessageReceipt",
    "BatchSendResult",
    "MultipleMessageSentResult",
    "SingleSendResult",
    "MessageListResult",
    "FileUploadResult",
    "Balance",
    "Outcome",
    "ErrorBody",
    "MessagingError",
    "GatewayResponse",
    "TransportGateway",
]
