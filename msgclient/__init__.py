"""Client library for a messaging dispatch service."""

from .auth import AuthHeader, Credentials, Signer, sign
from .reconciler import ErrorCodeTable, ResponseReconciler, classify
from .service import MessageService
from .transport import HttpTransport
from .types import (
    Balance,
    BatchSendResult,
    ErrorKind,
    FailedMessage,
    Message,
    MessageListRequest,
    MessageType,
    MessagingError,
    Outcome,
    OutcomeStatus,
    StorageType,
)

__all__ = [
    "AuthHeader",
    "Credentials",
    "Signer",
    "sign",
    "ErrorCodeTable",
    "ResponseReconciler",
    "classify",
    "MessageService",
    "HttpTransport",
    "Balance",
    "BatchSendResult",
    "ErrorKind",
    "FailedMessage",
    "Message",
    "MessageListRequest",
    "MessageType",
    "MessagingError",
    "Outcome",
    "OutcomeStatus",
    "StorageType",
]
