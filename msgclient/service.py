from __future__ import annotations

import base64
import logging
import warnings
from datetime import datetime
from typing import Mapping, Optional, Sequence, Union

from msgclient.auth import Credentials, Signer
from msgclient.config import DEFAULT_DOMAIN, DEFAULT_TIMEOUT, Settings
from msgclient.reconciler import EMPTY_RESPONSE_MESSAGE, ErrorCodeTable, ResponseReconciler
from msgclient.transport import HttpTransport
from msgclient.types import (
    Balance,
    BatchSendRequest,
    BatchSendResult,
    ErrorKind,
    FileUploadRequest,
    FileUploadResult,
    Message,
    MessageListRequest,
    MessageListResult,
    MessagingError,
    MultipleMessageSendingRequest,
    MultipleMessageSentResult,
    SingleMessageSendingRequest,
    SingleSendResult,
    StorageType,
    TransportGateway,
)

logger = logging.getLogger("msgclient.service")


class MessageService:
    """Facade over signing, transport and response reconciliation.

    Credentials are validated once here; each call then signs, sends and maps
    the provider response to a typed result or a `MessagingError`.

    Example:
        >>> from msgclient import Message, MessageService
        >>> with MessageService("API_KEY", "API_SECRET") as service:
        ...     result = service.send(Message(to="01000000000", from_="029302266", text="Hi"))
        ...     for failed in result.failed_message_list:
        ...         print(failed.to, failed.error_message)
    """

    def __init__(
        self,
        api_key: str,
        api_secret_key: str,
        domain: str = DEFAULT_DOMAIN,
        *,
        transport: Optional[TransportGateway] = None,
        error_codes: Optional[Mapping[str, Union[ErrorKind, str]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._signer = Signer(Credentials(api_key, api_secret_key))
        self.transport: TransportGateway = transport or HttpTransport(
            self._signer, domain, timeout=timeout
        )
        self.reconciler = ResponseReconciler(ErrorCodeTable(error_codes))

    @classmethod
    def from_settings(cls, settings: Settings) -> "MessageService":
        return cls(
            settings.api_key or "",
            settings.api_secret_key or "",
            settings.domain,
            error_codes=settings.error_code_map,
            timeout=settings.timeout,
        )

    def __enter__(self) -> "MessageService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    def upload_file(
        self,
        content: bytes,
        file_type: StorageType = StorageType.MMS,
        link: Optional[str] = None,
    ) -> str:
        """Upload an attachment and return the provider's fileId.

        Any non-2xx response raises FILE_UPLOAD_FAILED with the provider message.
        """
        request = FileUploadRequest(
            file=base64.b64encode(content).decode("ascii"),
            type=file_type,
            link=link,
        )
        response = self.transport.upload_file(request)
        result = self.reconciler.unwrap(
            response, FileUploadResult, error_kind=ErrorKind.FILE_UPLOAD_FAILED
        )
        if not result.file_id:
            raise MessagingError(
                ErrorKind.EMPTY_RESPONSE,
                EMPTY_RESPONSE_MESSAGE,
                status_code=response.status_code,
            )
        logger.info("uploaded %s attachment (%d bytes) as %s", file_type.value, len(content), result.file_id)
        return result.file_id

    def get_message_list(self, params: Optional[MessageListRequest] = None) -> MessageListResult:
        query = (params or MessageListRequest()).to_query()
        response = self.transport.list_messages(query)
        return self.reconciler.unwrap(response, MessageListResult)

    def send_one(self, message: Message) -> SingleSendResult:
        """Send one message on the simple path; any rejection raises."""
        response = self.transport.send_single(SingleMessageSendingRequest(message=message))
        return self.reconciler.unwrap(response, SingleSendResult)

    def send(
        self,
        messages: Union[Message, Sequence[Message]],
        scheduled_at: Optional[datetime] = None,
        *,
        allow_duplicates: bool = False,
    ) -> BatchSendResult:
        """Send one or more messages, optionally scheduled.

        Always uses the detailed batch endpoint. When only some messages are
        rejected the result is returned and `failed_message_list` says which;
        when all of them are, MESSAGE_NOT_RECEIVED is raised carrying the
        same list.
        """
        batch = [messages] if isinstance(messages, Message) else list(messages)
        if not batch:
            raise ValueError("at least one message is required")
        request = BatchSendRequest(
            messages=batch,
            scheduled_date=scheduled_at,
            allow_duplicates=allow_duplicates,
        )
        logger.info(
            "sending %d message(s)%s",
            len(batch),
            f" scheduled for {request.scheduled_date.isoformat()}" if request.scheduled_date else "",
        )
        response = self.transport.send_batch_detailed(request)
        return self.reconciler.reconcile_batch(response)

    def send_many(
        self,
        messages: Sequence[Message],
        *,
        allow_duplicates: bool = False,
    ) -> MultipleMessageSentResult:
        """Legacy multi-message endpoint without per-message detail. Use `send`."""
        warnings.warn(
            "send_many is deprecated; use send() for per-message failure detail",
            DeprecationWarning,
            stacklevel=2,
        )
        request = MultipleMessageSendingRequest(
            messages=list(messages),
            allow_duplicates=allow_duplicates,
        )
        response = self.transport.send_many(request)
        return self.reconciler.unwrap(response, MultipleMessageSentResult)

    def get_balance(self) -> Balance:
        response = self.transport.get_balance()
        return self.reconciler.unwrap(response, Balance)
