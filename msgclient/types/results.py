from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, model_validator

from .enums import OutcomeStatus
from .messages import WireModel


class ResponseModel(WireModel):
    """Base for payloads read back from the provider.

    An explicit JSON `null` is treated like an absent key, so the field default
    applies. Numeric codes are read as strings.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Count(ResponseModel):
    """Per-group counters reported by the provider. Missing counters are 0."""

    total: int = 0
    sent_total: int = Field(default=0, alias="sentTotal")
    sent_failed: int = Field(default=0, alias="sentFailed")
    sent_success: int = Field(default=0, alias="sentSuccess")
    sent_pending: int = Field(default=0, alias="sentPending")
    sent_replacement: int = Field(default=0, alias="sentReplacement")
    refund: int = 0
    registered_failed: int = Field(default=0, alias="registeredFailed")
    registered_success: int = Field(default=0, alias="registeredSuccess")


class GroupInfo(ResponseModel):
    group_id: Optional[str] = Field(default=None, alias="groupId")
    status: Optional[str] = None
    date_created: Optional[str] = Field(default=None, alias="dateCreated")
    date_sent: Optional[str] = Field(default=None, alias="dateSent")
    count: Count = Field(default_factory=Count)


class FailedMessage(ResponseModel):
    """A message the provider refused to register.

    `status_code`/`status_message` are the provider's reason; the
    `error_code`/`error_message` properties expose them under the names used
    by `MessagingError`.
    """

    to: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    type: Optional[str] = None
    message_id: Optional[str] = Field(default=None, alias="messageId")
    status_code: Optional[str] = Field(default=None, alias="statusCode")
    status_message: Optional[str] = Field(default=None, alias="statusMessage")
    country: Optional[str] = None
    account_id: Optional[str] = Field(default=None, alias="accountId")
    custom_fields: Optional[Dict[str, str]] = Field(default=None, alias="customFields")

    @property
    def error_code(self) -> Optional[str]:
        return self.status_code

    @property
    def error_message(self) -> Optional[str]:
        return self.status_message


class MessageReceipt(ResponseModel):
    """Registration receipt for one accepted message of a batch."""

    message_id: Optional[str] = Field(default=None, alias="messageId")
    to: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    type: Optional[str] = None
    status_code: Optional[str] = Field(default=None, alias="statusCode")
    status_message: Optional[str] = Field(default=None, alias="statusMessage")
    country: Optional[str] = None
    account_id: Optional[str] = Field(default=None, alias="accountId")


class BatchSendResult(ResponseModel):
    """Response of the detailed batch send; raw material for reconciliation."""

    group_info: Optional[GroupInfo] = Field(default=None, alias="groupInfo")
    failed_message_list: List[FailedMessage] = Field(default_factory=list, alias="failedMessageList")
    message_list: List[MessageReceipt] = Field(default_factory=list, alias="messageList")

    @property
    def count(self) -> Count:
        return self.group_info.count if self.group_info is not None else Count()


class MultipleMessageSentResult(ResponseModel):
    group_info: Optional[GroupInfo] = Field(default=None, alias="groupInfo")


class SingleSendResult(ResponseModel):
    group_id: Optional[str] = Field(default=None, alias="groupId")
    to: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    type: Optional[str] = None
    status_message: Optional[str] = Field(default=None, alias="statusMessage")
    country: Optional[str] = None
    message_id: Optional[str] = Field(default=None, alias="messageId")
    status_code: Optional[str] = Field(default=None, alias="statusCode")
    account_id: Optional[str] = Field(default=None, alias="accountId")


class MessageListResult(ResponseModel):
    """One page of the message list. Pass `next_key` back as `start_key`."""

    start_key: Optional[str] = Field(default=None, alias="startKey")
    next_key: Optional[str] = Field(default=None, alias="nextKey")
    limit: Optional[int] = None
    message_list: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="messageList")


class FileUploadResult(ResponseModel):
    file_id: Optional[str] = Field(default=None, alias="fileId")
    type: Optional[str] = None
    name: Optional[str] = None


class Balance(ResponseModel):
    """Account balance. Fields beyond balance/point are kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    balance: float = 0
    point: float = 0


class Outcome(WireModel):
    """Derived classification of a `BatchSendResult`; never transmitted."""

    status: OutcomeStatus
    result: BatchSendResult

    @property
    def failed_messages(self) -> List[FailedMessage]:
        return self.result.failed_message_list
