from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import MessageType, StorageType


class WireModel(BaseModel):
    """Base for every provider payload.

    Fields are declared in snake_case and aliased to the provider's camelCase
    keys. Models accept either spelling and drop keys they do not know about.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON shape sent to the provider."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class KakaoOptions(WireModel):
    """Options for Kakao alimtalk/friendtalk sends (ATA/CTA/CTI)."""

    pf_id: Optional[str] = Field(default=None, alias="pfId")
    template_id: Optional[str] = Field(default=None, alias="templateId")
    variables: Optional[Dict[str, str]] = None
    disable_sms: Optional[bool] = Field(default=None, alias="disableSms")
    image_id: Optional[str] = Field(default=None, alias="imageId")


class Message(WireModel):
    """One addressable unit to send.

    Instances are frozen: build a new one instead of editing a message that
    has already been handed to the service.

    Anatomy:
    - to / from_: recipient and registered sender numbers
    - text: body; optional for template-based Kakao sends
    - type: explicit MessageType; leave unset to let the provider detect it
    - image_id: fileId returned by `MessageService.upload_file`
    - custom_fields: opaque key/values echoed back in reports

    Example:
        >>> from msgclient.types import Message
        >>> Message(to="01000000000", from_="029302266", text="Hello")
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    to: str
    from_: Optional[str] = Field(default=None, alias="from")
    text: Optional[str] = None
    type: Optional[MessageType] = None
    subject: Optional[str] = None
    image_id: Optional[str] = Field(default=None, alias="imageId")
    country: Optional[str] = None
    auto_type_detect: Optional[bool] = Field(default=None, alias="autoTypeDetect")
    custom_fields: Optional[Dict[str, str]] = Field(default=None, alias="customFields")
    kakao_options: Optional[KakaoOptions] = Field(default=None, alias="kakaoOptions")

    @field_validator("to")
    @classmethod
    def _validate_to(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("recipient 'to' is required")
        return v.strip()


class FileUploadRequest(WireModel):
    """Body of the storage upload call; `file` is already base64 encoded."""

    file: str
    type: StorageType = StorageType.MMS
    link: Optional[str] = None


class MessageListRequest(WireModel):
    """Filters for the message list query.

    Every field is optional. Absent fields are not sent; the rest are
    rendered as a flat query-string map.
    """

    message_id: Optional[str] = Field(default=None, alias="messageId")
    message_ids: Optional[List[str]] = Field(default=None, alias="messageIds")
    group_id: Optional[str] = Field(default=None, alias="groupId")
    to: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    type: Optional[MessageType] = None
    status_code: Optional[str] = Field(default=None, alias="statusCode")
    date_type: Optional[str] = Field(default=None, alias="dateType")
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    start_key: Optional[str] = Field(default=None, alias="startKey")
    limit: Optional[int] = Field(default=None, ge=1)

    def to_query(self) -> Dict[str, str]:
        query: Dict[str, str] = {}
        for key, value in self.to_payload().items():
            if isinstance(value, list):
                query[key] = ",".join(str(v) for v in value)
            else:
                query[key] = str(value)
        return query


class SingleMessageSendingRequest(WireModel):
    message: Message


class MultipleMessageSendingRequest(WireModel):
    """Body of the legacy send-many endpoint (no scheduling, no detail)."""

    messages: List[Message] = Field(min_length=1)
    allow_duplicates: bool = Field(default=False, alias="allowDuplicates")


class BatchSendRequest(WireModel):
    """Body of the detailed batch send.

    `scheduled_date` left as None means "send immediately". Naive datetimes
    are taken to be UTC.

    Example:
        >>> from datetime import datetime, timezone
        >>> BatchSendRequest(
        ...     messages=[Message(to="01000000000", from_="029302266", text="Hi")],
        ...     scheduled_date=datetime(2030, 1, 1, tzinfo=timezone.utc),
        ... )
    """

    messages: List[Message] = Field(min_length=1)
    scheduled_date: Optional[datetime] = Field(default=None, alias="scheduledDate")
    allow_duplicates: bool = Field(default=False, alias="allowDuplicates")

    @field_validator("scheduled_date")
    @classmethod
    def _assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
