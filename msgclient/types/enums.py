from __future__ import annotations

from enum import Enum


class MessageType(str, Enum):
    """Delivery type of an outbound message.

    Most callers leave this unset and let the provider pick between SMS, LMS
    and MMS from the text length and the presence of an image
    (`autoTypeDetect`). Kakao and RCS types require their matching options.

    Example:
        >>> from msgclient.types import Message, MessageType
        >>> Message(to="01000000000", from_="029302266", text="Hi", type=MessageType.SMS)
    """

    SMS = "SMS"
    LMS = "LMS"
    MMS = "MMS"
    ATA = "ATA"
    CTA = "CTA"
    CTI = "CTI"
    NSA = "NSA"
    RCS_SMS = "RCS_SMS"
    RCS_LMS = "RCS_LMS"
    RCS_MMS = "RCS_MMS"
    RCS_TPL = "RCS_TPL"
    FAX = "FAX"
    VOICE = "VOICE"


class StorageType(str, Enum):
    """Kind of attachment accepted by the file storage endpoint."""

    MMS = "MMS"
    DOCUMENT = "DOCUMENT"
    KAKAO = "KAKAO"
    RCS = "RCS"
    FAX = "FAX"


class OutcomeStatus(str, Enum):
    """Classification of a batch send response.

    - ACCEPTED: no message was rejected
    - PARTIALLY_FAILED: some, but not all, messages were rejected
    - TOTALLY_FAILED: every submitted message was rejected
    """

    ACCEPTED = "accepted"
    PARTIALLY_FAILED = "partially_failed"
    TOTALLY_FAILED = "totally_failed"


class ErrorKind(str, Enum):
    """Distinguishable failure kinds surfaced by the client."""

    INVALID_CREDENTIALS = "InvalidCredentials"
    FILE_UPLOAD_FAILED = "FileUploadFailed"
    BAD_REQUEST = "BadRequest"
    INVALID_API_KEY = "InvalidApiKey"
    MESSAGE_NOT_RECEIVED = "MessageNotReceived"
    EMPTY_RESPONSE = "EmptyResponse"
    UNKNOWN_PROVIDER_ERROR = "UnknownProviderError"
