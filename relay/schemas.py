from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from msgclient.types import BatchSendResult, Message, OutcomeStatus


class SendRequest(BaseModel):
    """Relay body for batch sends.

    Example:
        {
          "messages": [{"to": "01000000000", "from": "029302266", "text": "Hi"}],
          "scheduledAt": "2030-01-01T09:00:00Z"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: List[Message] = Field(min_length=1)
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")
    allow_duplicates: bool = Field(default=False, alias="allowDuplicates")


class SendOneRequest(BaseModel):
    message: Message


class SendResponse(BaseModel):
    """Batch send response; `outcome` tells accepted from partially failed."""

    ok: bool
    outcome: OutcomeStatus
    result: BatchSendResult


class ResultResponse(BaseModel):
    ok: bool
    result: Any
