from __future__ import annotations

from functools import lru_cache

from msgclient import MessageService
from msgclient.config import get_settings


@lru_cache(maxsize=1)
def get_message_service() -> MessageService:
    """Shared MessageService built from settings on first use.

    Raises MessagingError(INVALID_CREDENTIALS) when the API key or secret is
    not configured; the relay's exception handler turns that into a 500.
    """
    return MessageService.from_settings(get_settings())
