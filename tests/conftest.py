from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from msgclient import Message, MessageService
from msgclient.config import get_settings
from relay.deps import get_message_service

DOMAIN = "https://api.example.test"


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("ENV", "test")
    # Safe defaults for the provider client
    monkeypatch.setenv("MESSAGE_API_KEY", "test-key")
    monkeypatch.setenv("MESSAGE_API_SECRET", "test-secret")
    monkeypatch.setenv("MESSAGE_API_DOMAIN", DOMAIN)
    monkeypatch.delenv("MESSAGE_ERROR_CODE_MAP", raising=False)
    get_settings.cache_clear()
    get_message_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_message_service.cache_clear()


@pytest.fixture()
def service() -> Iterator[MessageService]:
    svc = MessageService("test-key", "test-secret", DOMAIN)
    yield svc
    svc.close()


@pytest.fixture()
def message() -> Message:
    return Message(to="01000000000", from_="029302266", text="Hello")


@pytest.fixture()
def client(service: MessageService) -> Iterator[TestClient]:
    from relay.app import app

    app.dependency_overrides[get_message_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
