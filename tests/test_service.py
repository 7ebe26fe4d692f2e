from __future__ import annotations

import base64
import json
from datetime import datetime, timezone

import httpx
import pytest
import respx

from msgclient import Message, MessageListRequest, MessageService, StorageType
from msgclient.config import Settings
from msgclient.transport import (
    BALANCE_PATH,
    LIST_PATH,
    SEND_MANY_DETAIL_PATH,
    SEND_MANY_PATH,
    SEND_ONE_PATH,
    UPLOAD_PATH,
)
from msgclient.types import ErrorKind, MessagingError
from tests.conftest import DOMAIN
from tests.fixtures.responses import batch_response, error_body


def url(path: str) -> str:
    return f"{DOMAIN}{path}"


@respx.mock
def test_upload_file_sends_base64_and_returns_file_id(service: MessageService) -> None:
    route = respx.post(url(UPLOAD_PATH)).mock(
        return_value=httpx.Response(200, json={"fileId": "ST01FZ", "type": "MMS"})
    )

    file_id = service.upload_file(b"\x89PNG\r\n", StorageType.MMS, link="https://example.com")

    assert file_id == "ST01FZ"
    sent = json.loads(route.calls.last.request.content.decode())
    assert base64.b64decode(sent["file"]) == b"\x89PNG\r\n"
    assert sent["type"] == "MMS"
    assert sent["link"] == "https://example.com"
    assert route.calls.last.request.headers["Authorization"].startswith("HMAC-SHA256 apiKey=test-key,")


@respx.mock
def test_upload_failure_is_file_upload_failed(service: MessageService) -> None:
    respx.post(url(UPLOAD_PATH)).mock(
        return_value=httpx.Response(400, json=error_body("ValidationError", "file is too large"))
    )
    with pytest.raises(MessagingError) as exc_info:
        service.upload_file(b"data")
    assert exc_info.value.kind is ErrorKind.FILE_UPLOAD_FAILED
    assert exc_info.value.message == "file is too large"


@respx.mock
def test_upload_without_file_id_is_empty_response(service: MessageService) -> None:
    respx.post(url(UPLOAD_PATH)).mock(return_value=httpx.Response(200, json={}))
    with pytest.raises(MessagingError) as exc_info:
        service.upload_file(b"data")
    assert exc_info.value.kind is ErrorKind.EMPTY_RESPONSE


@respx.mock
def test_send_single_message_uses_detail_endpoint(service: MessageService, message: Message) -> None:
    route = respx.post(url(SEND_MANY_DETAIL_PATH)).mock(
        return_value=httpx.Response(200, json=batch_response(total=1))
    )

    result = service.send(message)

    sent = json.loads(route.calls.last.request.content.decode())
    assert sent["messages"] == [{"to": "01000000000", "from": "029302266", "text": "Hello"}]
    assert "scheduledDate" not in sent
    assert sent["allowDuplicates"] is False
    assert result.failed_message_list == []


@respx.mock
def test_send_scheduled_batch(service: MessageService, message: Message) -> None:
    route = respx.post(url(SEND_MANY_DETAIL_PATH)).mock(
        return_value=httpx.Response(200, json=batch_response(total=2))
    )
    other = Message(to="01000000002", from_="029302266", text="Hi")

    service.send([message, other], datetime(2030, 1, 1, 9, 0, tzinfo=timezone.utc))

    sent = json.loads(route.calls.last.request.content.decode())
    assert len(sent["messages"]) == 2
    assert sent["scheduledDate"].startswith("2030-01-01T09:00:00")


@respx.mock
def test_send_partial_failure_returns_result(service: MessageService, message: Message) -> None:
    respx.post(url(SEND_MANY_DETAIL_PATH)).mock(
        return_value=httpx.Response(200, json=batch_response(total=3, failed=1))
    )
    result = service.send([message, message, message], allow_duplicates=True)
    assert len(result.failed_message_list) == 1
    assert result.count.registered_success == 2


@respx.mock
def test_send_single_rejection_raises_message_not_received(
    service: MessageService, message: Message
) -> None:
    respx.post(url(SEND_MANY_DETAIL_PATH)).mock(
        return_value=httpx.Response(200, json=batch_response(total=1, failed=1))
    )
    with pytest.raises(MessagingError) as exc_info:
        service.send(message)
    assert exc_info.value.kind is ErrorKind.MESSAGE_NOT_RECEIVED
    assert exc_info.value.failed_messages[0].status_message == "Invalid recipient number"


@respx.mock
def test_send_empty_body_raises_empty_response(service: MessageService, message: Message) -> None:
    respx.post(url(SEND_MANY_DETAIL_PATH)).mock(return_value=httpx.Response(200))
    with pytest.raises(MessagingError) as exc_info:
        service.send(message)
    assert exc_info.value.kind is ErrorKind.EMPTY_RESPONSE


@respx.mock
def test_send_with_null_fields_in_response(service: MessageService, message: Message) -> None:
    respx.post(url(SEND_MANY_DETAIL_PATH)).mock(
        return_value=httpx.Response(
            200,
            json={"groupInfo": {"groupId": "G1", "count": None}, "failedMessageList": None},
        )
    )
    result = service.send(message)
    assert result.failed_message_list == []
    assert result.count.total == 0


def test_send_requires_messages(service: MessageService) -> None:
    with pytest.raises(ValueError):
        service.send([])


@respx.mock
def test_send_one_success(service: MessageService, message: Message) -> None:
    route = respx.post(url(SEND_ONE_PATH)).mock(
        return_value=httpx.Response(
            200,
            json={"groupId": "G1", "messageId": "M1", "statusCode": "2000", "to": "01000000000"},
        )
    )
    result = service.send_one(message)
    sent = json.loads(route.calls.last.request.content.decode())
    assert sent["message"]["to"] == "01000000000"
    assert result.message_id == "M1"
    assert result.status_code == "2000"


@pytest.mark.parametrize(
    "code, kind",
    [
        ("ValidationError", ErrorKind.BAD_REQUEST),
        ("FailedToAddMessage", ErrorKind.BAD_REQUEST),
        ("InvalidApiKey", ErrorKind.INVALID_API_KEY),
        ("SomethingNew", ErrorKind.UNKNOWN_PROVIDER_ERROR),
    ],
)
@respx.mock
def test_send_one_error_mapping(
    service: MessageService, message: Message, code: str, kind: ErrorKind
) -> None:
    respx.post(url(SEND_ONE_PATH)).mock(
        return_value=httpx.Response(400, json=error_body(code, "provider says no"))
    )
    with pytest.raises(MessagingError) as exc_info:
        service.send_one(message)
    assert exc_info.value.kind is kind
    assert exc_info.value.error_code == code
    assert exc_info.value.message == "provider says no"


@respx.mock
def test_get_message_list_sends_filters(service: MessageService) -> None:
    route = respx.get(url(LIST_PATH)).mock(
        return_value=httpx.Response(
            200,
            json={"startKey": None, "nextKey": "k2", "limit": 10, "messageList": {"M1": {"to": "010"}}},
        )
    )

    result = service.get_message_list(
        MessageListRequest(group_id="G1", message_ids=["M1", "M2"], limit=10)
    )

    params = route.calls.last.request.url.params
    assert params["groupId"] == "G1"
    assert params["messageIds"] == "M1,M2"
    assert params["limit"] == "10"
    assert "to" not in params
    assert result.next_key == "k2"
    assert "M1" in result.message_list


@respx.mock
def test_get_message_list_without_filters(service: MessageService) -> None:
    route = respx.get(url(LIST_PATH)).mock(return_value=httpx.Response(200, json={"messageList": {}}))
    service.get_message_list()
    assert not route.calls.last.request.url.params


@respx.mock
def test_get_balance(service: MessageService) -> None:
    respx.get(url(BALANCE_PATH)).mock(
        return_value=httpx.Response(200, json={"balance": 5000, "point": 120})
    )
    balance = service.get_balance()
    assert balance.balance == 5000
    assert balance.point == 120


@respx.mock
def test_get_balance_error_keeps_code(service: MessageService) -> None:
    respx.get(url(BALANCE_PATH)).mock(
        return_value=httpx.Response(401, json=error_body("InvalidApiKey", "Invalid API key."))
    )
    with pytest.raises(MessagingError) as exc_info:
        service.get_balance()
    assert exc_info.value.kind is ErrorKind.INVALID_API_KEY


@respx.mock
def test_send_many_is_deprecated(service: MessageService, message: Message) -> None:
    respx.post(url(SEND_MANY_PATH)).mock(
        return_value=httpx.Response(200, json={"groupInfo": {"groupId": "G1", "count": {"total": 1}}})
    )
    with pytest.warns(DeprecationWarning):
        result = service.send_many([message])
    assert result.group_info is not None
    assert result.group_info.count.total == 1


@respx.mock
def test_custom_error_codes() -> None:
    service = MessageService(
        "test-key", "test-secret", DOMAIN, error_codes={"NotEnoughBalance": "BAD_REQUEST"}
    )
    respx.get(url(BALANCE_PATH)).mock(
        return_value=httpx.Response(403, json=error_body("NotEnoughBalance", "low"))
    )
    with service, pytest.raises(MessagingError) as exc_info:
        service.get_balance()
    assert exc_info.value.kind is ErrorKind.BAD_REQUEST


def test_missing_credentials_rejected_at_construction() -> None:
    with pytest.raises(MessagingError) as exc_info:
        MessageService("", "secret")
    assert exc_info.value.kind is ErrorKind.INVALID_CREDENTIALS


def test_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MESSAGE_ERROR_CODE_MAP", "NotEnoughBalance=BAD_REQUEST")
    monkeypatch.setenv("MESSAGE_HTTP_TIMEOUT", "3.5")
    settings = Settings()
    service = MessageService.from_settings(settings)
    try:
        assert service.reconciler.error_codes.get("NotEnoughBalance") is ErrorKind.BAD_REQUEST
        assert service.transport.domain == DOMAIN
    finally:
        service.close()


def test_from_settings_without_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MESSAGE_API_KEY")
    with pytest.raises(MessagingError) as exc_info:
        MessageService.from_settings(Settings())
    assert exc_info.value.kind is ErrorKind.INVALID_CREDENTIALS
