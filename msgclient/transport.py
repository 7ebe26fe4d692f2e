from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from msgclient.auth import SignatureAuth, Signer
from msgclient.config import DEFAULT_DOMAIN, DEFAULT_TIMEOUT
from msgclient.types import (
    BatchSendRequest,
    FileUploadRequest,
    GatewayResponse,
    MultipleMessageSendingRequest,
    SingleMessageSendingRequest,
    TransportGateway,
)

logger = logging.getLogger("msgclient.transport")

UPLOAD_PATH = "/storage/v1/files"
LIST_PATH = "/messages/v4/list"
SEND_ONE_PATH = "/messages/v4/send"
SEND_MANY_PATH = "/messages/v4/send-many"
SEND_MANY_DETAIL_PATH = "/messages/v4/send-many/detail"
BALANCE_PATH = "/cash/v1/balance"


class HttpTransport(TransportGateway):
    """httpx implementation of the TransportGateway protocol.

    A single `httpx.Client` is held for the transport's lifetime; call
    `close()` (or use the owning service as a context manager) to release it.
    Network failures raise `httpx.HTTPError` unchanged.
    """

    def __init__(
        self,
        signer: Signer,
        domain: str = DEFAULT_DOMAIN,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.domain = domain.rstrip("/")
        self._client = client or httpx.Client(
            base_url=self.domain,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._auth = SignatureAuth(signer)

    def url_for(self, path: str) -> str:
        return f"{self.domain}{path}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> GatewayResponse:
        response = self._client.request(
            method,
            self.url_for(path),
            json=json,
            params=params,
            auth=self._auth,
        )
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return GatewayResponse(
            status_code=response.status_code,
            body=_parse_body(response),
            text=response.text,
        )

    def upload_file(self, request: FileUploadRequest) -> GatewayResponse:
        return self._request("POST", UPLOAD_PATH, json=request.to_payload())

    def list_messages(self, query: Dict[str, str]) -> GatewayResponse:
        return self._request("GET", LIST_PATH, params=query)

    def send_single(self, request: SingleMessageSendingRequest) -> GatewayResponse:
        return self._request("POST", SEND_ONE_PATH, json=request.to_payload())

    def send_many(self, request: MultipleMessageSendingRequest) -> GatewayResponse:
        return self._request("POST", SEND_MANY_PATH, json=request.to_payload())

    def send_batch_detailed(self, request: BatchSendRequest) -> GatewayResponse:
        return self._request("POST", SEND_MANY_DETAIL_PATH, json=request.to_payload())

    def get_balance(self) -> GatewayResponse:
        return self._request("GET", BALANCE_PATH)

    def close(self) -> None:
        self._client.close()


def _parse_body(response: httpx.Response) -> Optional[Any]:
    """Return the JSON body, or None for an empty, `null` or non-JSON body."""
    if not response.content or not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return None
