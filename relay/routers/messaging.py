from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from msgclient import MessageService, classify
from msgclient.types import MessageListRequest
from relay.deps import get_message_service
from relay.schemas import ResultResponse, SendOneRequest, SendRequest, SendResponse

router = APIRouter(prefix="", tags=["messaging"])


@router.post("/messages/send")
async def send_messages(
    payload: SendRequest,
    service: MessageService = Depends(get_message_service),
) -> SendResponse:
    """Submit a batch; a totally failed batch surfaces as a 422 via MessagingError."""
    result = await run_in_threadpool(
        service.send,
        payload.messages,
        payload.scheduled_at,
        allow_duplicates=payload.allow_duplicates,
    )
    return SendResponse(ok=True, outcome=classify(result).status, result=result)


@router.post("/messages/send-one")
async def send_one(
    payload: SendOneRequest,
    service: MessageService = Depends(get_message_service),
) -> ResultResponse:
    result = await run_in_threadpool(service.send_one, payload.message)
    return ResultResponse(ok=True, result=result)


@router.get("/messages")
async def list_messages(
    message_id: Optional[str] = Query(default=None, alias="messageId"),
    group_id: Optional[str] = Query(default=None, alias="groupId"),
    to: Optional[str] = Query(default=None),
    start_key: Optional[str] = Query(default=None, alias="startKey"),
    limit: Optional[int] = Query(default=None, ge=1),
    service: MessageService = Depends(get_message_service),
) -> ResultResponse:
    params = MessageListRequest(
        message_id=message_id,
        group_id=group_id,
        to=to,
        start_key=start_key,
        limit=limit,
    )
    result = await run_in_threadpool(service.get_message_list, params)
    return ResultResponse(ok=True, result=result)


@router.get("/balance")
async def balance(service: MessageService = Depends(get_message_service)) -> ResultResponse:
    result = await run_in_threadpool(service.get_balance)
    return ResultResponse(ok=True, result=result)
