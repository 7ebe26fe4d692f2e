from __future__ import annotations

from urllib.parse import urlsplit

from fastapi import APIRouter, Depends

from msgclient.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict:
    """Report relay version and which provider it is configured against.

    No provider call is made; `credentials` only says whether both the key and
    secret are set, so a misconfigured deployment shows up before the first send.
    """
    return {
        "ok": True,
        "service": settings.app_name,
        "version": settings.app_version,
        "env": settings.env,
        "provider": urlsplit(settings.domain).netloc or settings.domain,
        "credentials": bool(settings.api_key and settings.api_secret_key),
    }


@router.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}
