"""Versioned API surface of the relay."""

from __future__ import annotations

from fastapi import APIRouter

from relay.routers import health, messaging

API_PREFIX = "/api/v1"

api_router = APIRouter(prefix=API_PREFIX)
for module in (health, messaging):
    api_router.include_router(module.router)

__all__ = ["API_PREFIX", "api_router"]
