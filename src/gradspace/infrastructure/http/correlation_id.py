from __future__ import annotations

import uuid
from contextvars import ContextVar

import httpx

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"


async def attach_correlation_id(request: httpx.Request) -> None:
    """httpx request hook: reuse the ambient correlation id or mint one."""
    cid = correlation_id_ctx.get() or uuid.uuid4().hex
    request.headers.setdefault(HEADER, cid)
