from __future__ import annotations

import uuid
import contextvars
from typing import Any

from grpc_runtime.interceptors.chain import UnaryHandler, UnaryServerInfo


REQUEST_ID_META_KEY = "x-request-id"
_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("twinport_request_id", default=None)


def get_request_id() -> str | None:
    return _request_id_var.get()


def _incoming_request_id(context: Any) -> str | None:
    # gateway contexts mirror grpc.aio.ServicerContext when they expose metadata at all
    metadata = getattr(context, "invocation_metadata", None)
    if not callable(metadata):
        return None
    md = dict(metadata() or [])
    return md.get(REQUEST_ID_META_KEY) or None


async def request_id_interceptor(
    context: Any,
    request: Any,
    info: UnaryServerInfo,
    handler: UnaryHandler,
) -> Any:
    """Bind a request id (incoming x-request-id or a fresh uuid4) for the duration of the call."""
    request_id = _incoming_request_id(context) or str(uuid.uuid4())
    token = _request_id_var.set(request_id)
    try:
        return await handler(context, request)
    finally:
        _request_id_var.reset(token)
