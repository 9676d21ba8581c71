from __future__ import annotations

import time
from typing import Any

import grpc

from core.logging_config import get_logger
from grpc_runtime.interceptors.chain import UnaryHandler, UnaryServerInfo
from grpc_runtime.interceptors.request_id import get_request_id


logger = get_logger(__name__)


async def logging_interceptor(
    context: Any,
    request: Any,
    info: UnaryServerInfo,
    handler: UnaryHandler,
) -> Any:
    """Log entry, unexpected failures and elapsed time of a gateway call."""
    method = info.full_method
    start = time.perf_counter()
    try:
        logger.info("gateway_request", method=method, request_id=get_request_id())
        return await handler(context, request)
    except (grpc.RpcError, grpc.aio.AbortError):
        # Already mapped/aborted by the servicer; avoid duplicate error logs here
        raise
    except Exception as exc:
        logger.error(
            "gateway_unhandled_error",
            method=method,
            error=str(exc),
            exc_info=True,
            request_id=get_request_id(),
        )
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("gateway_request_done", method=method, elapsed_ms=round(elapsed_ms, 2), request_id=get_request_id())
