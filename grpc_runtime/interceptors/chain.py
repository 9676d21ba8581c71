from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable


@dataclass(frozen=True)
class UnaryServerInfo:
    """Call metadata handed to every interceptor. Built fresh per call."""

    server: Any
    # "/package.Service/Method"
    full_method: str


UnaryHandler = Callable[[Any, Any], Awaitable[Any]]
UnaryServerInterceptor = Callable[[Any, Any, UnaryServerInfo, UnaryHandler], Awaitable[Any]]


def chain_unary_server(*interceptors: UnaryServerInterceptor) -> UnaryServerInterceptor:
    """Compose interceptors into one; the first argument is outermost.

    chain_unary_server(a, b)(ctx, req, info, h) enters a, then b, then h, and
    unwinds in reverse. An interceptor that does not await its handler
    short-circuits everything inside it. The context object is passed along
    untouched.
    """
    if not interceptors:
        raise ValueError("chain_unary_server requires at least one interceptor")
    chain = tuple(interceptors)
    if len(chain) == 1:
        return chain[0]

    async def chained(context: Any, request: Any, info: UnaryServerInfo, handler: UnaryHandler) -> Any:
        def bind(index: int) -> UnaryHandler:
            if index == len(chain):
                return handler

            async def next_handler(ctx: Any, req: Any) -> Any:
                return await chain[index](ctx, req, info, bind(index + 1))

            return next_handler

        return await bind(0)(context, request)

    return chained
