"""Runtime support imported by modules that protoc-gen-twinport generates.

This package hosts:
- Call metadata and interceptor chaining for gateway requests.
- Message downcast checks used by generated proxies.
- Ready-made interceptors (request id, logging).
"""
from grpc_runtime.interceptors.chain import (
    UnaryHandler,
    UnaryServerInfo,
    UnaryServerInterceptor,
    chain_unary_server,
)
from grpc_runtime.messages import ensure_message

__all__ = [
    "UnaryHandler",
    "UnaryServerInfo",
    "UnaryServerInterceptor",
    "chain_unary_server",
    "ensure_message",
]
