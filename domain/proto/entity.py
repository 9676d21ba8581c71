"""
接口描述领域实体 - 由 protobuf 描述符转换而来，生成期间只读
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Optional


def python_module_of(proto_path: str) -> str:
    """Dotted module protoc's python generator emits, e.g. foo/my-api.proto -> foo.my_api_pb2."""
    stem = proto_path[: -len(".proto")] if proto_path.endswith(".proto") else proto_path
    return stem.replace("-", "_").replace("/", ".") + "_pb2"


@dataclass(frozen=True)
class MessageRef:
    """A message type as seen from generated Python code."""

    full_name: str
    python_module: str
    python_name: str


@dataclass(frozen=True)
class Method:
    name: str
    input_type: MessageRef
    output_type: MessageRef
    client_streaming: bool = False
    server_streaming: bool = False
    # Resolved once when the descriptor is read (google.api.http option present).
    has_http_annotation: bool = False

    @property
    def proxy_eligible(self) -> bool:
        """Only single-request/single-response methods can run through the interceptor chain."""
        return not self.client_streaming and not self.server_streaming


@dataclass(frozen=True)
class Service:
    name: str
    full_name: str
    methods: tuple[Method, ...] = field(default_factory=tuple)

    def rpc_name(self, method: Method) -> str:
        return f"/{self.full_name}/{method.name}"

    @property
    def has_http_annotations(self) -> bool:
        return any(m.has_http_annotation for m in self.methods)


@dataclass(frozen=True)
class InterfaceFile:
    """A single .proto file scheduled for generation. Identity is the path."""

    path: str
    package: Optional[str]
    services: tuple[Service, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # protoc always reports forward-slash paths relative to an include root
        object.__setattr__(self, "path", self.path.replace("\\", "/"))
        if self.package == "":
            object.__setattr__(self, "package", None)

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path) or "."

    @property
    def base_name(self) -> str:
        stem, _ = posixpath.splitext(posixpath.basename(self.path))
        return stem

    @property
    def python_module(self) -> str:
        return python_module_of(self.path)

    @property
    def module_prefix(self) -> str:
        """Output path stem protoc's python generator uses, e.g. foo/my-api.proto -> foo/my_api."""
        return self.python_module[: -len("_pb2")].replace(".", "/")
