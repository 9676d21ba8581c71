"""Translate protoc's CodeGeneratorRequest into domain entities.

The google.api.http option is resolved here, once per method, so the domain
layer only ever sees a plain ``has_http_annotation`` flag.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

# Importing annotations_pb2 registers the google.api.http extension so that
# MethodOptions parsed from the request carry it as a known extension.
from google.api import annotations_pb2
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from core.logging_config import get_logger
from domain.proto.entity import InterfaceFile, MessageRef, Method, Service, python_module_of


logger = get_logger(__name__)


def proto_to_python_module(proto_path: str) -> str:
    """protoc's python generator derives the module from the file path.

    Example: foo/my-api.proto -> foo.my_api_pb2
    """
    return python_module_of(proto_path)


def build_message_table(
    protos: Iterable[descriptor_pb2.FileDescriptorProto],
) -> dict[str, MessageRef]:
    """Map every fully-qualified message name (leading dot) to its Python location."""
    out: dict[str, MessageRef] = {}

    def add_message(module: str, parent_proto: str, parent_py: str, msg: descriptor_pb2.DescriptorProto) -> None:
        proto_name = f"{parent_proto}.{msg.name}"
        python_name = f"{parent_py}.{msg.name}" if parent_py else msg.name
        out[proto_name] = MessageRef(
            full_name=proto_name.lstrip("."),
            python_module=module,
            python_name=python_name,
        )
        for nested in msg.nested_type:
            add_message(module, proto_name, python_name, nested)

    for f in protos:
        package = f".{f.package}" if f.package else ""
        module = proto_to_python_module(f.name)
        for msg in f.message_type:
            add_message(module, package, "", msg)

    return out


def has_http_annotation(method: descriptor_pb2.MethodDescriptorProto) -> bool:
    if not method.HasField("options"):
        return False
    return method.options.HasExtension(annotations_pb2.http)


def _resolve(table: dict[str, MessageRef], type_name: str) -> MessageRef:
    ref = table.get(type_name)
    if ref is None:
        # protoc always ships every transitive dependency in proto_file
        raise ValueError(f"message type {type_name!r} is not part of the request")
    return ref


def read_file(
    proto: descriptor_pb2.FileDescriptorProto,
    table: dict[str, MessageRef],
) -> InterfaceFile:
    services = []
    for svc in proto.service:
        full_name = f"{proto.package}.{svc.name}" if proto.package else svc.name
        methods = tuple(
            Method(
                name=m.name,
                input_type=_resolve(table, m.input_type),
                output_type=_resolve(table, m.output_type),
                client_streaming=m.client_streaming,
                server_streaming=m.server_streaming,
                has_http_annotation=has_http_annotation(m),
            )
            for m in svc.method
        )
        services.append(Service(name=svc.name, full_name=full_name, methods=methods))

    return InterfaceFile(
        path=proto.name,
        package=proto.package if proto.HasField("package") else None,
        services=tuple(services),
    )


@dataclass(frozen=True)
class ParsedRequest:
    files: tuple[InterfaceFile, ...]
    parameter: str
    compiler_version: Optional[str]


def compiler_version(request: plugin_pb2.CodeGeneratorRequest) -> Optional[str]:
    if not request.HasField("compiler_version"):
        return None
    v = request.compiler_version
    version = f"v{v.major}.{v.minor}.{v.patch}"
    if v.suffix:
        version += f"-{v.suffix}"
    return version


def read_request(request: plugin_pb2.CodeGeneratorRequest) -> ParsedRequest:
    """Return the files protoc asked to generate, in the order protoc listed them."""
    table = build_message_table(request.proto_file)
    by_name = {f.name: f for f in request.proto_file}
    files = []
    for name in request.file_to_generate:
        proto = by_name.get(name)
        if proto is None:
            logger.warning("file_to_generate_missing", path=name)
            continue
        files.append(read_file(proto, table))
    return ParsedRequest(
        files=tuple(files),
        parameter=request.parameter,
        compiler_version=compiler_version(request),
    )
