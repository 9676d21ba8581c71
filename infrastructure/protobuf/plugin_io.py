"""protoc plugin framing: one serialized request on stdin, one response on stdout."""
from __future__ import annotations

from typing import BinaryIO, Iterable, Optional

from google.protobuf.compiler import plugin_pb2

from application.dto import GeneratedFile


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    return plugin_pb2.CodeGeneratorRequest.FromString(stream.read())


def build_response(
    files: Iterable[GeneratedFile],
    error: Optional[str] = None,
) -> plugin_pb2.CodeGeneratorResponse:
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    for f in files:
        response.file.add(name=f.name, content=f.content)
    if error:
        response.error = error
    return response


def write_response(stream: BinaryIO, response: plugin_pb2.CodeGeneratorResponse) -> None:
    stream.write(response.SerializeToString(deterministic=True))
    stream.flush()
