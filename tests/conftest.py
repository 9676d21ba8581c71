"""Pytest bootstrap configuration.

Pin plugin environment variables before test collection and module imports
that depend on settings, and provide factories for interface files and for
importing generated descriptor modules.
"""
import importlib
import os
import sys
import textwrap

import pytest

# Defaults regardless of the developer's shell
os.environ.setdefault("TWINPORT_REGISTER_GATEWAY", "true")
os.environ.setdefault("TWINPORT_VERSION", "false")

from domain.proto.entity import InterfaceFile, MessageRef, Method, Service  # noqa: E402


@pytest.fixture
def make_method():
    def _make(
        name: str = "SayHello",
        *,
        client_streaming: bool = False,
        server_streaming: bool = False,
        http: bool = False,
        module: str = "demo.greeter_pb2",
        input_name: str = "HelloRequest",
        output_name: str = "HelloReply",
    ) -> Method:
        return Method(
            name=name,
            input_type=MessageRef(f"demo.v1.{input_name}", module, input_name),
            output_type=MessageRef(f"demo.v1.{output_name}", module, output_name),
            client_streaming=client_streaming,
            server_streaming=server_streaming,
            has_http_annotation=http,
        )

    return _make


@pytest.fixture
def make_file(make_method):
    def _make(path: str = "demo/greeter.proto", package="demo.v1", services=None) -> InterfaceFile:
        if services is None:
            services = [Service(name="Greeter", full_name=f"{package}.Greeter", methods=(make_method(),))]
        return InterfaceFile(path=path, package=package, services=tuple(services))

    return _make


_FAKE_PB2 = '''
class HelloRequest:
    def __init__(self, name=""):
        self.name = name


class HelloReply:
    def __init__(self, message=""):
        self.message = message
'''

_FAKE_PB2_GRPC = '''
registered = []


class GreeterServicer:
    pass


def add_GreeterServicer_to_server(servicer, server):
    registered.append((servicer, server))
'''

_FAKE_PB2_GATEWAY = '''
registered = []


async def register_Greeter_handler_server(ctx, mux, server):
    registered.append((ctx, mux, server))
    return "registered"
'''


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write a generated module next to fake protoc outputs and import it.

    ``load_generated(source, package="demo", base="greeter")`` returns the
    imported module; fake ``<base>_pb2``, ``<base>_pb2_grpc`` and
    ``<base>_pb2_gateway`` modules live in the same package unless overridden.
    """
    loaded_roots = []

    def _load(source: str, package: str = "demo", base: str = "greeter", pb2=_FAKE_PB2, pb2_grpc=_FAKE_PB2_GRPC,
              pb2_gateway=_FAKE_PB2_GATEWAY, swagger: bytes = b'{"swagger": "2.0"}'):
        pkg_dir = tmp_path.joinpath(*package.split("."))
        pkg_dir.mkdir(parents=True, exist_ok=True)
        parts = package.split(".")
        for i in range(1, len(parts) + 1):
            tmp_path.joinpath(*parts[:i], "__init__.py").touch()
        (pkg_dir / f"{base}_pb2.py").write_text(textwrap.dedent(pb2))
        (pkg_dir / f"{base}_pb2_grpc.py").write_text(textwrap.dedent(pb2_grpc))
        if pb2_gateway is not None:
            (pkg_dir / f"{base}_pb2_gateway.py").write_text(textwrap.dedent(pb2_gateway))
        (pkg_dir / f"{base}.swagger.json").write_bytes(swagger)
        (pkg_dir / f"{base}_pb2_twinport.py").write_text(source)

        monkeypatch.syspath_prepend(str(tmp_path))
        importlib.invalidate_caches()
        loaded_roots.append(parts[0])
        return importlib.import_module(f"{package}.{base}_pb2_twinport")

    yield _load

    for root in loaded_roots:
        for name in [m for m in sys.modules if m == root or m.startswith(root + ".")]:
            sys.modules.pop(name, None)
