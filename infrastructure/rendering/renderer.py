"""Render a GenerationPlan into the source of a ``*_pb2_twinport.py`` module."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from core.config import PLUGIN_NAME, VERSION
from domain.planning.service import GatewayPolicy, GenerationPlan
from domain.proto.entity import MessageRef


TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "twinport.py.j2"


def module_alias(module: str) -> str:
    """Import alias in the style grpcio-tools uses, e.g. google_dot_protobuf_dot_empty__pb2."""
    return module.replace("_", "__").replace(".", "_dot_")


def import_line(module: str, alias: Optional[str] = None) -> str:
    package, _, name = module.rpartition(".")
    suffix = f" as {alias}" if alias and alias != name else ""
    if package:
        return f"from {package} import {name}{suffix}"
    return f"import {name}{suffix}"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters["pyrepr"] = repr
    return env


class Renderer:
    def __init__(self, environment: Optional[Environment] = None) -> None:
        self._env = environment or _build_environment()

    def context(self, plan: GenerationPlan, protoc_version: Optional[str] = None) -> dict:
        own_module = plan.file.python_module
        _, _, own_name = own_module.rpartition(".")
        grpc_module = own_module + "_grpc"
        gateway_module = own_module[: -len("_pb2")] + "_pb2_gateway"

        imports = [import_line(own_module), import_line(grpc_module)]
        if plan.gateway_policy is GatewayPolicy.FULL:
            imports.append(import_line(gateway_module))

        foreign: dict[str, str] = {}

        def class_ref(ref: MessageRef) -> str:
            if ref.python_module == own_module:
                return f"{own_name}.{ref.python_name}"
            alias = foreign.setdefault(ref.python_module, module_alias(ref.python_module))
            return f"{alias}.{ref.python_name}"

        proxy_methods = [
            {
                "name": m.name,
                "full_method": plan.service.rpc_name(m),
                "input_class": class_ref(m.input_type),
                "output_class": class_ref(m.output_type),
            }
            for m in plan.proxy_methods
        ]
        imports.extend(import_line(module, alias) for module, alias in sorted(foreign.items()))

        return {
            "plugin_name": PLUGIN_NAME,
            "plugin_version": VERSION,
            "protoc_version": protoc_version or "(unknown)",
            "source": plan.file.path,
            "service": plan.service,
            "descriptor_name": plan.descriptor_name,
            "proxy_name": plan.proxy_name,
            "swagger_asset": plan.swagger_asset,
            "imports": imports,
            "grpc_alias": grpc_module.rpartition(".")[2],
            "gateway_alias": gateway_module.rpartition(".")[2],
            "gateway_full": plan.gateway_policy is GatewayPolicy.FULL,
            "proxy_methods": proxy_methods,
        }

    def render(self, plan: GenerationPlan, protoc_version: Optional[str] = None) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(**self.context(plan, protoc_version))
