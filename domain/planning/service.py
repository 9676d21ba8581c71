"""
生成规划 - 按文件决定是否生成描述模块、使用哪些名称以及网关注册策略

规划结果是纯数据，渲染交给 infrastructure.rendering。
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.common.exceptions import MultipleServicesUnsupported
from domain.proto.entity import InterfaceFile, Method, Service


OUTPUT_SUFFIX = "_pb2_twinport.py"
SWAGGER_SUFFIX = ".swagger.json"


class GatewayPolicy(str, Enum):
    FULL = "full"
    NO_OP = "no_op"


def gateway_policy(service: Service, register_gateway: bool) -> GatewayPolicy:
    """An http annotation on any method wins over a global opt-out."""
    if register_gateway or service.has_http_annotations:
        return GatewayPolicy.FULL
    return GatewayPolicy.NO_OP


@dataclass(frozen=True)
class GenerationPlan:
    file: InterfaceFile
    service: Service
    descriptor_name: str
    proxy_name: str
    gateway_policy: GatewayPolicy
    proxy_methods: tuple[Method, ...]
    direct_methods: tuple[Method, ...]
    output_path: str
    swagger_asset: str


class GenerationPlanner:
    def __init__(self, register_gateway: bool = True) -> None:
        self.register_gateway = register_gateway

    def plan(self, file: InterfaceFile) -> Optional[GenerationPlan]:
        """Return the plan for a file, or None when the file declares no service.

        Raises MultipleServicesUnsupported for files with more than one service.
        """
        if not file.services:
            return None
        if len(file.services) > 1:
            raise MultipleServicesUnsupported(file.path, [s.name for s in file.services])

        service = file.services[0]
        return GenerationPlan(
            file=file,
            service=service,
            descriptor_name=f"{service.name}ServiceDesc",
            proxy_name=f"proxy{service.name}Server",
            gateway_policy=gateway_policy(service, self.register_gateway),
            proxy_methods=tuple(m for m in service.methods if m.proxy_eligible),
            direct_methods=tuple(m for m in service.methods if not m.proxy_eligible),
            output_path=file.module_prefix + OUTPUT_SUFFIX,
            swagger_asset=file.base_name + SWAGGER_SUFFIX,
        )
