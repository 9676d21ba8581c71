"""
Shared diagnostic codes used across layers (Domain/Core/Application).

This module provides a single source of truth so that diagnostics raised by
the validator, the planner and generated runtime code stay comparable.
"""
from enum import IntEnum


class DiagnosticCode(IntEnum):
    """诊断码定义（单一来源）"""

    # 成功
    OK = 0

    # 插件参数错误 (1xxxx)
    INVALID_PARAMETER = 10000

    # 目录/包校验错误 (2xxxx)
    PACKAGE_CONFLICT = 20001
    MISSING_PACKAGE = 20002

    # 生成规划错误 (3xxxx)
    MULTIPLE_SERVICES_UNSUPPORTED = 30001

    # 运行时错误 (4xxxx)，由生成代码在调用时抛出
    DOWNCAST_MISMATCH = 40001


__all__ = ["DiagnosticCode"]
