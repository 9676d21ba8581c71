"""
诊断渲染 - 把累积的诊断转换成 protoc 响应中的错误文本
"""
from typing import Iterable, Optional

from domain.common.exceptions import GenerationDiagnostic


def format_diagnostic(diagnostic: GenerationDiagnostic) -> str:
    """单条诊断：错误类型、文件路径与上下文。"""
    location = f"{diagnostic.path}: " if diagnostic.path else ""
    return f"ERROR [{diagnostic.error_type}] {location}{diagnostic.message}"


def format_diagnostics(diagnostics: Iterable[GenerationDiagnostic]) -> Optional[str]:
    """多条诊断按出现顺序拼接；没有诊断时返回 None。"""
    lines = [format_diagnostic(d) for d in diagnostics]
    return "\n".join(lines) if lines else None
