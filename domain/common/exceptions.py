"""领域层诊断异常定义，供领域、应用与生成代码使用。

核心（core）层仅负责把诊断渲染成 protoc 可读的错误文本，尽量避免领域层反向依赖核心层。
"""
from __future__ import annotations

from typing import Optional, Sequence
from shared.codes import DiagnosticCode


class GenerationDiagnostic(Exception):
    """诊断异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "GenerationError",
        path: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details
        super().__init__(self.message)


class InvalidParameter(GenerationDiagnostic):
    def __init__(self, name: str, value: Optional[str] = None, reason: str = "unknown parameter"):
        details = {"name": name}
        if value is not None:
            details["value"] = value
        super().__init__(
            code=DiagnosticCode.INVALID_PARAMETER,
            message=f"invalid plugin parameter {name!r}: {reason}",
            error_type="InvalidParameter",
            details=details,
        )


class PackageConflict(GenerationDiagnostic):
    def __init__(self, directory: str, existing: str, conflicting: str, path: Optional[str] = None):
        self.directory = directory
        self.existing = existing
        self.conflicting = conflicting
        super().__init__(
            code=DiagnosticCode.PACKAGE_CONFLICT,
            message=(
                f"dir {directory!r} contains protos with different packages "
                f"({existing}, {conflicting}, ...)"
            ),
            error_type="PackageConflict",
            path=path,
            details={"directory": directory, "packages": [existing, conflicting]},
        )


class MissingPackage(GenerationDiagnostic):
    def __init__(self, path: str):
        super().__init__(
            code=DiagnosticCode.MISSING_PACKAGE,
            message=f"proto file {path!r} has no package, which is required",
            error_type="MissingPackage",
            path=path,
        )


class MultipleServicesUnsupported(GenerationDiagnostic):
    def __init__(self, path: str, services: Sequence[str]):
        self.services = tuple(services)
        super().__init__(
            code=DiagnosticCode.MULTIPLE_SERVICES_UNSUPPORTED,
            message=(
                f"proto file {path!r} declares {len(self.services)} services "
                f"({', '.join(self.services)}); files with multiple services aren't supported"
            ),
            error_type="MultipleServicesUnsupported",
            path=path,
            details={"services": list(self.services)},
        )


class DowncastMismatch(GenerationDiagnostic, TypeError):
    """Raised by generated proxies when a value does not match the RPC's message type."""

    def __init__(self, full_method: str, expected: str, actual: str):
        self.full_method = full_method
        self.expected = expected
        self.actual = actual
        super().__init__(
            code=DiagnosticCode.DOWNCAST_MISMATCH,
            message=f"{full_method}: expected {expected}, got {actual}",
            error_type="DowncastMismatch",
            details={"full_method": full_method, "expected": expected, "actual": actual},
        )
