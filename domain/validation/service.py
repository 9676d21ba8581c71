"""
跨文件校验 - 同一目录下只允许一个 package，且每个待生成文件都必须声明 package
"""
from __future__ import annotations

from dataclasses import dataclass, field

from domain.common.exceptions import GenerationDiagnostic, MissingPackage, PackageConflict
from domain.proto.entity import InterfaceFile


@dataclass
class ValidationSession:
    """Directory to package bookkeeping for a single generation run."""

    # first package seen per directory; later files are checked against it
    dir_to_package: dict[str, str] = field(default_factory=dict)
    # every distinct package observed per directory
    dir_packages: dict[str, set[str]] = field(default_factory=dict)

    def record(self, directory: str, package: str) -> str:
        """Record a package for a directory and return the canonical one."""
        self.dir_packages.setdefault(directory, set()).add(package)
        return self.dir_to_package.setdefault(directory, package)

    def conflicting_directories(self) -> set[str]:
        return {d for d, pkgs in self.dir_packages.items() if len(pkgs) > 1}


class Validator:
    """Collects diagnostics while files are visited; never stops early."""

    def __init__(self, session: ValidationSession | None = None) -> None:
        self.session = session or ValidationSession()
        self.diagnostics: list[GenerationDiagnostic] = []

    @property
    def failed(self) -> bool:
        return bool(self.diagnostics)

    def check_file(self, file: InterfaceFile) -> None:
        """Record the file's package for its directory or flag a conflict."""
        if file.package is None:
            # reported by validate_file; an absent package takes no part in the directory check
            return
        canonical = self.session.record(file.directory, file.package)
        if canonical != file.package:
            self.diagnostics.append(
                PackageConflict(file.directory, canonical, file.package, path=file.path)
            )

    def validate_file(self, file: InterfaceFile) -> None:
        if file.package is None:
            self.diagnostics.append(MissingPackage(file.path))

    def visit(self, file: InterfaceFile) -> None:
        self.check_file(file)
        self.validate_file(file)

    def is_valid(self, file: InterfaceFile) -> bool:
        """Whether a file may produce output once every file has been visited."""
        if file.package is None:
            return False
        return file.directory not in self.session.conflicting_directories()
