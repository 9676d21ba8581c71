"""
生成应用服务（application/services）- 编排校验、规划与渲染
"""
from typing import Optional, Sequence

from application.dto import GeneratedFile, GenerationOptions, GenerationResult
from core.logging_config import get_logger
from domain.common.exceptions import GenerationDiagnostic, MultipleServicesUnsupported
from domain.planning.service import GenerationPlan, GenerationPlanner
from domain.proto.entity import InterfaceFile
from domain.validation.service import Validator
from infrastructure.rendering.renderer import Renderer


logger = get_logger(__name__)


class GenerationService:
    """一次生成运行：先校验全部文件，再为合法文件规划并渲染。"""

    def __init__(self, options: Optional[GenerationOptions] = None, renderer: Optional[Renderer] = None):
        self._options = options or GenerationOptions()
        self._renderer = renderer or Renderer()

    def _log_diagnostic(self, diagnostic: GenerationDiagnostic) -> None:
        logger.error(
            "generation_diagnostic",
            error_type=diagnostic.error_type,
            code=int(diagnostic.code),
            path=diagnostic.path,
            message=diagnostic.message,
        )

    def plan_all(self, files: Sequence[InterfaceFile]) -> tuple[list[GenerationPlan], list[GenerationDiagnostic]]:
        """校验并规划，不渲染。诊断累积而不中断。"""
        # 每次运行使用新的会话，不跨运行保留目录/包映射
        validator = Validator()
        for f in files:
            validator.visit(f)

        diagnostics: list[GenerationDiagnostic] = list(validator.diagnostics)
        planner = GenerationPlanner(register_gateway=self._options.register_gateway)
        plans: list[GenerationPlan] = []
        for f in files:
            try:
                plan = planner.plan(f)
            except MultipleServicesUnsupported as exc:
                diagnostics.append(exc)
                continue
            if plan is None:
                logger.debug("file_skipped", path=f.path, reason="no_services")
                continue
            if not validator.is_valid(f):
                logger.info("file_skipped", path=f.path, reason="validation_failed")
                continue
            plans.append(plan)
        return plans, diagnostics

    def run(self, files: Sequence[InterfaceFile]) -> GenerationResult:
        plans, diagnostics = self.plan_all(files)
        for d in diagnostics:
            self._log_diagnostic(d)

        result = GenerationResult(diagnostics=diagnostics)
        for plan in plans:
            try:
                content = self._renderer.render(plan, self._options.protoc_version)
            except Exception as exc:
                logger.error("render_failed", path=plan.file.path, error=str(exc), exc_info=True)
                raise
            result.files.append(GeneratedFile(name=plan.output_path, content=content, source=plan.file.path))
            logger.info(
                "file_generated",
                path=plan.file.path,
                output=plan.output_path,
                service=plan.service.full_name,
                gateway_policy=plan.gateway_policy.value,
                proxy_methods=len(plan.proxy_methods),
            )

        if result.failed:
            logger.error("generation_failed", diagnostics=len(result.diagnostics))
        return result
