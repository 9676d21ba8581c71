"""
数据传输对象（DTO）- 应用层与插件入口之间的数据传输
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from domain.common.exceptions import GenerationDiagnostic


class GenerationOptions(BaseModel):
    """生成选项"""
    register_gateway: bool = Field(True, description="全局网关注册开关")
    protoc_version: Optional[str] = Field(None, description="protoc 版本，如 v3.21.12")


class GeneratedFile(BaseModel):
    """生成文件"""
    name: str = Field(..., description="相对输出路径")
    content: str
    source: str = Field(..., description="来源 proto 文件")


class GenerationResult(BaseModel):
    """生成结果"""
    files: list[GeneratedFile] = Field(default_factory=list)
    diagnostics: list[GenerationDiagnostic] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def failed(self) -> bool:
        return bool(self.diagnostics)
