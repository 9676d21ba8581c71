"""
配置文件 - 插件配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Any, Optional

from domain.common.exceptions import InvalidParameter


PLUGIN_NAME = "protoc-gen-twinport"
VERSION = "0.0.1"

# Same literals Go's strconv.ParseBool accepts; protoc users pass Go-style flags.
_TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(name: str, value: str) -> bool:
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise InvalidParameter(name, value, reason="expected a boolean")


class Settings(BaseSettings):
    """插件配置"""

    # 全局开关：是否生成真实的网关注册（带 HTTP 注解的方法总是生成）
    register_gateway: bool = Field(default=True, description="enable register handler servers in register_gateway")
    version: bool = Field(default=False, description="print the version and exit")

    # 日志配置
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="TWINPORT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        """允许小写日志级别。"""
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v

    def merged(self, overrides: Optional[dict[str, Any]]) -> "Settings":
        """返回应用了覆盖项的新配置，原配置保持不变。"""
        if not overrides:
            return self
        return self.model_copy(update=overrides)


# Keys protoc may pass through --twinport_opt, mapped to Settings fields.
_PARAMETER_FIELDS = {
    "register-gateway": "register_gateway",
    "version": "version",
}


def parse_parameter(parameter: Optional[str]) -> dict[str, bool]:
    """Parse protoc's parameter string, e.g. ``register-gateway=false,version``.

    A bare key means ``true``. Dashes and underscores in keys are interchangeable.
    Raises InvalidParameter for unknown keys or malformed booleans.
    """
    overrides: dict[str, bool] = {}
    if not parameter:
        return overrides
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, raw = item.partition("=")
        key = key.strip().replace("_", "-")
        field = _PARAMETER_FIELDS.get(key)
        if field is None:
            raise InvalidParameter(key, raw if sep else None)
        overrides[field] = parse_bool(key, raw.strip()) if sep else True
    return overrides


settings = Settings()
