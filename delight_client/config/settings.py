"""配置管理模块。

支持从环境变量（DELIGHT_ 前缀）、.env 以及 config.yaml 加载配置。
优先级：显式参数 > 环境变量 > .env > config.yaml > 默认值。

本模块不在导入时创建全局实例，需要时调用 load_settings()。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://qa.delight.global"


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。

    支持两种写法：顶层直接写字段，或者放在 delight: 节点下。
    """
    candidates = []
    explicit = os.getenv("DELIGHT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.cwd() / "config.yaml")

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    section = data.get("delight")
                    return section if isinstance(section, dict) else data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class DelightSettings(BaseSettings):
    """客户端配置（使用 Pydantic）。"""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Delight API 基础URL")
    http_timeout: float = Field(default=30.0, ge=1.0, description="单次 HTTP 请求超时时间（秒）")
    max_poll_attempts: int = Field(
        default=30,
        ge=1,
        le=600,
        description="等待回复时最多轮询的次数",
    )
    poll_interval: float = Field(default=1.0, gt=0, description="两次轮询之间的固定间隔（秒）")
    message_id_prefix: str = Field(default="Wi-Py-", description="自动生成 message_id 的前缀")
    log_dir: Optional[str] = Field(default=None, description="JSON 日志目录，为空则不写文件")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_prefix="DELIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


def load_settings(**overrides: Any) -> DelightSettings:
    """读取当前环境并返回一份新的配置。"""

    return DelightSettings(**overrides)
