"""
Tenderly Client Configuration Management

从环境变量和配置文件中读取配置，支持 .env 文件。
"""

import logging
import sys
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://api.tenderly.co/api/v1"


class Settings(BaseSettings):
    """Tenderly 客户端配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )

    # Tenderly API
    access_key: str = Field(default="", alias="TENDERLY_ACCESS_KEY")
    account_slug: str = Field(default="", alias="TENDERLY_ACCOUNT_SLUG")
    project_slug: str = Field(default="", alias="TENDERLY_PROJECT_SLUG")
    api_url: str = Field(default=DEFAULT_API_URL, alias="TENDERLY_API_URL")
    timeout_seconds: float = Field(default=30.0, alias="TENDERLY_TIMEOUT_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def has_credentials(self) -> bool:
        """是否已配置全部访问凭证"""
        return bool(self.access_key and self.account_slug and self.project_slug)

    @property
    def project_url(self) -> str:
        """项目级 API 根路径"""
        return (
            f"{self.api_url.rstrip('/')}/account/{self.account_slug}"
            f"/project/{self.project_slug}"
        )


def setup_logging(level: str = "INFO"):
    """配置日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )


# 全局配置实例
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """重新加载配置"""
    global _settings
    _settings = Settings()
    return _settings
