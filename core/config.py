"""
使用 Pydantic Settings 进行配置管理
从 app.properties 文件和环境变量加载配置
"""

from functools import lru_cache
from typing import Optional

from loguru import logger
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InvalidConfigException


DEFAULT_MAX_TRIES = 10
DEFAULT_SLEEP_PERIOD_MILLIS = 200


class Settings(BaseSettings):
    """应用配置，包含参数校验"""

    # 清理策略配置
    FILE_CLEANER_MAX_TRIES: int = Field(
        default=DEFAULT_MAX_TRIES, ge=1, description="每个路径的最大删除尝试次数"
    )
    FILE_CLEANER_SLEEP_PERIOD_MILLIS: int = Field(
        default=DEFAULT_SLEEP_PERIOD_MILLIS,
        ge=0,
        description="单个路径所有重试的总退避时间（毫秒）",
    )

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FILE: Optional[str] = Field(default=None, description="日志文件路径")

    model_config = SettingsConfigDict(
        env_file="app.properties",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL 必须为 {valid_levels} 中的一项")
        return v_upper


# ========== 配置获取函数 ==========


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置实例（单例）

    返回:
        配置实例

    异常:
        InvalidConfigException: 环境变量或 app.properties 中的值无效
    """
    try:
        settings = Settings()
    except ValidationError as e:
        error = e.errors()[0]
        key = ".".join(str(part) for part in error["loc"])
        raise InvalidConfigException(key, error.get("input"), error["msg"]) from e
    logger.debug("Settings loaded")
    return settings


def reload_settings() -> Settings:
    """
    重新加载配置

    清除 lru_cache 缓存并重新加载配置

    返回:
        新的配置实例
    """
    get_settings.cache_clear()
    logger.debug("Settings reloaded")
    return get_settings()
