"""
路径清理的自定义异常
"""
from pathlib import Path
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from cleaner.types import CleanupResult


class PathCleanerException(Exception):
    """Path-Cleaner 基础异常类"""
    pass


# ========== 配置异常 ==========

class ConfigurationException(PathCleanerException):
    """配置相关异常基类"""
    pass


class InvalidConfigException(ConfigurationException, ValueError):
    """无效的配置异常"""
    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid configuration: {key}={value} - {reason}"
        )


# ========== 清理异常 ==========

class CleanupException(PathCleanerException):
    """清理相关异常基类"""
    pass


class CleanupInterruptedException(CleanupException, InterruptedError):
    """等待重试期间观察到取消请求，放弃该路径的剩余尝试"""
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Cleanup of {path} interrupted")


class CleanupFailedException(CleanupException):
    """一个或多个路径最终清理失败（汇总）"""
    def __init__(self, result: "CleanupResult"):
        self.result = result
        super().__init__(result.message)
