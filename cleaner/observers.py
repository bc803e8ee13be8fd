"""
清理观察者 - 执行监控
"""

from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from core.enums import PathState

from .types import CleanupResult


class CleanupObserver(ABC):
    """清理观察者接口"""

    @abstractmethod
    def on_path_cleaned(self, path: Path, attempts: int):
        """路径删除成功时调用"""
        pass

    @abstractmethod
    def on_path_failed(self, path: Path, error: BaseException, attempts: int):
        """路径最终失败（用尽次数或被取消）时调用"""
        pass

    def on_path_skipped(self, path: Path):
        """路径不存在时调用"""
        pass

    def on_attempt_failed(self, path: Path, attempt: int, error: BaseException):
        """单次删除尝试失败时调用（attempt 从 0 开始）"""
        pass

    def on_state_changed(self, path: Path, state: PathState):
        """路径状态变化时调用（PENDING -> RETRYING -> 终止状态）"""
        pass

    def on_cleanup_finished(self, result: CleanupResult):
        """所有路径处理完成时调用"""
        pass


class LoggingObserver(CleanupObserver):
    """日志观察者（默认）"""

    def on_path_cleaned(self, path: Path, attempts: int):
        if attempts > 1:
            logger.info(f"✓ Deleted {path} after {attempts} attempts")
        else:
            logger.debug(f"✓ Deleted {path}")

    def on_path_failed(self, path: Path, error: BaseException, attempts: int):
        logger.error(f"✗ Failed to delete {path} after {attempts} attempts: {error}")

    def on_path_skipped(self, path: Path):
        logger.trace(f"{path} does not exist, skipping")

    def on_attempt_failed(self, path: Path, attempt: int, error: BaseException):
        logger.debug(f"Attempt {attempt + 1} to delete {path} failed: {error}")

    def on_state_changed(self, path: Path, state: PathState):
        logger.trace(f"{path} -> {state.value}")

    def on_cleanup_finished(self, result: CleanupResult):
        if not result.success:
            logger.warning(str(result))


class MetricsObserver(CleanupObserver):
    """指标收集观察者"""

    def __init__(self):
        self.metrics = {
            "total_paths": 0,
            "total_attempts": 0,
            "total_cleaned": 0,
            "total_skipped": 0,
            "total_failures": 0,
            "total_interrupted": 0,
        }

    def on_path_cleaned(self, path: Path, attempts: int):
        self.metrics["total_paths"] += 1
        self.metrics["total_attempts"] += attempts
        self.metrics["total_cleaned"] += 1

    def on_path_failed(self, path: Path, error: BaseException, attempts: int):
        self.metrics["total_paths"] += 1
        self.metrics["total_attempts"] += attempts
        self.metrics["total_failures"] += 1
        if isinstance(error, InterruptedError):
            self.metrics["total_interrupted"] += 1

    def on_path_skipped(self, path: Path):
        self.metrics["total_paths"] += 1
        self.metrics["total_skipped"] += 1

    def get_metrics(self) -> dict:
        """获取指标"""
        return self.metrics.copy()
