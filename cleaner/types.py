"""
清理请求与结果类型定义
"""

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from core.config import DEFAULT_MAX_TRIES, DEFAULT_SLEEP_PERIOD_MILLIS
from core.enums import PathState
from core.exceptions import CleanupFailedException, InvalidConfigException
from core.utils.validators import validate_max_tries, validate_sleep_period

# 路径 -> 该路径最近一次观察到的错误（保持插入顺序）
FailureRecord = Dict[Path, BaseException]

PathLikeType = Union[str, PathLike]

FAILURE_SEPARATOR = ", "


def normalize_paths(paths: Iterable[PathLikeType]) -> Tuple[Path, ...]:
    """转换为 Path 并去重，保留首次出现的顺序"""
    return tuple(dict.fromkeys(Path(p) for p in paths))


@dataclass(frozen=True)
class CleanupRequest:
    """
    一次清理调用的输入

    sleep_period_millis 是单个路径所有重试的总退避预算，
    第一次等待为 sleep_period_millis // max_tries，之后每次翻倍。
    """

    paths: Tuple[Path, ...] = ()
    max_tries: int = DEFAULT_MAX_TRIES
    sleep_period_millis: int = DEFAULT_SLEEP_PERIOD_MILLIS

    def __post_init__(self):
        try:
            validate_max_tries(self.max_tries)
        except ValueError as e:
            raise InvalidConfigException("max_tries", self.max_tries, str(e)) from e
        try:
            validate_sleep_period(self.sleep_period_millis)
        except ValueError as e:
            raise InvalidConfigException(
                "sleep_period_millis", self.sleep_period_millis, str(e)
            ) from e
        # frozen dataclass 只能通过 object.__setattr__ 规范化字段
        object.__setattr__(self, "paths", normalize_paths(self.paths))

    @classmethod
    def of(cls, *paths: PathLikeType, **policy) -> "CleanupRequest":
        return cls(paths=tuple(paths), **policy)

    @property
    def base_sleep_millis(self) -> int:
        # 整数截断，可能为 0
        return self.sleep_period_millis // self.max_tries

    def pause_millis(self, attempt: int) -> int:
        """第 attempt 次（从 0 开始）尝试之后的等待时间"""
        return self.base_sleep_millis << attempt


@dataclass(frozen=True)
class CleanupResult:
    """清理结果"""

    failures: FailureRecord = field(default_factory=dict)
    states: Dict[Path, PathState] = field(default_factory=dict)
    attempts: Dict[Path, int] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def failed_paths(self) -> List[Path]:
        return list(self.failures)

    @property
    def message(self) -> str:
        """按插入顺序列出所有失败路径及其最后一次错误"""
        return FAILURE_SEPARATOR.join(
            f"{path} failed with {type(error).__name__}: {error}"
            for path, error in self.failures.items()
        )

    def raise_for_failures(self) -> None:
        if not self.success:
            raise CleanupFailedException(self)

    def __str__(self) -> str:
        if self.success:
            return f"Cleanup: {len(self.states)} paths clean"
        return (
            f"Cleanup: {len(self.failures)}/{len(self.states)} paths failed - "
            f"{self.message}"
        )
