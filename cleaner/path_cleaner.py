"""
带退避重试的路径清理器
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from loguru import logger

from core.enums import PathState
from core.exceptions import CleanupInterruptedException

from .cancellation import CancellationToken
from .deleter import Deleter, delete_path
from .observers import CleanupObserver, LoggingObserver
from .types import CleanupRequest, CleanupResult, FailureRecord


class PathCleaner:
    """
    逐个删除请求中的路径，容忍其他线程/进程暂时占用路径导致的失败

    - 路径按顺序处理，互不影响
    - 每个路径最多尝试 max_tries 次，失败后按指数退避阻塞等待
    - 取消只在等待之后检查，只放弃当前路径
    - 所有失败汇总到一个 CleanupResult 中，而不是遇到第一个错误就中止
    """

    def __init__(
        self,
        deleter: Deleter = delete_path,
        observers: Optional[List[CleanupObserver]] = None,
    ):
        """
        Args:
            deleter: 递归删除原语
            observers: 清理观察者列表（用于监控）
        """
        self.deleter = deleter
        self.observers: List[CleanupObserver] = (
            observers if observers is not None else [LoggingObserver()]
        )

    def add_observer(self, observer: CleanupObserver):
        """添加观察者"""
        self.observers.append(observer)

    def clean(
        self, request: CleanupRequest, token: Optional[CancellationToken] = None
    ) -> CleanupResult:
        """
        删除请求中的所有路径

        Args:
            request: 清理请求
            token: 取消令牌；被取消的路径记录为中断，处理结束后重新设置令牌

        Returns:
            清理结果
        """
        if not request.paths:
            return CleanupResult()

        token = token or CancellationToken()
        failures: FailureRecord = {}
        states: Dict[Path, PathState] = {}
        attempts: Dict[Path, int] = {}
        interrupted = False

        logger.debug(
            f"Cleaning {len(request.paths)} paths "
            f"(max_tries={request.max_tries}, sleep_period={request.sleep_period_millis}ms)"
        )

        for path in request.paths:
            self._set_state(states, path, PathState.PENDING)
            state, count = self._clean_path(path, request, token, failures, states)
            self._set_state(states, path, state)
            attempts[path] = count
            interrupted = interrupted or state is PathState.INTERRUPTED

        # 让外层调用方也能观察到取消
        if interrupted:
            token.cancel()

        result = CleanupResult(failures=dict(failures), states=states, attempts=attempts)
        for observer in self.observers:
            observer.on_cleanup_finished(result)
        return result

    def _clean_path(
        self,
        path: Path,
        request: CleanupRequest,
        token: CancellationToken,
        failures: FailureRecord,
        states: Dict[Path, PathState],
    ) -> Tuple[PathState, int]:
        """处理单个路径，返回 (终止状态, 尝试次数)；重试期间 states 中为 RETRYING"""
        if not path.exists():
            for observer in self.observers:
                observer.on_path_skipped(path)
            return PathState.NOT_FOUND, 0

        sleep_millis = request.base_sleep_millis
        for attempt in range(request.max_tries):
            try:
                self.deleter(path)
            except OSError as e:
                failures[path] = e
                self._set_state(states, path, PathState.RETRYING)
                for observer in self.observers:
                    observer.on_attempt_failed(path, attempt, e)
            else:
                failures.pop(path, None)
                for observer in self.observers:
                    observer.on_path_cleaned(path, attempt + 1)
                return PathState.SUCCEEDED, attempt + 1

            token.pause(sleep_millis / 1000)
            if token.consume():
                error = CleanupInterruptedException(path)
                failures[path] = error
                self._notify_failed(path, error, attempt + 1)
                return PathState.INTERRUPTED, attempt + 1
            sleep_millis <<= 1

        self._notify_failed(path, failures[path], request.max_tries)
        return PathState.EXHAUSTED, request.max_tries

    def _set_state(self, states: Dict[Path, PathState], path: Path, state: PathState):
        if states.get(path) is state:
            return
        states[path] = state
        for observer in self.observers:
            observer.on_state_changed(path, state)

    def _notify_failed(self, path: Path, error: BaseException, attempts: int):
        for observer in self.observers:
            observer.on_path_failed(path, error, attempts)
