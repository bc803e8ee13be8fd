"""
协作式取消令牌
"""

import threading


class CancellationToken:
    """
    显式传入 PathCleaner.clean 的取消标志

    只在退避等待的边界检查，不会打断正在进行的删除。
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """请求取消（线程安全，可在信号处理器中调用）"""
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def consume(self) -> bool:
        """读取并清除取消标志"""
        cancelled = self._event.is_set()
        if cancelled:
            self._event.clear()
        return cancelled

    def reset(self) -> None:
        self._event.clear()

    def pause(self, seconds: float) -> bool:
        """
        阻塞当前线程 seconds 秒，取消时提前返回

        Returns:
            等待结束时是否已被取消
        """
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled()})"
