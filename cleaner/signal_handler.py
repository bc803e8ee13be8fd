"""
信号处理器：把终止信号转换为取消令牌
"""
import signal
import threading
from typing import List, Optional

from loguru import logger

from .cancellation import CancellationToken


class SignalHandler:
    """
    在清理期间把 SIGINT/SIGTERM 转换为 token.cancel()

    使用示例:
        token = CancellationToken()
        with SignalHandler(token):
            cleaner.clean(request, token)

    退出 with 块时恢复原始信号处理器。
    """

    def __init__(self, token: CancellationToken, signals: Optional[List[int]] = None):
        self.token = token
        self.signals = signals if signals is not None else [signal.SIGTERM, signal.SIGINT]
        self._original_handlers = {}

    @staticmethod
    def can_register() -> bool:
        """signal.signal 只能在主线程调用"""
        return threading.current_thread() is threading.main_thread()

    def handle(self, signum, frame=None) -> None:
        sig_name = signal.Signals(signum).name
        logger.warning(f"🛑 Received {sig_name}, cancelling cleanup...")
        self.token.cancel()

    def register(self) -> "SignalHandler":
        for sig in self.signals:
            self._original_handlers[sig] = signal.signal(sig, self.handle)
        logger.trace(f"Cancellation bound to {[signal.Signals(s).name for s in self.signals]}")
        return self

    def restore(self) -> None:
        """恢复原始信号处理器"""
        for sig, original_handler in self._original_handlers.items():
            signal.signal(sig, original_handler)
        self._original_handlers.clear()

    def __enter__(self) -> "SignalHandler":
        return self.register()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
