"""
共享测试夹具
"""
import errno
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from loguru import logger

from cleaner.cancellation import CancellationToken
from cleaner.deleter import delete_path
from core.config import get_settings

pytest_plugins = ["pytester"]

SETTINGS_ENV = (
    "FILE_CLEANER_MAX_TRIES",
    "FILE_CLEANER_SLEEP_PERIOD_MILLIS",
    "LOG_LEVEL",
    "LOG_FILE",
)


class RecordingToken(CancellationToken):
    """不真正等待，只记录每次等待的毫秒数；可在第 N 次等待时触发取消"""

    def __init__(self, cancel_on_pause: Optional[int] = None):
        super().__init__()
        self.pauses: List[int] = []
        self.cancel_on_pause = cancel_on_pause

    def pause(self, seconds: float) -> bool:
        self.pauses.append(round(seconds * 1000))
        if self.cancel_on_pause == len(self.pauses):
            self.cancel()
        return self.is_cancelled()


class FlakyDeleter:
    """前 N 次删除某个路径时抛出 PermissionError，之后真正删除"""

    def __init__(self, failures: Optional[Dict[Path, int]] = None):
        self.failures = failures or {}
        self.calls: List[Path] = []

    def __call__(self, path: Path) -> None:
        self.calls.append(path)
        attempt = self.calls.count(path)
        if attempt <= self.failures.get(path, 0):
            raise PermissionError(errno.EACCES, f"attempt {attempt} denied", str(path))
        delete_path(path)

    def attempts(self, path: Path) -> int:
        return self.calls.count(path)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recording_token():
    return RecordingToken


@pytest.fixture
def flaky_deleter():
    return FlakyDeleter


@pytest.fixture
def make_tree(tmp_path):
    """创建 <name>/a.log, <name>/nested/b.log 目录树"""

    def _make(name: str = "logs") -> Path:
        root = tmp_path / name
        (root / "nested").mkdir(parents=True)
        (root / "a.log").write_text("a")
        (root / "nested" / "b.log").write_text("b")
        return root

    return _make


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str = "out.log", content: str = "x") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _make


@pytest.fixture
def log_messages():
    """收集 loguru 日志消息"""
    messages: List[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="TRACE"
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def plugin_args(request):
    """插件已通过 entry point 安装时无需 -p"""
    if request.config.pluginmanager.has_plugin("file_cleaner"):
        return []
    return ["-p", "cleaner.plugin"]
