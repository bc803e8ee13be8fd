"""
pytest 插件：在每个测试运行前清理其声明的路径

用法::

    @pytest.mark.cleanup_directories("target/rolling-direct")
    def test_rollover():
        ...

重试策略通过 ini 选项配置（也可以用 ``-o name=value`` 覆盖）::

    [pytest]
    log4j2.junit.fileCleanerMaxTries = 10
    log4j2.junit.fileCleanerSleepPeriodMillis = 200

``file_cleaner_max_tries`` / ``file_cleaner_sleep_period_millis`` 是等价的短名称，
两者都设置时以前者为准。

清理期间 SIGINT/SIGTERM 会取消当前路径的重试，并在该测试之后停止会话。

额外的解析器可以在 conftest 中注册::

    def pytest_sessionstart(session):
        runner = session.config.pluginmanager.getplugin("file_cleaner_runner")
        runner.add_resolver(my_resolver)
"""

from typing import Iterable, List, Optional, Tuple

import pytest
from loguru import logger

from core.config import get_settings
from core.exceptions import ConfigurationException
from core.utils.validators import parse_int

from .cancellation import CancellationToken
from .path_cleaner import PathCleaner
from .resolvers import CleanupRegistry, MarkerPathResolver, PathResolver, resolve_paths
from .signal_handler import SignalHandler
from .types import CleanupRequest, CleanupResult

PLUGIN_NAME = "file_cleaner"
RUNNER_NAME = "file_cleaner_runner"

MAX_TRIES_PROPERTY = "log4j2.junit.fileCleanerMaxTries"
SLEEP_PERIOD_MILLIS_PROPERTY = "log4j2.junit.fileCleanerSleepPeriodMillis"
MAX_TRIES_OPTION = "file_cleaner_max_tries"
SLEEP_PERIOD_MILLIS_OPTION = "file_cleaner_sleep_period_millis"

DIRECTORIES_MARKER = "cleanup_directories"
FILES_MARKER = "cleanup_files"


def pytest_addoption(parser):
    max_tries_help = "Maximum delete attempts per path before a test fails (default: 10)"
    sleep_help = "Total backoff budget in milliseconds across retries of one path (default: 200)"
    parser.addini(MAX_TRIES_PROPERTY, help=max_tries_help, default=None)
    parser.addini(SLEEP_PERIOD_MILLIS_PROPERTY, help=sleep_help, default=None)
    parser.addini(MAX_TRIES_OPTION, help=f"Alias of {MAX_TRIES_PROPERTY}", default=None)
    parser.addini(
        SLEEP_PERIOD_MILLIS_OPTION, help=f"Alias of {SLEEP_PERIOD_MILLIS_PROPERTY}", default=None
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        f"{DIRECTORIES_MARKER}(*paths): delete these directory trees before the test runs",
    )
    config.addinivalue_line(
        "markers",
        f"{FILES_MARKER}(*paths): delete these files before the test runs",
    )
    if not config.pluginmanager.has_plugin(RUNNER_NAME):
        config.pluginmanager.register(FileCleanerPlugin(config), RUNNER_NAME)


def _read_int_option(config, names: Tuple[str, ...], default: int, minimum: int) -> int:
    """按顺序读取第一个已设置的 ini 选项"""
    for name in names:
        raw = config.getini(name)
        if raw in (None, ""):
            continue
        value = parse_int(raw, minimum=minimum)
        if value is None:
            logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
            return default
        return value
    return default


class FileCleanerPlugin:
    """每个测试运行前执行一次 PathCleaner"""

    def __init__(
        self,
        config,
        cleaner: Optional[PathCleaner] = None,
        resolvers: Optional[Iterable[PathResolver]] = None,
    ):
        self.config = config
        self.cleaner = cleaner or PathCleaner()
        self.token = CancellationToken()
        self.registry = CleanupRegistry()
        if resolvers is None:
            resolvers = [
                MarkerPathResolver(DIRECTORIES_MARKER),
                MarkerPathResolver(FILES_MARKER),
            ]
        self.resolvers: List[PathResolver] = [*resolvers, self.registry]

        try:
            settings = get_settings()
        except ConfigurationException as e:
            raise pytest.UsageError(str(e)) from e
        self.max_tries = _read_int_option(
            config,
            (MAX_TRIES_PROPERTY, MAX_TRIES_OPTION),
            settings.FILE_CLEANER_MAX_TRIES,
            minimum=1,
        )
        self.sleep_period_millis = _read_int_option(
            config,
            (SLEEP_PERIOD_MILLIS_PROPERTY, SLEEP_PERIOD_MILLIS_OPTION),
            settings.FILE_CLEANER_SLEEP_PERIOD_MILLIS,
            minimum=0,
        )

    def add_resolver(self, resolver: PathResolver) -> "FileCleanerPlugin":
        self.resolvers.append(resolver)
        return self

    def build_request(self, item) -> CleanupRequest:
        return CleanupRequest(
            paths=tuple(resolve_paths(self.resolvers, item)),
            max_tries=self.max_tries,
            sleep_period_millis=self.sleep_period_millis,
        )

    def run_cleanup(self, request: CleanupRequest) -> CleanupResult:
        """清理期间把终止信号绑定到令牌（仅主线程可注册信号）"""
        self.token.reset()
        if SignalHandler.can_register():
            with SignalHandler(self.token):
                return self.cleaner.clean(request, self.token)
        return self.cleaner.clean(request, self.token)

    @pytest.hookimpl(tryfirst=True)
    def pytest_runtest_setup(self, item):
        request = self.build_request(item)
        if not request.paths:
            return

        result = self.run_cleanup(request)
        if self.token.is_cancelled():
            item.session.shouldstop = "file cleanup cancelled"
        if not result.success:
            pytest.fail(result.message, pytrace=False)
