"""
Path-Cleaner - 命令行入口

带退避重试地删除一组文件/目录，例如在重新运行测试前清理上次运行的输出
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from core.config import get_settings
from core.exceptions import ConfigurationException
from core.utils.logger import setup_logger

from .cancellation import CancellationToken
from .observers import LoggingObserver, MetricsObserver
from .path_cleaner import PathCleaner
from .signal_handler import SignalHandler
from .types import CleanupRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="path-cleaner",
        description="删除文件和目录树，容忍其他进程暂时占用",
    )
    parser.add_argument("paths", nargs="+", help="要删除的文件或目录")
    parser.add_argument(
        "--max-tries",
        type=int,
        default=None,
        help="每个路径的最大尝试次数（默认读取 FILE_CLEANER_MAX_TRIES）",
    )
    parser.add_argument(
        "--sleep-period-millis",
        type=int,
        default=None,
        help="单个路径的总退避时间（默认读取 FILE_CLEANER_SLEEP_PERIOD_MILLIS）",
    )
    parser.add_argument("--log-level", default=None, help="日志级别")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """命令行主入口，返回退出码"""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ConfigurationException as e:
        setup_logger("INFO")
        logger.error(f"✗ {e}")
        return 2

    setup_logger((args.log_level or settings.LOG_LEVEL).upper(), settings.LOG_FILE)

    try:
        request = CleanupRequest(
            paths=tuple(args.paths),
            max_tries=(
                args.max_tries if args.max_tries is not None
                else settings.FILE_CLEANER_MAX_TRIES
            ),
            sleep_period_millis=(
                args.sleep_period_millis if args.sleep_period_millis is not None
                else settings.FILE_CLEANER_SLEEP_PERIOD_MILLIS
            ),
        )
    except ConfigurationException as e:
        logger.error(f"✗ {e}")
        return 2

    metrics = MetricsObserver()
    cleaner = PathCleaner(observers=[LoggingObserver(), metrics])
    token = CancellationToken()
    with SignalHandler(token):
        result = cleaner.clean(request, token)

    stats = metrics.get_metrics()
    logger.info(
        f"🧹 {stats['total_cleaned']} deleted, {stats['total_skipped']} missing, "
        f"{stats['total_failures']} failed ({stats['total_attempts']} attempts)"
    )

    if not result.success:
        logger.error(f"❌ {result.message}")
        return 1

    logger.info("✅ Cleanup complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
