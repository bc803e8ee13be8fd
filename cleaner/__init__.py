"""
路径清理模块

- PathCleaner: 带指数退避的顺序删除，失败汇总为一个结果
- CancellationToken: 显式的协作式取消
- 解析器: 测试标识 -> 路径集合
- 观察者: 日志与指标
- plugin: pytest 插件，在每个测试前清理标记声明的路径
"""

from .cancellation import CancellationToken
from .deleter import delete_path
from .observers import CleanupObserver, LoggingObserver, MetricsObserver
from .path_cleaner import PathCleaner
from .resolvers import CleanupRegistry, MarkerPathResolver, PathResolver, resolve_paths
from .types import CleanupRequest, CleanupResult, FailureRecord

__all__ = [
    # 核心
    "PathCleaner",
    "CleanupRequest",
    "CleanupResult",
    "FailureRecord",
    "CancellationToken",
    "delete_path",
    # 观察者
    "CleanupObserver",
    "LoggingObserver",
    "MetricsObserver",
    # 解析器
    "PathResolver",
    "MarkerPathResolver",
    "CleanupRegistry",
    "resolve_paths",
]
