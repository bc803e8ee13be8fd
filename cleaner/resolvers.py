"""
测试标识 -> 待清理路径 的解析器

解析器是普通的可调用对象：接收一个不透明的测试标识（在 pytest 插件中是
测试 item），返回该测试运行前需要删除的路径集合。
"""

from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Collection, Dict, Iterable, List

from .types import PathLikeType, normalize_paths

PathResolver = Callable[[Any], Collection[Path]]


class MarkerPathResolver:
    """从 pytest 标记（函数、类、模块级）的参数中收集路径"""

    def __init__(self, marker_name: str):
        self.marker_name = marker_name

    def __call__(self, item: Any) -> List[Path]:
        iter_markers = getattr(item, "iter_markers", None)
        if iter_markers is None:
            return []

        paths = []
        for marker in iter_markers(name=self.marker_name):
            paths.extend(marker.args)
        return list(normalize_paths(paths))

    def __repr__(self) -> str:
        return f"MarkerPathResolver({self.marker_name!r})"


class CleanupRegistry:
    """
    显式的 测试 ID -> 路径 映射

    测试 ID 使用 pytest 的 nodeid；传入的标识没有 nodeid 属性时，
    直接把标识本身当作 ID。
    """

    def __init__(self):
        self._paths: Dict[str, List[Path]] = defaultdict(list)

    def register(self, test_id: str, *paths: PathLikeType) -> "CleanupRegistry":
        self._paths[test_id].extend(Path(p) for p in paths)
        return self

    def __call__(self, identity: Any) -> List[Path]:
        test_id = getattr(identity, "nodeid", identity)
        return list(normalize_paths(self._paths.get(test_id, ())))

    def __len__(self) -> int:
        return len(self._paths)


def resolve_paths(resolvers: Iterable[PathResolver], identity: Any) -> List[Path]:
    """合并所有解析器的结果，去重并保持顺序"""
    paths: List[Path] = []
    for resolver in resolvers:
        paths.extend(resolver(identity))
    return list(normalize_paths(paths))
