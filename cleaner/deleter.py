"""
递归删除原语
"""

import os
import shutil
from pathlib import Path
from typing import Callable, Union

from loguru import logger

Deleter = Callable[[Path], None]


def delete_path(path: Union[str, os.PathLike]) -> None:
    """
    删除文件或整个目录树

    符号链接只删除链接本身。目标已不存在时静默返回；
    权限、占用等其他 OSError 原样抛出，由调用方决定是否重试。

    Args:
        path: 要删除的路径
    """
    path = Path(path)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        # 检查与删除之间路径被其他进程移走（或目录中的子项被并发删除）
        if os.path.lexists(path):
            raise
        logger.trace(f"{path} vanished before it could be deleted")
