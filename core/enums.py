"""
路径清理的枚举类型定义
"""

from enum import Enum


class PathState(str, Enum):
    """单个路径的清理状态"""

    PENDING = "PENDING"  # 尚未处理
    NOT_FOUND = "NOT_FOUND"  # 路径不存在，视为成功
    RETRYING = "RETRYING"  # 删除失败，等待重试
    SUCCEEDED = "SUCCEEDED"  # 删除成功
    EXHAUSTED = "EXHAUSTED"  # 用尽重试次数
    INTERRUPTED = "INTERRUPTED"  # 退避期间被取消
