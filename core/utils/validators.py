"""
验证工具
"""
from typing import Any, Optional


def validate_max_tries(max_tries: int) -> bool:
    """
    验证最大尝试次数

    Args:
        max_tries: 每个路径的最大删除尝试次数

    Returns:
        有效则返回True

    Raises:
        ValueError: 如果不是至少为 1 的整数
    """
    if isinstance(max_tries, bool) or not isinstance(max_tries, int):
        raise ValueError(f"max_tries must be an integer, got: {max_tries!r}")

    if max_tries < 1:
        raise ValueError(f"max_tries must be at least 1, got: {max_tries}")

    return True


def validate_sleep_period(sleep_period_millis: int) -> bool:
    """
    验证总退避时间

    0 是合法值：退避退化为无等待的立即重试

    Raises:
        ValueError: 如果为负数或不是整数
    """
    if isinstance(sleep_period_millis, bool) or not isinstance(sleep_period_millis, int):
        raise ValueError(
            f"sleep_period_millis must be an integer, got: {sleep_period_millis!r}"
        )

    if sleep_period_millis < 0:
        raise ValueError(
            f"sleep_period_millis cannot be negative, got: {sleep_period_millis}"
        )

    return True


def parse_int(value: Any, minimum: int = 0) -> Optional[int]:
    """
    宽松地解析配置值

    Args:
        value: 原始配置值（通常是 ini 文件中的字符串）
        minimum: 允许的最小值

    Returns:
        解析后的整数；缺失、无法解析或小于 minimum 时返回 None
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None

    if parsed < minimum:
        return None

    return parsed
