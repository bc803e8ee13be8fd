"""
Utility modules for Path-Cleaner
"""
from .logger import setup_logger
from .validators import parse_int, validate_max_tries, validate_sleep_period

__all__ = [
    "setup_logger",
    "parse_int",
    "validate_max_tries",
    "validate_sleep_period",
]
