"""
Loguru-based logging configuration

Library modules (``cleaner.*``) only ever ``from loguru import logger``;
handlers are installed once by the command line entry point.
"""
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{function}:{line} | {message}"


def setup_logger(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    colorize: Optional[bool] = None,
) -> List[int]:
    """
    Replace loguru's default handler with the console (and optional file) handlers

    Args:
        log_level: Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging to file
        colorize: Force colors on/off; None lets loguru decide from the terminal

    Returns:
        Handler ids, so callers can remove exactly what they added
    """
    logger.remove()

    handler_ids = [
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level, colorize=colorize)
    ]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                log_file,
                format=FILE_FORMAT,
                level=log_level,
                rotation="10 MB",
                retention=5,
                enqueue=True,  # 信号处理器和清理线程都可能写日志
            )
        )

    logger.debug(f"Logger initialized with level: {log_level}")
    return handler_ids
