"""
Unified output system using Loguru and Rich.
User-facing messages go to the console and the log file together;
rendered song lines go to stdout untouched.
"""

import sys
import threading
from pathlib import Path

from loguru import logger
from rich.console import Console

# Templates are user text: "[%a]" must not be read as Rich markup
_stdout = Console(markup=False, highlight=False)

_level_styles = {
    "debug": "cyan",
    "info": None,
    "warning": "yellow",
    "error": "bold red",
}


def echo(text: str, style: str | None = None) -> None:
    """Print one line exactly as given (rendered songs, sort keys)."""
    _stdout.print(text, style=style, soft_wrap=True)


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: int = 5,
    console_output: bool = False,
) -> None:
    """
    Configure loguru with a rotating file sink.

    Args:
        log_file: Path to log file
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        rotation: Size at which the log file is rotated
        retention: Number of rotated files to keep
        console_output: Also log to stderr
    """
    # Remove default handler
    logger.remove()

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        rotation=rotation,
        retention=retention,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints to the console.

    Background threads that set ``silent_logging = True`` on themselves are
    logged to file only.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    if getattr(threading.current_thread(), "silent_logging", False):
        return
    echo(message, style=_level_styles.get(level))
