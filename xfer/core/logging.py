"""
Rich-based logging system
"""
import logging
from typing import Any, Dict, Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback

from .constants import DEFAULT_LOG_LEVEL


# Shared console instances
_stdout_console = Console()
_stderr_console = Console(stderr=True)


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[Path] = None,
    rich_tracebacks: bool = True,
) -> None:
    """
    Route the root logger through rich.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional plain-text log file, written in UTF-8
        rich_tracebacks: Render exceptions with rich tracebacks
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if rich_tracebacks:
        install_traceback(console=_stderr_console, width=120)

    rich_handler = RichHandler(
        console=_stderr_console,
        show_time=True,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_level=True,
    )
    rich_handler.setLevel(log_level)
    root_logger.addHandler(rich_handler)

    if log_file:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        root_logger.addHandler(file_handler)


def setup_logging_from_config(config: Dict[str, Any], rich_tracebacks: bool = True) -> None:
    """
    Apply the log_level and log_file keys of a loaded configuration.

    Args:
        config: Merged configuration, as returned by ConfigLoader.load
        rich_tracebacks: Render exceptions with rich tracebacks
    """
    log_file = config.get("log_file")
    setup_logging(
        level=str(config.get("log_level", DEFAULT_LOG_LEVEL)),
        log_file=Path(log_file) if log_file else None,
        rich_tracebacks=rich_tracebacks,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance (usually for ``__name__``)"""
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Get stdout console for report output"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Get stderr console for errors and logs"""
    return _stderr_console
