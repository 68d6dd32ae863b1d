"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import (
    setup_logging,
    setup_logging_from_config,
    get_logger,
    get_stdout_console,
    get_stderr_console,
)

__all__ = [
    "XferError",
    "ConfigError",
    "TransferError",
    "ContractViolation",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
]
