"""
xfer - transfer outcome records

Per-item results of bulk upload/download jobs:
- TransferOutcome: created per item, finalized once, then read-only
- FileEntry: uniform descriptor shared by outcomes, local scans and SFTP listings
- Reporting: thread-safe collection, summaries and rich tables
"""

__version__ = "0.1.0"

from .core import (
    XferError,
    ConfigError,
    TransferError,
    ContractViolation,
    setup_logging,
    setup_logging_from_config,
    get_logger,
)

from .domain.transfer import (
    FileKind,
    TransferStatus,
    FileEntry,
    TransferOutcome,
    entry_from_local,
    entry_from_sftp,
    list_local,
    list_remote,
    entries_match,
)

from .adapters.report import (
    ReportConfig,
    OutcomeSummary,
    OutcomeCollector,
    summarize,
    render_outcomes,
    log_failures,
    load_report_config,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "XferError",
    "ConfigError",
    "TransferError",
    "ContractViolation",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Models
    "FileKind",
    "TransferStatus",
    "FileEntry",
    "TransferOutcome",
    # Listings
    "entry_from_local",
    "entry_from_sftp",
    "list_local",
    "list_remote",
    "entries_match",
    # Reporting
    "ReportConfig",
    "OutcomeSummary",
    "OutcomeCollector",
    "summarize",
    "render_outcomes",
    "log_failures",
    "load_report_config",
]
