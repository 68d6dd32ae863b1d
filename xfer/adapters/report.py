"""
Outcome aggregation and reporting
"""
import threading
from pathlib import Path
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.constants import DEFAULT_REPORT_MAX_ROWS
from ..core.exceptions import ConfigError, ContractViolation
from ..core.logging import get_logger, get_stdout_console
from ..domain.transfer.models import FileEntry, TransferOutcome, TransferStatus
from .config.loader import ConfigLoader

logger = get_logger(__name__)

STATUS_STYLES = {
    TransferStatus.SUCCEEDED: "green",
    TransferStatus.SKIPPED: "yellow",
    TransferStatus.SKIPPED_BY_RULE: "yellow",
    TransferStatus.FAILED: "red",
}


@dataclass
class ReportConfig:
    """Report rendering options"""
    use_local_path: bool = False
    show_skipped: bool = True
    max_rows: int = DEFAULT_REPORT_MAX_ROWS

    def __post_init__(self):
        if isinstance(self.max_rows, bool) or not isinstance(self.max_rows, int):
            raise ConfigError(f"report.max_rows must be an integer, got {self.max_rows!r}")
        if self.max_rows < 0:
            raise ConfigError(f"report.max_rows must be >= 0, got {self.max_rows}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "use_local_path": self.use_local_path,
            "show_skipped": self.show_skipped,
            "max_rows": self.max_rows,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportConfig":
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**valid_fields)


@dataclass
class OutcomeSummary:
    """Counts of outcomes per status"""
    succeeded: int = 0
    skipped: int = 0
    skipped_by_rule: int = 0
    failed: int = 0
    bytes_transferred: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + self.skipped_by_rule + self.failed

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "succeeded": self.succeeded,
            "skipped": self.skipped,
            "skipped_by_rule": self.skipped_by_rule,
            "failed": self.failed,
            "bytes_transferred": self.bytes_transferred,
            "total": self.total,
        }


def _require_finalized(outcome: TransferOutcome) -> None:
    if not outcome.is_finalized:
        raise ContractViolation(f"{outcome.name}: outcome handed over before finalization")


def summarize(outcomes: Iterable[TransferOutcome]) -> OutcomeSummary:
    """
    Count outcomes per status.

    Raises:
        ContractViolation: If any outcome is not finalized
    """
    summary = OutcomeSummary()
    for outcome in outcomes:
        _require_finalized(outcome)
        status = outcome.status
        if status is TransferStatus.SUCCEEDED:
            summary.succeeded += 1
            summary.bytes_transferred += outcome.size
        elif status is TransferStatus.SKIPPED:
            summary.skipped += 1
        elif status is TransferStatus.SKIPPED_BY_RULE:
            summary.skipped_by_rule += 1
        else:
            summary.failed += 1
    return summary


class OutcomeCollector:
    """Collects finalized outcomes from concurrent transfer workers"""

    def __init__(self):
        self._lock = threading.Lock()
        self._outcomes: List[TransferOutcome] = []

    def add(self, outcome: TransferOutcome) -> None:
        """
        Add a finalized outcome.

        Raises:
            ContractViolation: If the outcome is not finalized
        """
        _require_finalized(outcome)
        with self._lock:
            self._outcomes.append(outcome)

    def outcomes(self) -> List[TransferOutcome]:
        """Get a copy of the collected outcomes"""
        with self._lock:
            return self._outcomes.copy()

    def failed(self) -> List[TransferOutcome]:
        """Get the collected outcomes that failed"""
        return [o for o in self.outcomes() if o.is_failed]

    def summary(self) -> OutcomeSummary:
        """Count the collected outcomes per status"""
        return summarize(self.outcomes())

    def entries(self, use_local_path: bool) -> List[FileEntry]:
        """Project every collected outcome for a re-comparison pass"""
        return [o.to_file_entry(use_local_path) for o in self.outcomes()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)


def format_size(size_bytes: int) -> str:
    """Format bytes as a human-readable string"""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


def build_table(
    outcomes: Iterable[TransferOutcome],
    config: Optional[ReportConfig] = None,
) -> Table:
    """
    Build a rich table of outcomes.

    Args:
        outcomes: Finalized outcomes
        config: Report options (defaults if None)

    Returns:
        Table with one row per shown outcome
    """
    config = config or ReportConfig()
    outcomes = list(outcomes)
    summary = summarize(outcomes)

    table = Table(
        title="Transfer Results",
        caption=(
            f"{summary.succeeded} succeeded, "
            f"{summary.skipped + summary.skipped_by_rule} skipped, "
            f"{summary.failed} failed, {format_size(summary.bytes_transferred)}"
        ),
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Kind", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Size", justify="right")
    table.add_column("Path", style="blue")
    table.add_column("Error", style="red")

    shown = [o for o in outcomes if config.show_skipped or not o.is_skipped]
    for outcome in shown[:config.max_rows]:
        style = STATUS_STYLES[outcome.status]
        table.add_row(
            outcome.kind.value,
            escape(outcome.name),
            f"[{style}]{outcome.status.value}[/{style}]",
            format_size(outcome.size),
            escape(outcome.local_path if config.use_local_path else outcome.remote_path),
            escape(str(outcome.error)) if outcome.error is not None else "",
        )

    if len(shown) > config.max_rows:
        table.add_row("", f"... {len(shown) - config.max_rows} more", "", "", "", "")

    return table


def render_outcomes(
    outcomes: Iterable[TransferOutcome],
    console: Optional[Console] = None,
    config: Optional[ReportConfig] = None,
) -> None:
    """Print an outcome table to the console (stdout by default)"""
    console = console or get_stdout_console()
    console.print(build_table(outcomes, config))


def log_failures(outcomes: Iterable[TransferOutcome], use_local_path: bool = False) -> int:
    """
    Log one warning per failed outcome.

    Returns:
        Number of failures logged
    """
    count = 0
    for outcome in outcomes:
        _require_finalized(outcome)
        if not outcome.is_failed:
            continue
        path = outcome.local_path if use_local_path else outcome.remote_path
        logger.warning(f"{path} failed: {outcome.error}")
        count += 1
    return count


def load_report_config(
    toml_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    use_env: bool = True,
) -> ReportConfig:
    """Load the [report] section via ConfigLoader"""
    data = ConfigLoader().load(toml_path, overrides, use_env)
    return ReportConfig.from_dict(data.get("report", {}))
