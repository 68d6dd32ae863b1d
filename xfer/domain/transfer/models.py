"""
Transfer outcome data models

A ``TransferOutcome`` is created when a worker starts on one item and is
finalized exactly once when the attempt concludes. After finalization it
is read-only and can be projected to a ``FileEntry`` for re-comparison.
"""
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from ...core.exceptions import ContractViolation
from ...core.logging import get_logger

logger = get_logger(__name__)


class FileKind(str, Enum):
    """Filesystem object type"""
    FILE = "file"
    DIRECTORY = "directory"
    LINK = "link"


class TransferStatus(str, Enum):
    """Terminal status of a transfer attempt"""
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"                  # already present with matching size
    SKIPPED_BY_RULE = "skipped_by_rule"  # rejected by a filter rule
    FAILED = "failed"

    @property
    def is_skipped(self) -> bool:
        """Rule skips count as skips"""
        return self in (TransferStatus.SKIPPED, TransferStatus.SKIPPED_BY_RULE)


@dataclass(frozen=True)
class FileEntry:
    """Filesystem entry shared by remote listings, local scans and outcomes"""
    kind: FileKind
    size: int
    name: str
    full_path: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "kind": self.kind.value,
            "size": self.size,
            "name": self.name,
            "full_path": self.full_path,
        }


@dataclass
class TransferOutcome:
    """Result of transferring one file, directory or link"""
    kind: FileKind
    name: str
    remote_path: str
    local_path: str

    # Set together by finalize(); _status goes last and seals the record
    _size: int = field(default=0, init=False, repr=False)
    _error: Optional[BaseException] = field(default=None, init=False, repr=False)
    _status: Optional[TransferStatus] = field(default=None, init=False)

    def __post_init__(self):
        try:
            self.kind = FileKind(self.kind)
        except ValueError as e:
            raise ContractViolation(f"{self.name}: unknown file kind {self.kind!r}") from e

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_status") is not None:
            raise ContractViolation(
                f"{self.name}: outcome is finalized, cannot set '{name}'"
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self.__dict__.get("_status") is not None:
            raise ContractViolation(
                f"{self.name}: outcome is finalized, cannot delete '{name}'"
            )
        super().__delattr__(name)

    @classmethod
    def for_paths(
        cls,
        kind: Union[FileKind, str],
        remote_path: str,
        local_path: str,
        name: Optional[str] = None,
    ) -> "TransferOutcome":
        """
        Create an outcome, taking the name from the remote path if not given.

        Args:
            kind: Object type
            remote_path: Absolute remote path
            local_path: Absolute local path
            name: Base name with extension (optional)

        Returns:
            Unfinalized TransferOutcome
        """
        if name is None:
            name = posixpath.basename(remote_path.rstrip("/")) or remote_path
        return cls(kind=kind, name=name, remote_path=remote_path, local_path=local_path)

    # ------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------

    def finalize(
        self,
        status: Union[TransferStatus, str],
        size: Optional[int] = None,
        error: Optional[BaseException] = None,
    ) -> "TransferOutcome":
        """
        Fix the status, size and error of this outcome.

        Args:
            status: Terminal status
            size: Byte size; may be None only for FAILED, in which case 0 is stored
            error: Failure detail; required for FAILED, forbidden otherwise

        Returns:
            This outcome, now read-only

        Raises:
            ContractViolation: If already finalized or the arguments are inconsistent
        """
        if self.is_finalized:
            raise ContractViolation(
                f"{self.name}: outcome already finalized as {self._status.value}"
            )

        try:
            status = TransferStatus(status)
        except ValueError as e:
            raise ContractViolation(f"{self.name}: unknown transfer status {status!r}") from e

        if status is TransferStatus.FAILED:
            if error is None:
                raise ContractViolation(f"{self.name}: failed outcome requires an error")
            if size is None:
                size = 0
        else:
            if error is not None:
                raise ContractViolation(
                    f"{self.name}: error given for non-failed status {status.value}"
                )
            if size is None:
                raise ContractViolation(f"{self.name}: size is required for status {status.value}")

        if isinstance(size, bool) or not isinstance(size, int):
            raise ContractViolation(f"{self.name}: size must be an integer, got {size!r}")
        if size < 0:
            raise ContractViolation(f"{self.name}: size must be >= 0, got {size}")

        self._size = size
        self._error = error
        self._status = status

        logger.debug(f"{self.remote_path}: {status.value} ({size} bytes)")
        return self

    def succeed(self, size: int) -> "TransferOutcome":
        """Finalize as transferred"""
        return self.finalize(TransferStatus.SUCCEEDED, size)

    def skip(self, size: int, by_rule: bool = False) -> "TransferOutcome":
        """Finalize as skipped, either because it already matched or because a rule rejected it"""
        status = TransferStatus.SKIPPED_BY_RULE if by_rule else TransferStatus.SKIPPED
        return self.finalize(status, size)

    def fail(self, error: BaseException, size: Optional[int] = None) -> "TransferOutcome":
        """Finalize as failed"""
        return self.finalize(TransferStatus.FAILED, size, error)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def is_finalized(self) -> bool:
        return self._status is not None

    def _require_finalized(self, what: str) -> None:
        if self._status is None:
            raise ContractViolation(f"{self.name}: cannot read {what} before finalization")

    @property
    def status(self) -> TransferStatus:
        self._require_finalized("status")
        return self._status

    @property
    def size(self) -> int:
        self._require_finalized("size")
        return self._size

    @property
    def error(self) -> Optional[BaseException]:
        self._require_finalized("error")
        return self._error

    @property
    def is_success(self) -> bool:
        return self.status is TransferStatus.SUCCEEDED

    @property
    def is_skipped(self) -> bool:
        return self.status.is_skipped

    @property
    def is_skipped_by_rule(self) -> bool:
        return self.status is TransferStatus.SKIPPED_BY_RULE

    @property
    def is_failed(self) -> bool:
        return self.status is TransferStatus.FAILED

    # ------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------

    def to_file_entry(self, use_local_path: bool) -> FileEntry:
        """
        Project this outcome to a FileEntry.

        Args:
            use_local_path: Use local_path as full_path instead of remote_path

        Returns:
            FileEntry with kind, size and name copied from the outcome

        Raises:
            ContractViolation: If the outcome is not finalized
        """
        self._require_finalized("file entry")
        return FileEntry(
            kind=self.kind,
            size=self._size,
            name=self.name,
            full_path=self.local_path if use_local_path else self.remote_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        self._require_finalized("dict")
        return {
            "kind": self.kind.value,
            "name": self.name,
            "remote_path": self.remote_path,
            "local_path": self.local_path,
            "status": self._status.value,
            "size": self._size,
            "error": str(self._error) if self._error is not None else None,
        }
