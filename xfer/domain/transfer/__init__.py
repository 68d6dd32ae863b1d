"""
Transfer domain module
"""
from .models import (
    FileKind,
    TransferStatus,
    FileEntry,
    TransferOutcome,
)
from .listing import (
    kind_from_mode,
    entry_from_local,
    entry_from_sftp,
    list_local,
    list_remote,
    entries_match,
)

__all__ = [
    "FileKind",
    "TransferStatus",
    "FileEntry",
    "TransferOutcome",
    "kind_from_mode",
    "entry_from_local",
    "entry_from_sftp",
    "list_local",
    "list_remote",
    "entries_match",
]
