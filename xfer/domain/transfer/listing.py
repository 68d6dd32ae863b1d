"""
FileEntry builders for local and remote listings
"""
import os
import stat
import posixpath
from pathlib import Path
from typing import List

import paramiko

from ...core.exceptions import TransferError
from ...core.logging import get_logger
from .models import FileEntry, FileKind

logger = get_logger(__name__)


def kind_from_mode(mode: int) -> FileKind:
    """
    Map a stat mode to a FileKind.

    Links are checked first so an lstat of a link to a directory stays a link.
    """
    if stat.S_ISLNK(mode):
        return FileKind.LINK
    if stat.S_ISDIR(mode):
        return FileKind.DIRECTORY
    return FileKind.FILE


def entry_from_local(path: Path) -> FileEntry:
    """
    Build a FileEntry for a local path.

    Args:
        path: Local path (not followed if it is a link)

    Returns:
        FileEntry; directories and links report size 0
    """
    path = Path(path)
    st = os.lstat(path)
    kind = kind_from_mode(st.st_mode)
    return FileEntry(
        kind=kind,
        size=st.st_size if kind is FileKind.FILE else 0,
        name=path.name,
        full_path=str(path.absolute()),
    )


def entry_from_sftp(attrs: paramiko.SFTPAttributes, parent: str) -> FileEntry:
    """
    Build a FileEntry from a remote listing item.

    Args:
        attrs: Attributes returned by SFTPClient.listdir_attr
        parent: Remote directory the item was listed from

    Returns:
        FileEntry
    """
    kind = kind_from_mode(attrs.st_mode or 0)
    return FileEntry(
        kind=kind,
        size=(attrs.st_size or 0) if kind is FileKind.FILE else 0,
        name=attrs.filename,
        full_path=posixpath.join(parent, attrs.filename),
    )


def list_remote(sftp: paramiko.SFTPClient, path: str) -> List[FileEntry]:
    """
    List a remote directory.

    Args:
        sftp: Open SFTP client
        path: Remote directory path

    Returns:
        Entries sorted by name

    Raises:
        TransferError: If the directory cannot be listed
    """
    try:
        items = sftp.listdir_attr(path)
    except IOError as e:
        raise TransferError(f"Failed to list remote directory {path}: {e}") from e

    entries = [entry_from_sftp(attrs, path) for attrs in items]
    logger.debug(f"Listed {len(entries)} remote entries in {path}")
    return sorted(entries, key=lambda e: e.name)


def list_local(path: Path) -> List[FileEntry]:
    """List a local directory, entries sorted by name"""
    path = Path(path)
    entries = [entry_from_local(child) for child in path.iterdir()]
    logger.debug(f"Listed {len(entries)} local entries in {path}")
    return sorted(entries, key=lambda e: e.name)


def entries_match(a: FileEntry, b: FileEntry) -> bool:
    """
    Check whether two entries from different sides describe the same object.

    Paths are ignored. Sizes are compared for files only.
    """
    if a.kind != b.kind or a.name != b.name:
        return False
    if a.kind is FileKind.FILE:
        return a.size == b.size
    return True
