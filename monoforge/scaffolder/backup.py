"""Backup resolution for paths about to be overwritten.

An existing entry at a template's destination is never destroyed: it is
renamed to ``<name>.bak.<run_timestamp>`` before the new content lands.  All
backups of one run share the same timestamp, so a second run inside the same
clock-second collides and fails with ``BackupCollisionError``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import BackupCollisionError, FilesystemError, FilesystemErrorKind

BACKUP_INFIX = ".bak."


@dataclass(frozen=True)
class BackupRecord:
    """An existing entry that was moved out of the way."""

    original_path: Path
    backup_path: Path


@dataclass(frozen=True)
class WriteDirect:
    """Nothing exists at the destination; write it."""


@dataclass(frozen=True)
class BackupThenWrite:
    """Something exists at the destination; rename it to *backup_path* first."""

    backup_path: Path


Action = WriteDirect | BackupThenWrite


def backup_path_for(path: str | Path, run_timestamp: int) -> Path:
    """Return ``path`` with ``.bak.<run_timestamp>`` appended to its name."""
    p = Path(path)
    return p.with_name(f"{p.name}{BACKUP_INFIX}{run_timestamp}")


def resolve(path: str | Path, run_timestamp: int) -> Action:
    """Decide how *path* has to be written.

    Files, directories and symlinks (dangling ones included) all count as
    existing.
    """
    if os.path.lexists(path):
        return BackupThenWrite(backup_path_for(path, run_timestamp))
    return WriteDirect()


def execute_backup(path: str | Path, action: BackupThenWrite) -> BackupRecord:
    """Rename the entry at *path* to ``action.backup_path``.

    Raises:
        BackupCollisionError: The backup destination already exists.  Nothing
            is renamed.
        FilesystemError: The rename itself failed.
    """
    original = Path(path)
    target = action.backup_path
    if os.path.lexists(target):
        raise BackupCollisionError(original, target)
    try:
        os.rename(original, target)
    except OSError as exc:
        raise FilesystemError(original, FilesystemErrorKind.BACKUP_FAILED, exc) from exc
    return BackupRecord(original_path=original, backup_path=target)
