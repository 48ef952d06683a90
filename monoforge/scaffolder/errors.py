"""Error taxonomy for the materialization engine.

``FilesystemError`` and ``BackupCollisionError`` are fatal: the engine stops
at the first one and the CLI exits non-zero.  ``NotifierError`` never leaves
the post-scaffold notifier.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class FilesystemErrorKind(str, Enum):
    """What the engine was doing when the filesystem refused."""

    PATH_IS_NOT_DIRECTORY = "path_is_not_directory"
    CREATE_FAILED = "create_failed"
    WRITE_FAILED = "write_failed"
    BACKUP_FAILED = "backup_failed"


class ScaffoldError(Exception):
    """Base class for fatal scaffolding errors.

    Attributes:
        path: The path the failing operation was applied to.
    """

    def __init__(self, message: str, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(message)


class FilesystemError(ScaffoldError):
    """Raised when a directory cannot be created or a file cannot be written."""

    def __init__(
        self,
        path: str | Path,
        kind: FilesystemErrorKind,
        cause: OSError | None = None,
    ) -> None:
        self.kind = kind
        self.cause = cause
        detail = kind.value.replace("_", " ")
        if cause is not None:
            detail = f"{detail} ({cause.strerror or cause})"
        super().__init__(f"{path}: {detail}", path)


class BackupCollisionError(ScaffoldError):
    """Raised when the backup destination for an existing entry is taken."""

    def __init__(self, original_path: str | Path, backup_path: str | Path) -> None:
        self.original_path = Path(original_path)
        self.backup_path = Path(backup_path)
        super().__init__(
            f"{original_path}: backup destination already exists: {backup_path}",
            original_path,
        )


class NotifierError(Exception):
    """Raised when the optional git bootstrap fails.  Never fatal."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)
