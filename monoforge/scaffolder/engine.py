"""Materialization engine.

Drives a ``TemplateCatalog`` onto disk.  For every entry, in catalog order:

1. ensure the parent directory chain exists,
2. resolve whether something already lives at the destination,
3. rename an existing entry to its ``.bak.<timestamp>`` backup,
4. write the payload atomically.

The engine is synchronous and fail-fast: the first error aborts the run.
Files already written stay where they are; rerunning after fixing the cause
backs them up instead of destroying them.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .backup import BackupRecord, BackupThenWrite, execute_backup, resolve
from .catalog import TemplateCatalog, TemplateEntry
from .dirs import ensure_dir
from .errors import FilesystemError, FilesystemErrorKind, ScaffoldError


# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------


class RunState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class ScaffoldRun:
    """State of one scaffold invocation.

    ``run_timestamp`` is chosen once by the caller and shared by every backup
    of the run.
    """

    target_root: Path
    run_timestamp: int
    state: RunState = RunState.NOT_STARTED
    backups_created: list[BackupRecord] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    directories_created: list[Path] = field(default_factory=list)
    failed_path: Path | None = None

    def __post_init__(self) -> None:
        self.target_root = Path(self.target_root).absolute()


@dataclass
class ScaffoldReport:
    """Outcome of a completed run, consumed by the notifier."""

    target_root: Path
    run_timestamp: int
    state: RunState
    files_written: list[Path]
    backups: list[BackupRecord]
    directories_created: list[Path]
    git_initialized: bool = False
    commit_id: str | None = None

    @property
    def relative_files(self) -> list[str]:
        return [p.relative_to(self.target_root).as_posix() for p in self.files_written]


BackupHook = Callable[[BackupRecord], None]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class MaterializationEngine:
    """Writes a catalog into a target directory.

    Args:
        catalog: Entries and reserved directories to materialize.
        on_backup: Called after each successful backup rename, before the new
            content is written.  Used by the CLI to narrate backups.
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        *,
        on_backup: BackupHook | None = None,
    ) -> None:
        self.catalog = catalog
        self.on_backup = on_backup

    def run(self, run: ScaffoldRun) -> ScaffoldReport:
        """Materialize the catalog for *run*.

        Raises:
            ScaffoldError: On the first directory, backup or write failure.
                ``run.state`` is ``ABORTED`` afterwards, as it is for any
                other exception escaping the run.
            RuntimeError: If *run* was already started.
        """
        if run.state is not RunState.NOT_STARTED:
            raise RuntimeError(f"Scaffold run already {run.state.value}")
        run.state = RunState.RUNNING

        try:
            self._layout(run)
            for entry in self.catalog:
                self._materialize(run, entry)
        except ScaffoldError as exc:
            run.state = RunState.ABORTED
            run.failed_path = exc.path
            raise
        except BaseException:
            run.state = RunState.ABORTED
            raise

        run.state = RunState.COMPLETED
        return ScaffoldReport(
            target_root=run.target_root,
            run_timestamp=run.run_timestamp,
            state=run.state,
            files_written=list(run.written),
            backups=list(run.backups_created),
            directories_created=list(run.directories_created),
        )

    # -- Steps -------------------------------------------------------------

    def _layout(self, run: ScaffoldRun) -> None:
        """Create the target root and the reserved directories."""
        run.directories_created.extend(ensure_dir(run.target_root))
        for directory in self.catalog.reserved_directories:
            run.directories_created.extend(ensure_dir(run.target_root / directory))

    def _materialize(self, run: ScaffoldRun, entry: TemplateEntry) -> None:
        path = run.target_root / entry.target_path
        run.directories_created.extend(ensure_dir(path.parent))

        action = resolve(path, run.run_timestamp)
        if isinstance(action, BackupThenWrite):
            record = execute_backup(path, action)
            run.backups_created.append(record)
            if self.on_backup is not None:
                self.on_backup(record)

        _write_atomic(path, entry.content)
        run.written.append(path)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_atomic(path: Path, content: bytes) -> None:
    """Write *content* to *path* so that it is either complete or absent.

    The payload goes to a temporary file next to *path* which is then renamed
    over it.  The temporary is removed on failure.
    """
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.lexists(tmp_name):
            os.unlink(tmp_name)
        raise FilesystemError(path, FilesystemErrorKind.WRITE_FAILED, exc) from exc
