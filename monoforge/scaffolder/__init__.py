"""monoforge scaffolder -- writes the monorepo template tree to disk.

Existing files at template destinations are never overwritten in place: they
are renamed to ``<name>.bak.<timestamp>`` first.  Nothing is installed, built
or started.

Quick usage::

    from monoforge.scaffolder import (
        MaterializationEngine, ScaffoldRun, load_default_catalog,
    )

    engine = MaterializationEngine(load_default_catalog())
    report = engine.run(ScaffoldRun(target_root="/tmp/my-monorepo", run_timestamp=1700000000))
"""

from monoforge.scaffolder.backup import (
    BackupRecord,
    BackupThenWrite,
    WriteDirect,
    backup_path_for,
    execute_backup,
    resolve,
)
from monoforge.scaffolder.catalog import (
    CatalogError,
    Package,
    TemplateCatalog,
    TemplateEntry,
    load_catalog,
    load_default_catalog,
)
from monoforge.scaffolder.dirs import ensure_dir
from monoforge.scaffolder.engine import (
    MaterializationEngine,
    RunState,
    ScaffoldReport,
    ScaffoldRun,
)
from monoforge.scaffolder.errors import (
    BackupCollisionError,
    FilesystemError,
    FilesystemErrorKind,
    NotifierError,
    ScaffoldError,
)
from monoforge.scaffolder.notifier import GitBootstrapper, print_scaffold_summary

__all__ = [
    "BackupCollisionError",
    "BackupRecord",
    "BackupThenWrite",
    "CatalogError",
    "FilesystemError",
    "FilesystemErrorKind",
    "GitBootstrapper",
    "MaterializationEngine",
    "NotifierError",
    "Package",
    "RunState",
    "ScaffoldError",
    "ScaffoldReport",
    "ScaffoldRun",
    "TemplateCatalog",
    "TemplateEntry",
    "WriteDirect",
    "backup_path_for",
    "ensure_dir",
    "execute_backup",
    "load_catalog",
    "load_default_catalog",
    "print_scaffold_summary",
    "resolve",
]
