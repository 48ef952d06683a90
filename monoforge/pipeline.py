"""monoforge scaffold pipeline and CLI entry point.

Runs one scaffold invocation end to end:

1. LAYOUT + MATERIALIZE -- write the template catalog into the target,
   backing up anything already there (fail-fast).
2. NOTIFY              -- best-effort git bootstrap, then the summary report.

Usage::

    python -m monoforge
    python -m monoforge my-monorepo
"""

from __future__ import annotations

import sys
import time

from monoforge.config import DEFAULT_TARGET_DIR, ScaffoldConfig
from monoforge.scaffolder import (
    BackupRecord,
    CatalogError,
    GitBootstrapper,
    MaterializationEngine,
    ScaffoldError,
    ScaffoldReport,
    ScaffoldRun,
    TemplateCatalog,
    load_default_catalog,
    print_scaffold_summary,
)
from monoforge.utils import print_error, print_info


class ScaffoldPipeline:
    """Drives the engine and then the notifier for one invocation.

    Attributes:
        config: Configuration of this run (target, timestamp, git).
        catalog: Template catalog to materialize.
        run: The ``ScaffoldRun`` created for this invocation.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        catalog: TemplateCatalog | None = None,
        git: GitBootstrapper | None = None,
    ) -> None:
        self.config = config
        self.catalog = catalog if catalog is not None else load_default_catalog()
        self.git = git or GitBootstrapper(config.git)
        self.run = ScaffoldRun(
            target_root=config.target_root,
            run_timestamp=config.timestamp,
        )

    def execute(self) -> ScaffoldReport:
        """Scaffold, bootstrap git and print the summary.

        Raises:
            ScaffoldError: If materialization fails.  The notifier never
                raises.
        """
        started = time.monotonic()
        print_info(f"Creating project at: {self.run.target_root}")
        print_info("")

        engine = MaterializationEngine(self.catalog, on_backup=_narrate_backup)
        report = engine.run(self.run)

        commit_id = self.git.try_init_repo(report.target_root)
        report.commit_id = commit_id
        report.git_initialized = commit_id is not None

        print_scaffold_summary(report, time.monotonic() - started)
        return report


def _narrate_backup(record: BackupRecord) -> None:
    print_info(f"Backing up existing {record.original_path} -> {record.backup_path}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``monoforge`` / ``python -m monoforge``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="monoforge",
        description=(
            "Scaffold a frontend + backend monorepo without running npm or "
            "any other install step"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Existing files are moved to <name>.bak.<timestamp> before being replaced.\n"
            "\n"
            "Examples:\n"
            "  monoforge\n"
            "  monoforge my-monorepo\n"
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=DEFAULT_TARGET_DIR,
        help=f"Directory to scaffold into (default: {DEFAULT_TARGET_DIR})",
    )

    args = parser.parse_args(argv)

    pipeline: ScaffoldPipeline | None = None
    try:
        pipeline = ScaffoldPipeline(ScaffoldConfig(target_dir=args.target))
        pipeline.execute()
    except CatalogError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except ScaffoldError as exc:
        cause = exc.__cause__
        print_error(f"Error: {exc}")
        if cause is not None and str(cause) not in str(exc):
            print_error(f"Cause: {cause}")
        print_error(
            f"Scaffold aborted after {len(pipeline.run.written)} file(s); "
            "files already written were left in place."
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
