"""Post-scaffold notifier: optional git bootstrap and the summary report.

Unlike the materialization engine, nothing here is allowed to fail the run.
The git bootstrap swallows every error (git missing, non-zero exit, nothing
to commit, timeouts) and reports it as a warning.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from monoforge.config import GitConfig
from monoforge.utils import (
    console,
    format_duration,
    print_success,
    print_summary_table,
    print_warning,
)

from .engine import ScaffoldReport
from .errors import NotifierError


def _run_git(*args: str, cwd: Path, timeout: float = 60.0) -> str:
    """Run a git command and return its stripped stdout.

    Raises NotifierError if git cannot be started, times out, or exits
    non-zero.
    """
    cmd = ["git", *args]
    cmd_str = " ".join(cmd)
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise NotifierError(
            f"Git command timed out after {timeout}s: {cmd_str}", command=cmd_str
        ) from exc
    except OSError as exc:
        raise NotifierError(f"Cannot run {cmd_str}: {exc}", command=cmd_str) from exc

    if result.returncode != 0:
        stderr = (result.stderr or result.stdout or "").strip()
        raise NotifierError(
            f"Git command failed (exit {result.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )
    return (result.stdout or "").strip()


class GitBootstrapper:
    """Initialises a repository in a freshly scaffolded tree.

    Only acts when git is on ``PATH`` and the target has no ``.git`` yet.
    """

    def __init__(self, config: GitConfig | None = None) -> None:
        self.config = config or GitConfig()

    def try_init_repo(self, target_root: str | Path) -> str | None:
        """Init, stage everything and commit once.

        Returns:
            The new commit id, or ``None`` if the bootstrap was skipped or
            failed.  Never raises.
        """
        root = Path(target_root)
        if not self.config.enabled:
            return None
        if shutil.which("git") is None:
            print_warning("git not found on PATH; skipping repository init.")
            return None
        if (root / ".git").exists():
            return None

        timeout = self.config.timeout
        try:
            _run_git("init", "-q", cwd=root, timeout=timeout)
            _run_git("add", "-A", cwd=root, timeout=timeout)
            _run_git("commit", "-q", "-m", self.config.commit_message, cwd=root, timeout=timeout)
            commit_id = _run_git("rev-parse", "HEAD", cwd=root, timeout=timeout)
        except NotifierError as exc:
            print_warning(f"Git bootstrap skipped: {exc}")
            return None

        print_success("Git initialized and initial commit created.")
        return commit_id or None


# ---------------------------------------------------------------------------
# Summary report
# ---------------------------------------------------------------------------

NEXT_STEPS: list[str] = [
    "Backend setup:",
    "  cd packages/backend",
    "  npm install",
    "  npx prisma generate",
    "  # optional seed",
    "  npx ts-node prisma/seed.ts",
    "  npm run dev",
    "",
    "Frontend setup:",
    "  cd packages/frontend",
    "  npm install",
    "  npm run dev",
    "",
    "Or run the entire stack with Docker (from the repo root):",
    "  docker-compose up --build",
]


def build_summary_data(report: ScaffoldReport, elapsed: float | None = None) -> dict[str, str]:
    """Return the key/value block of the final summary, in display order."""
    data = {
        "Project": str(report.target_root),
        "Timestamp": str(report.run_timestamp),
        "Files": f"{len(report.files_written)} written",
        "Backups": str(len(report.backups)),
    }
    if elapsed is not None:
        data["Duration"] = format_duration(elapsed)
    if report.commit_id:
        data["Git"] = f"initial commit {report.commit_id[:12]}"
    else:
        data["Git"] = "not initialized"
    return data


def build_summary_lines(report: ScaffoldReport) -> list[str]:
    """Return the lines of the final summary panel (without markup)."""
    lines: list[str] = []
    if report.backups:
        lines.append("Backed up:")
        for record in report.backups:
            lines.append(
                f"  {record.original_path.relative_to(report.target_root)}"
                f" -> {record.backup_path.name}"
            )
        lines.append("")

    lines.extend([
        "Nothing was installed or started. Next manual steps:",
        "",
        *NEXT_STEPS,
    ])
    return lines


def print_scaffold_summary(report: ScaffoldReport, elapsed: float | None = None) -> None:
    """Print the summary table followed by the next-steps panel."""
    console.print()
    print_summary_table(build_summary_data(report, elapsed), title="Scaffold Summary")
    console.print(
        Panel(
            escape("\n".join(build_summary_lines(report))),
            title="[bold]Scaffold Complete[/bold]",
            border_style="bold green",
        )
    )
