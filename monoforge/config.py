"""monoforge configuration.

Typed configuration for a scaffold invocation.  All settings use Pydantic v2
models so they are validated at construction time and can be serialised to
and from JSON.  The tool has no environment-driven behaviour: a config is
built from the CLI arguments (or directly, in tests).
"""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_TARGET_DIR = "awesome-monorepo-fixed"
DEFAULT_COMMIT_MESSAGE = "chore: scaffold fixed monorepo (no auto-install)"


class GitConfig(BaseModel):
    """Settings for the best-effort git bootstrap after scaffolding."""

    enabled: bool = Field(default=True, description="Try to init a repo and commit the scaffold")
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE, min_length=1)
    timeout: int = Field(default=60, ge=1, description="Per git command timeout in seconds")


class ScaffoldConfig(BaseModel):
    """Configuration of one scaffold run.

    ``timestamp`` is taken once, when the config is created, and becomes the
    backup suffix for every file relocated during the run.  Pass an explicit
    value to make backups predictable.
    """

    target_dir: Path = Field(default=Path(DEFAULT_TARGET_DIR))
    timestamp: int = Field(default_factory=lambda: int(time.time()), ge=0)
    git: GitConfig = Field(default_factory=GitConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def target_root(self) -> Path:
        """Absolute path of the directory being scaffolded."""
        return self.target_dir.expanduser().absolute()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
