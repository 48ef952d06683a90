"""Shared pytest fixtures for the monoforge test suite.

Provides reusable fixtures for:
- A fixed run timestamp and a temporary scaffold target
- A synthetic ten-entry catalog spread over all three packages
- The shipped monorepo catalog and the exact tree it must produce
- A wide Rich console so captured output is not wrapped
"""

from __future__ import annotations

from pathlib import Path

import pytest

from monoforge.scaffolder.catalog import Package, TemplateCatalog, TemplateEntry, load_default_catalog

FIXED_TIMESTAMP = 1700000000


# ---------------------------------------------------------------------------
# Paths & timestamps
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_timestamp() -> int:
    """Run timestamp used as backup suffix in tests."""
    return FIXED_TIMESTAMP


@pytest.fixture
def target_root(tmp_path: Path) -> Path:
    """Scaffold target that does not exist yet."""
    return tmp_path / "awesome-monorepo"


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from wrapping long temporary paths in captured output."""
    from monoforge.utils import console

    monkeypatch.setattr(console, "width", 1000)


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

SYNTHETIC_ENTRIES: list[tuple[Package, str, bytes]] = [
    (Package.ROOT, "README.md", b"# synthetic\n"),
    (Package.ROOT, "config/app.toml", b"name = 'x'\n"),
    (Package.ROOT, "docs/guide/intro.md", b"intro\n"),
    (Package.ROOT, "docs/guide/usage.md", b"usage\n"),
    (Package.BACKEND, "package.json", b"{}\n"),
    (Package.BACKEND, "src/index.ts", b"export {};\n"),
    (Package.BACKEND, "prisma/schema.prisma", b"model A {}\n"),
    (Package.FRONTEND, "package.json", b"{\"name\": \"fe\"}\n"),
    (Package.FRONTEND, "src/main.tsx", b"main\n"),
    (Package.FRONTEND, "src/styles.css", b"body{}\n"),
]


@pytest.fixture
def synthetic_catalog() -> TemplateCatalog:
    """Ten entries over root, backend and frontend, plus one reserved dir."""
    entries = [TemplateEntry(path, content, package) for package, path, content in SYNTHETIC_ENTRIES]
    return TemplateCatalog(entries, reserved_directories=["infra"])


@pytest.fixture(scope="session")
def default_catalog() -> TemplateCatalog:
    """The monorepo catalog shipped with the package."""
    return load_default_catalog()


EXPECTED_FILES: set[str] = {
    "README.md",
    ".gitignore",
    "Makefile",
    "docker-compose.yml",
    ".env.backend",
    "NOTES.txt",
    "packages/backend/package.json",
    "packages/backend/tsconfig.json",
    "packages/backend/tsconfig.build.json",
    "packages/backend/Dockerfile",
    "packages/backend/src/index.ts",
    "packages/backend/prisma/schema.prisma",
    "packages/backend/prisma/seed.ts",
    "packages/frontend/package.json",
    "packages/frontend/tsconfig.json",
    "packages/frontend/vite.config.ts",
    "packages/frontend/tailwind.config.cjs",
    "packages/frontend/index.html",
    "packages/frontend/Dockerfile",
    "packages/frontend/src/main.tsx",
    "packages/frontend/src/App.tsx",
    "packages/frontend/src/styles.css",
}

EXPECTED_DIRS: set[str] = {
    "packages",
    "packages/backend",
    "packages/backend/src",
    "packages/backend/prisma",
    "packages/frontend",
    "packages/frontend/src",
    "infra",
    ".github",
    ".github/workflows",
}


def tree_of(root: Path) -> tuple[set[str], set[str]]:
    """Return ``(files, dirs)`` under *root* as POSIX relative paths."""
    files: set[str] = set()
    dirs: set[str] = set()
    for p in root.rglob("*"):
        rel = p.relative_to(root).as_posix()
        if p.is_dir():
            dirs.add(rel)
        else:
            files.add(rel)
    return files, dirs


@pytest.fixture
def expected_files() -> set[str]:
    """Every file a fresh scaffold must contain, relative to the target."""
    return set(EXPECTED_FILES)


@pytest.fixture
def expected_dirs() -> set[str]:
    """Every directory a fresh scaffold must contain, relative to the target."""
    return set(EXPECTED_DIRS)


@pytest.fixture
def scan_tree():
    """Return the ``tree_of`` helper to tests."""
    return tree_of
