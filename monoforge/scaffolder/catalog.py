"""Template catalog: the static table of files the scaffold writes.

The catalog is data, not code.  ``templates/catalog.yaml`` lists, per
package, the relative paths to generate; the payload for each path is a file
under ``templates/<package>/``.  Payloads are opaque bytes and are written
verbatim, so nothing in them is interpreted or substituted.

A ``TemplateCatalog`` can also be built from an in-memory list of
``TemplateEntry`` objects, which is how the engine is tested against
synthetic catalogs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

import yaml
from pydantic import BaseModel, Field, ValidationError

# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_MANIFEST_NAME = "catalog.yaml"


class CatalogError(ValueError):
    """Raised when the catalog manifest or its payloads are invalid."""


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------


class Package(str, Enum):
    """Scaffold packages, declared in processing order."""

    ROOT = "root"
    BACKEND = "backend"
    FRONTEND = "frontend"

    @property
    def root(self) -> PurePosixPath:
        """Directory of the package relative to the target root."""
        return _PACKAGE_ROOTS[self]

    @property
    def order(self) -> int:
        return list(Package).index(self)


_PACKAGE_ROOTS: dict[Package, PurePosixPath] = {
    Package.ROOT: PurePosixPath("."),
    Package.BACKEND: PurePosixPath("packages/backend"),
    Package.FRONTEND: PurePosixPath("packages/frontend"),
}


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateEntry:
    """One file of the scaffold."""

    relative_path: str
    content: bytes
    package: Package = Package.ROOT

    def __post_init__(self) -> None:
        _check_relative(self.relative_path)

    @property
    def target_path(self) -> PurePosixPath:
        """Path of the file relative to the target root."""
        return self.package.root / self.relative_path


def _check_relative(path: str) -> PurePosixPath:
    p = PurePosixPath(path)
    if not path or p.is_absolute() or ".." in p.parts or p == PurePosixPath("."):
        raise CatalogError(f"Catalog path must be relative and inside its package: {path!r}")
    return p


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TemplateCatalog:
    """Ordered collection of template entries and reserved directories.

    Iteration yields entries package by package (root, backend, frontend) and
    in declaration order within a package, whatever order they were given in.
    """

    def __init__(
        self,
        entries: Iterable[TemplateEntry],
        reserved_directories: Iterable[str] = (),
    ) -> None:
        declared = list(entries)
        self._entries: tuple[TemplateEntry, ...] = tuple(
            sorted(declared, key=lambda e: e.package.order)
        )
        self.reserved_directories: tuple[PurePosixPath, ...] = tuple(
            _check_relative(d) for d in reserved_directories
        )

        seen: set[PurePosixPath] = set()
        for entry in self._entries:
            if entry.target_path in seen:
                raise CatalogError(f"Duplicate catalog path: {entry.target_path}")
            seen.add(entry.target_path)

    def __iter__(self) -> Iterator[TemplateEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def for_package(self, package: Package) -> list[TemplateEntry]:
        """Return the entries of a single package, in order."""
        return [e for e in self._entries if e.package is package]

    def target_paths(self) -> list[PurePosixPath]:
        """Every file path the catalog produces, relative to the target root."""
        return [e.target_path for e in self._entries]


# ---------------------------------------------------------------------------
# Manifest loading
# ---------------------------------------------------------------------------


class _ManifestEntry(BaseModel):
    path: str
    source: str | None = Field(default=None, description="Payload file name if it differs from path")


class _Manifest(BaseModel):
    reserved_directories: list[str] = Field(default_factory=list)
    packages: dict[Package, list[_ManifestEntry]] = Field(default_factory=dict)


def load_catalog(template_dir: str | Path) -> TemplateCatalog:
    """Load the catalog manifest and every payload under *template_dir*.

    Raises:
        CatalogError: The manifest is missing or malformed, or a payload
            file cannot be read.
    """
    base = Path(template_dir)
    manifest_path = base / _MANIFEST_NAME
    try:
        raw = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
        manifest = _Manifest.model_validate(raw)
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        raise CatalogError(f"Invalid catalog manifest {manifest_path}: {exc}") from exc

    entries: list[TemplateEntry] = []
    for package, items in manifest.packages.items():
        for item in items:
            payload = base / package.value / (item.source or item.path)
            try:
                content = payload.read_bytes()
            except OSError as exc:
                raise CatalogError(f"Cannot read template payload {payload}: {exc}") from exc
            entries.append(TemplateEntry(item.path, content, package))

    return TemplateCatalog(entries, manifest.reserved_directories)


def load_default_catalog() -> TemplateCatalog:
    """Load the monorepo catalog shipped with the package."""
    return load_catalog(_DEFAULT_TEMPLATE_DIR)
