"""Directory layout builder.

Every template write is preceded by ``ensure_dir`` on its parent so that no
write ever targets a directory that does not exist yet.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import FilesystemError, FilesystemErrorKind


def ensure_dir(path: str | Path) -> list[Path]:
    """Create *path* and every missing ancestor.

    A no-op when *path* already is a directory (a symlink to a directory
    counts).

    Returns:
        The directories that were created, outermost first.

    Raises:
        FilesystemError: ``PATH_IS_NOT_DIRECTORY`` if an existing component
            is not a directory, ``CREATE_FAILED`` if ``mkdir`` fails.
    """
    target = Path(path)
    # os.path.isdir reports an unreadable component as "not a directory"
    # instead of raising, so the mkdir below surfaces the real error.
    if os.path.isdir(target):
        return []

    created: list[Path] = []
    # Walk from the filesystem root down so the first offending component is
    # the one reported.
    for component in reversed([target, *target.parents]):
        if os.path.isdir(component):
            continue
        if os.path.lexists(component):
            raise FilesystemError(component, FilesystemErrorKind.PATH_IS_NOT_DIRECTORY)
        try:
            component.mkdir()
        except FileExistsError:
            # Created underneath us; only a problem if it is not a directory.
            if not os.path.isdir(component):
                raise FilesystemError(
                    component, FilesystemErrorKind.PATH_IS_NOT_DIRECTORY
                ) from None
            continue
        except OSError as exc:
            raise FilesystemError(component, FilesystemErrorKind.CREATE_FAILED, exc) from exc
        created.append(component)
    return created
