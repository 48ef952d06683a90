"""monoforge -- scaffold a frontend + backend monorepo without installing anything."""

__version__ = "0.1.0"
