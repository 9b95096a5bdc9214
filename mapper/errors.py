from __future__ import annotations

from typing import Optional


class MapError(Exception):
    """Base class for map editor failures."""


class MapSaveError(MapError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"could not save map to {path}: {reason}")
        self.path = path
        self.reason = reason


class MapFormatError(MapError):
    def __init__(self, line: Optional[int], reason: str):
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}{reason}")
        self.line = line
        self.reason = reason


__all__ = ["MapError", "MapSaveError", "MapFormatError"]
