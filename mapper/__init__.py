"""
project: Keep Mapper
module: __init__.py
License: MIT

Terminal editor for tile-based dungeon maps.

Public interface: the tile alphabet, level and container model, the map
file reader/writer and the edit session. The Textual front end lives in
``mapper.tui`` and is imported lazily by ``run.py`` so the core stays
usable without a terminal.
"""

from .container import MapContainer
from .display import CharDisplay, TextDisplay
from .errors import MapError, MapFormatError, MapSaveError
from .level import LevelMap, new_level
from .serializer import dumps, parse_map, read_map, serialize, write_map
from .session import Command, EditSession
from .tiles import (
    DOOR_CLOSED,
    DOOR_OPEN,
    NONE,
    ROOM,
    STAIRS_DOWN,
    STAIRS_UP,
    TILES,
)  # noqa: F401

__all__ = [
    "MapContainer",
    "CharDisplay",
    "TextDisplay",
    "MapError",
    "MapFormatError",
    "MapSaveError",
    "LevelMap",
    "new_level",
    "dumps",
    "parse_map",
    "read_map",
    "serialize",
    "write_map",
    "Command",
    "EditSession",
    "NONE",
    "ROOM",
    "DOOR_CLOSED",
    "DOOR_OPEN",
    "STAIRS_UP",
    "STAIRS_DOWN",
    "TILES",
]
