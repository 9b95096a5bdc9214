"""Map file reader and writer.

File layout (UTF-8, newline terminated lines):

    a: Treasure          one "<marker>: <label>" line per point of interest
                         blank separator
    Level 1              per level, ascending by id
    3 × 2                "<width> × <height>"
    ...                  height rows of width tile codes, written verbatim
    ...
                         blank separator

The dimension header is what tells a reader how much grid follows, since
rows carry no delimiter other than the newline. The reader also accepts a
plain ``x`` as separator.

Reading is strict: any structural problem raises ``MapFormatError`` naming
the offending line; nothing is recovered partially.
"""

from __future__ import annotations

import os
import re
from typing import Dict, Iterator, List, Tuple

from .container import MapContainer
from .errors import MapFormatError, MapSaveError
from .level import LevelMap
from .logging_utils import get_logger
from .tiles import TILES

log = get_logger(__name__)

DIM_SEPARATOR = "×"
POINT_SEPARATOR = ": "

_LEVEL_RE = re.compile(r"^Level (-?\d+)$")
_DIMS_RE = re.compile(r"^(\d+) ?[×x] ?(\d+)$")


def iter_lines(container: MapContainer) -> Iterator[str]:
    """Yield the file's lines, without line terminators."""
    for marker in sorted(container.points):
        yield f"{marker}{POINT_SEPARATOR}{container.points[marker]}"
    yield ""
    for mp in container.sorted_levels():
        yield f"Level {mp.level}"
        yield f"{mp.width} {DIM_SEPARATOR} {mp.height}"
        yield from mp.rows()
        yield ""


def dumps(container: MapContainer) -> str:
    return "".join(line + "\n" for line in iter_lines(container))


def serialize(container: MapContainer) -> bytes:
    return dumps(container).encode("utf-8")


def write_map(container: MapContainer, path: str) -> int:
    """Write ``container`` to ``path``, replacing any previous content.

    Returns the number of bytes written. Open or write failures raise
    ``MapSaveError``; a failure part way through can leave a truncated file.
    """
    payload = serialize(container)
    try:
        with open(path, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
    except OSError as e:
        log.error(event="map_save_failed", path=path, error=e.strerror or str(e))
        raise MapSaveError(path, e.strerror or str(e)) from e
    log.info(event="map_saved", path=path, levels=len(container.levels), points=len(container.points), bytes=len(payload))
    return len(payload)


def parse_point(line: str) -> Tuple[str, str]:
    """Split a ``"<marker>: <label>"`` entry into its parts."""
    if len(line) < 2 or line[1:3].rstrip() != POINT_SEPARATOR.rstrip() or line[0].isspace():
        raise ValueError(f"expected '<marker>: <label>', got {line!r}")
    return line[0], line[3:]


def parse_map(text: str) -> MapContainer:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    lines = [ln[:-1] if ln.endswith("\r") else ln for ln in lines]

    points: Dict[str, str] = {}
    idx = 0
    while idx < len(lines) and lines[idx] != "":
        try:
            marker, label = parse_point(lines[idx])
        except ValueError as e:
            raise MapFormatError(idx + 1, str(e)) from None
        if marker in points:
            raise MapFormatError(idx + 1, f"duplicate point marker {marker!r}")
        points[marker] = label
        idx += 1

    levels: List[LevelMap] = []
    seen = set()
    while idx < len(lines):
        if lines[idx] == "":
            idx += 1
            continue
        m = _LEVEL_RE.match(lines[idx])
        if not m:
            raise MapFormatError(idx + 1, f"expected 'Level <n>', got {lines[idx]!r}")
        level = int(m.group(1))
        if level in seen:
            raise MapFormatError(idx + 1, f"duplicate level {level}")
        seen.add(level)
        idx += 1
        if idx >= len(lines):
            raise MapFormatError(idx, f"level {level} is missing its dimension header")
        d = _DIMS_RE.match(lines[idx].strip())
        if not d:
            raise MapFormatError(idx + 1, f"bad dimension header {lines[idx]!r}")
        width, height = int(d.group(1)), int(d.group(2))
        if width <= 0 or height <= 0:
            raise MapFormatError(idx + 1, f"level {level} has empty dimensions {width}x{height}")
        idx += 1
        grid = []
        for _ in range(height):
            if idx >= len(lines):
                raise MapFormatError(idx, f"level {level} ends after {len(grid)} of {height} rows")
            row = lines[idx]
            if len(row) != width:
                raise MapFormatError(idx + 1, f"row has {len(row)} tiles, expected {width}")
            bad = set(row) - TILES
            if bad:
                raise MapFormatError(idx + 1, f"unknown tile codes {''.join(sorted(bad))!r}")
            grid.append(list(row))
            idx += 1
        levels.append(LevelMap(level=level, grid=grid, height=height, width=width))

    if not levels:
        raise MapFormatError(None, "file contains no levels")
    return MapContainer.from_levels(levels, points=points)


def read_map(path: str) -> MapContainer:
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    container = parse_map(text)
    log.info(event="map_loaded", path=path, levels=len(container.levels), points=len(container.points))
    return container


__all__ = [
    "DIM_SEPARATOR",
    "iter_lines",
    "dumps",
    "serialize",
    "write_map",
    "parse_point",
    "parse_map",
    "read_map",
]
