"""Map container: the levels, points of interest and edit cursor of a session.

Editing contract:
    * ``move_cursor`` clamps out-of-range requests to a no-op and always
      redraws, even when nothing changed, so the highlighted cell is fresh.
    * In draw mode every cell the cursor arrives on is painted ``ROOM``,
      whatever it held before; toggling the mode paints nothing.
    * ``place_stairs`` / ``place_door`` step the cursor tile through the
      fixed cycles in :mod:`mapper.tiles` and redraw.
    * ``render`` is a pure projection onto a display and never mutates the
      map; it only scrolls the display so the cursor cell stays visible.

The data model holds any number of levels, but a session edits a single
current level; there is no operation to switch it.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .level import LevelMap, new_level
from .logging_utils import get_logger
from .tiles import DOOR_CYCLE, ROOM, STAIRS_CYCLE, next_tile

log = get_logger(__name__)


class MapContainer:
    def __init__(self, height: int, width: int, display=None):
        first = new_level(height, width, level=1)
        self.points: Dict[str, str] = {}
        self.levels: Dict[int, LevelMap] = {first.level: first}
        self.current_level: int = first.level
        self.cursor: Tuple[int, int] = (0, 0)
        self.draw_mode: bool = False
        self.display = display

    @classmethod
    def from_levels(
        cls,
        levels: Iterable[LevelMap],
        points: Optional[Dict[str, str]] = None,
        display=None,
    ) -> "MapContainer":
        """Assemble a container from existing levels (lowest id becomes current)."""
        ordered = sorted(levels, key=lambda m: m.level)
        if not ordered:
            raise ValueError("a map needs at least one level")
        mc = cls.__new__(cls)
        mc.points = dict(points or {})
        mc.levels = {}
        for m in ordered:
            mc.add_level(m)
        mc.current_level = ordered[0].level
        mc.cursor = (0, 0)
        mc.draw_mode = False
        mc.display = display
        return mc

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------
    @property
    def current_map(self) -> LevelMap:
        return self.levels[self.current_level]

    @property
    def height(self) -> int:
        return self.current_map.height

    @property
    def width(self) -> int:
        return self.current_map.width

    def add_level(self, level_map: LevelMap) -> None:
        if level_map.level in self.levels:
            raise ValueError(f"level {level_map.level} already exists")
        self.levels[level_map.level] = level_map

    def sorted_levels(self) -> List[LevelMap]:
        return [self.levels[k] for k in sorted(self.levels)]

    def tile_at(self, row: Optional[int] = None, col: Optional[int] = None) -> str:
        """Tile on the current level; defaults to the cursor cell."""
        cy, cx = self.cursor
        return self.current_map.tile(cy if row is None else row, cx if col is None else col)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def move_cursor(self, row: int, col: int) -> Tuple[int, int]:
        mp = self.current_map
        if mp.contains(row, col):
            self.cursor = (row, col)
            if self.draw_mode:
                mp.set_tile(row, col, ROOM)
        self.redraw()
        return self.cursor

    def toggle_draw_mode(self) -> bool:
        self.draw_mode = not self.draw_mode
        log.debug(event="draw_mode", enabled=self.draw_mode)
        return self.draw_mode

    def place_stairs(self) -> str:
        return self._cycle_cursor_tile(STAIRS_CYCLE)

    def place_door(self) -> str:
        return self._cycle_cursor_tile(DOOR_CYCLE)

    def _cycle_cursor_tile(self, cycle: dict) -> str:
        cy, cx = self.cursor
        tile = next_tile(cycle, self.current_map.tile(cy, cx))
        self.current_map.set_tile(cy, cx, tile)
        self.redraw()
        return tile

    # ------------------------------------------------------------------
    # Points of interest
    # ------------------------------------------------------------------
    def set_point(self, marker: str, label: str) -> None:
        if len(marker) != 1 or marker.isspace():
            raise ValueError(f"marker must be a single visible character, got {marker!r}")
        label = label.strip()
        if "\n" in label or "\r" in label:
            raise ValueError("point labels must fit on one line")
        self.points[marker] = label

    def remove_point(self, marker: str) -> bool:
        return self.points.pop(marker, None) is not None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, display=None) -> None:
        display = display if display is not None else self.display
        if display is None:
            return
        mp = self.current_map
        cy, cx = self.cursor
        display.clear_frame()
        display.draw_border()
        display.scroll_to(cy, cx)
        for i, row in enumerate(mp.rows()):
            display.put_row(i, row)
        display.put_cursor(cy, cx, mp.tile(cy, cx))
        display.present()

    def redraw(self) -> None:
        self.render()


__all__ = ["MapContainer"]
