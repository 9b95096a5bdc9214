"""Display boundary used by the map container.

The container never talks to a terminal directly. It renders through an
object offering the methods below, all in grid coordinates (the display
adds the border offset itself):

    clear_frame()                 wipe the frame buffer
    draw_border()                 box the edges of the visible rectangle
    put_row(row, text)            write one grid row verbatim
    put_cursor(row, col, tile)    rewrite one cell with the reverse attribute
    present()                     push the buffer to the screen
    frame_size                    (height, width) of the rectangle, border included
    scroll_to(row, col)           shift the viewport so the cell is visible

A grid larger than the frame is viewed through a window whose top-left grid
cell is ``origin``. The container scrolls to the cursor before writing rows,
so the reversed cell is always on screen.

``CharDisplay`` implements the buffering once; subclasses decide what
``present`` does with the finished frame. ``TextDisplay`` keeps plain text
snapshots and backs the tests and the ``show`` command; the Textual map view
in :mod:`mapper.tui` publishes the same buffer as rich text.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

BORDER_H = "─"
BORDER_V = "│"
CORNERS = ("┌", "┐", "└", "┘")


class CharDisplay:
    def __init__(self, height: int = 0, width: int = 0):
        self._height = max(0, height)
        self._width = max(0, width)
        self._buffer: List[List[str]] = []
        # Grid cell shown just inside the top-left corner
        self.origin: Tuple[int, int] = (0, 0)
        # Frame coordinates (border included) of the cell drawn reversed
        self.reversed_cell: Optional[Tuple[int, int]] = None
        self.clear_frame()

    @property
    def frame_size(self) -> Tuple[int, int]:
        return self._height, self._width

    def resize(self, height: int, width: int) -> None:
        self._height = max(0, height)
        self._width = max(0, width)
        self.clear_frame()

    def clear_frame(self) -> None:
        self._buffer = [[" "] * self._width for _ in range(self._height)]
        self.reversed_cell = None

    def draw_border(self) -> None:
        h, w = self._height, self._width
        if h < 2 or w < 2:
            return
        for x in range(1, w - 1):
            self._buffer[0][x] = BORDER_H
            self._buffer[h - 1][x] = BORDER_H
        for y in range(1, h - 1):
            self._buffer[y][0] = BORDER_V
            self._buffer[y][w - 1] = BORDER_V
        tl, tr, bl, br = CORNERS
        self._buffer[0][0] = tl
        self._buffer[0][w - 1] = tr
        self._buffer[h - 1][0] = bl
        self._buffer[h - 1][w - 1] = br

    def scroll_to(self, row: int, col: int) -> None:
        """Move ``origin`` as little as possible to bring a grid cell into view."""
        height, width = self.frame_size
        inner_h, inner_w = height - 2, width - 2
        if inner_h < 1 or inner_w < 1:
            return
        oy, ox = self.origin
        if row < oy:
            oy = row
        elif row >= oy + inner_h:
            oy = row - inner_h + 1
        if col < ox:
            ox = col
        elif col >= ox + inner_w:
            ox = col - inner_w + 1
        self.origin = (max(0, oy), max(0, ox))

    def _to_frame(self, row: int, col: int) -> Tuple[int, int]:
        oy, ox = self.origin
        return row - oy + 1, col - ox + 1

    def _inside(self, y: int, x: int) -> bool:
        return 1 <= y < self._height - 1 and 1 <= x < self._width - 1

    def put_row(self, row: int, text: str) -> None:
        y, _ = self._to_frame(row, 0)
        if not 1 <= y < self._height - 1:
            return
        for i, ch in enumerate(text[self.origin[1] :]):
            x = i + 1
            if not self._inside(y, x):
                break
            self._buffer[y][x] = ch

    def put_cursor(self, row: int, col: int, tile: str) -> None:
        y, x = self._to_frame(row, col)
        if not self._inside(y, x):
            return
        self._buffer[y][x] = tile
        self.reversed_cell = (y, x)

    def present(self) -> None:  # pragma: no cover - overridden
        pass

    def lines(self) -> List[str]:
        return ["".join(r) for r in self._buffer]


class TextDisplay(CharDisplay):
    """Plain text display keeping every presented frame."""

    def __init__(self, height: int = 0, width: int = 0):
        super().__init__(height, width)
        self.frames: List[str] = []

    @property
    def present_count(self) -> int:
        return len(self.frames)

    @property
    def last_frame(self) -> str:
        return self.frames[-1] if self.frames else ""

    def present(self) -> None:
        self.frames.append("\n".join(self.lines()))


def display_for(height: int, width: int) -> TextDisplay:
    """A text display just large enough for a ``height`` x ``width`` grid."""
    return TextDisplay(height + 2, width + 2)


__all__ = ["CharDisplay", "TextDisplay", "display_for"]
