"""Edit session: turns discrete input commands into map container calls.

The front end (see :mod:`mapper.tui`) only translates physical keys and
pointer events into the calls below; everything stateful lives here or in
the container. Pointer drags follow press/motion/release semantics: a press
arms tracking and moves the cursor, each motion report while armed moves it
again, and a release disarms.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .config import DEFAULT_MAP_FILE
from .container import MapContainer
from .logging_utils import get_logger
from .serializer import write_map

log = get_logger(__name__)


class Command(str, Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE_DRAW_MODE = "toggle_draw_mode"
    PLACE_STAIRS = "place_stairs"
    PLACE_DOOR = "place_door"
    SAVE = "save"
    QUIT = "quit"


MOVE_DELTAS = {
    Command.MOVE_UP: (-1, 0),
    Command.MOVE_DOWN: (1, 0),
    Command.MOVE_LEFT: (0, -1),
    Command.MOVE_RIGHT: (0, 1),
}

KEY_COMMANDS = {
    "q": Command.QUIT,
    "s": Command.SAVE,
    "r": Command.TOGGLE_DRAW_MODE,
    "t": Command.PLACE_STAIRS,
    "d": Command.PLACE_DOOR,
    "up": Command.MOVE_UP,
    "down": Command.MOVE_DOWN,
    "left": Command.MOVE_LEFT,
    "right": Command.MOVE_RIGHT,
}


class EditSession:
    def __init__(self, container: MapContainer, filename: str = DEFAULT_MAP_FILE):
        self.container = container
        self.filename = filename
        self.dragging = False
        self.running = True

    def dispatch(self, command: Command) -> bool:
        """Apply one command. Returns False once the session has quit."""
        if not self.running:
            return False
        log.debug(event="command", command=command.value)
        if command in MOVE_DELTAS:
            self.move(*MOVE_DELTAS[command])
        elif command is Command.TOGGLE_DRAW_MODE:
            self.container.toggle_draw_mode()
        elif command is Command.PLACE_STAIRS:
            self.container.place_stairs()
        elif command is Command.PLACE_DOOR:
            self.container.place_door()
        elif command is Command.SAVE:
            self.save()
        elif command is Command.QUIT:
            self.running = False
            log.info(event="session_quit", filename=self.filename)
        return self.running

    def dispatch_key(self, key: str) -> bool:
        command = KEY_COMMANDS.get(key)
        if command is None:
            return self.running
        return self.dispatch(command)

    def move(self, drow: int, dcol: int) -> Tuple[int, int]:
        cy, cx = self.container.cursor
        return self.container.move_cursor(cy + drow, cx + dcol)

    def save(self) -> int:
        """Write the map to ``self.filename``; raises ``MapSaveError`` on failure."""
        return write_map(self.container, self.filename)

    def set_point(self, marker: str, label: str) -> None:
        """Add or relabel a point of interest; an empty label removes it."""
        if label.strip():
            self.container.set_point(marker, label)
            log.info(event="point_set", marker=marker, label=label.strip())
        elif self.container.remove_point(marker):
            log.info(event="point_removed", marker=marker)

    # ------------------------------------------------------------------
    # Pointer drag
    # ------------------------------------------------------------------
    def pointer_press(self, row: int, col: int) -> Tuple[int, int]:
        self.dragging = True
        return self.container.move_cursor(row, col)

    def pointer_motion(self, row: int, col: int) -> Tuple[int, int]:
        if not self.dragging:
            return self.container.cursor
        return self.container.move_cursor(row, col)

    def pointer_release(self, row: int, col: int) -> Tuple[int, int]:
        self.dragging = False
        return self.container.cursor


__all__ = ["Command", "MOVE_DELTAS", "KEY_COMMANDS", "EditSession"]
