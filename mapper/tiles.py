# Tile constants centralized for modular imports
NONE = " "
ROOM = "."
DOOR_CLOSED = "#"
DOOR_OPEN = "="
STAIRS_UP = "^"
STAIRS_DOWN = "v"

TILES = frozenset({NONE, ROOM, DOOR_CLOSED, DOOR_OPEN, STAIRS_UP, STAIRS_DOWN})

TILE_NAMES = {
    NONE: "none",
    ROOM: "room",
    DOOR_CLOSED: "door_closed",
    DOOR_OPEN: "door_open",
    STAIRS_UP: "stairs_up",
    STAIRS_DOWN: "stairs_down",
}

# Toggle cycles: current tile -> next tile. Tiles not listed fall back to the
# entry for ROOM, which starts the cycle.
STAIRS_CYCLE = {
    ROOM: STAIRS_DOWN,
    STAIRS_DOWN: STAIRS_UP,
    STAIRS_UP: ROOM,
}

DOOR_CYCLE = {
    ROOM: DOOR_CLOSED,
    DOOR_CLOSED: DOOR_OPEN,
    DOOR_OPEN: ROOM,
}


def next_tile(cycle: dict, current: str) -> str:
    """Return the tile that follows ``current`` in ``cycle``."""
    return cycle.get(current, cycle[ROOM])


def tile_name(ch: str) -> str:
    return TILE_NAMES.get(ch, "unknown")


__all__ = [
    "NONE",
    "ROOM",
    "DOOR_CLOSED",
    "DOOR_OPEN",
    "STAIRS_UP",
    "STAIRS_DOWN",
    "TILES",
    "TILE_NAMES",
    "STAIRS_CYCLE",
    "DOOR_CYCLE",
    "next_tile",
    "tile_name",
]
