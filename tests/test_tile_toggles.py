import pytest

from mapper.tiles import (
    DOOR_CLOSED,
    DOOR_OPEN,
    NONE,
    ROOM,
    STAIRS_DOWN,
    STAIRS_UP,
    tile_name,
)


def _start_at(container, tile):
    container.move_cursor(1, 1)
    container.current_map.set_tile(1, 1, tile)


def test_door_cycle_from_room(container):
    _start_at(container, ROOM)
    seen = [container.place_door() for _ in range(3)]
    assert seen == [DOOR_CLOSED, DOOR_OPEN, ROOM]
    assert container.tile_at() == ROOM


def test_stairs_cycle_from_room(container):
    _start_at(container, ROOM)
    seen = [container.place_stairs() for _ in range(3)]
    assert seen == [STAIRS_DOWN, STAIRS_UP, ROOM]
    assert container.tile_at() == ROOM


@pytest.mark.parametrize("start", [NONE, ROOM, STAIRS_UP, STAIRS_DOWN])
def test_door_on_other_tiles_starts_closed(container, start):
    _start_at(container, start)
    assert container.place_door() == DOOR_CLOSED


@pytest.mark.parametrize("start", [NONE, ROOM, DOOR_CLOSED, DOOR_OPEN])
def test_stairs_on_other_tiles_start_down(container, start):
    _start_at(container, start)
    assert container.place_stairs() == STAIRS_DOWN


def test_cycle_keyed_off_current_value(container):
    # A door reached by painting behaves exactly like one placed directly
    _start_at(container, DOOR_OPEN)
    assert container.place_door() == ROOM
    assert container.place_door() == DOOR_CLOSED


def test_toggles_only_touch_cursor_cell(container):
    container.move_cursor(2, 3)
    container.place_door()
    container.place_stairs()
    painted = [
        (y, x)
        for y, row in enumerate(container.current_map.grid)
        for x, ch in enumerate(row)
        if ch != NONE
    ]
    assert painted == [(2, 3)]


def test_toggles_redraw(container, text_display):
    before = text_display.present_count
    container.place_door()
    container.place_stairs()
    assert text_display.present_count == before + 2


def test_tile_name_lookup():
    assert tile_name(DOOR_OPEN) == "door_open"
    assert tile_name(NONE) == "none"
    assert tile_name("@") == "unknown"
