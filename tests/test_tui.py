"""Headless runs of the Textual editor via ``App.run_test``."""

import asyncio

import pytest

from mapper.config import EditorConfig
from mapper.container import MapContainer
from mapper.serializer import read_map
from mapper.tiles import DOOR_CLOSED, ROOM
from mapper.tui import MapEditorApp, MapView, RichDisplay, build_menu

pytestmark = pytest.mark.tui

SIZE = (40, 12)


def _app(tmp_path, container=None):
    return MapEditorApp(config=EditorConfig(filename=str(tmp_path / "keep.map")), container=container)


def test_level_sized_to_view_and_keys_edit(tmp_path):
    async def scenario():
        app = _app(tmp_path)
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            mc = app.session.container
            assert mc.height == app.map_view.size.height - 2
            assert mc.width == app.map_view.size.width - 2
            assert mc.current_level == 1

            await pilot.press("down", "r", "right", "right", "r", "d")
            await pilot.pause()
            assert mc.cursor == (1, 2)
            assert mc.tile_at(1, 1) == ROOM
            assert mc.tile_at(1, 2) == DOOR_CLOSED
            assert mc.draw_mode is False

            await pilot.press("up", "up")
            await pilot.pause()
            assert mc.cursor == (0, 2)

    asyncio.run(scenario())


def test_save_and_quit(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(3, 3))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.press("t", "s")
            await pilot.pause()
            assert app.last_status == "saved"
            await pilot.press("q")
            assert app.session.running is False

    asyncio.run(scenario())
    loaded = read_map(str(tmp_path / "keep.map"))
    assert loaded.tile_at(0, 0) == "v"


def test_save_failure_keeps_session(tmp_path):
    async def scenario():
        cfg = EditorConfig(filename=str(tmp_path / "missing" / "keep.map"))
        app = MapEditorApp(config=cfg, container=MapContainer(3, 3))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.press("s")
            await pilot.pause()
            assert app.last_status == "save failed"
            assert app.session.running is True

    asyncio.run(scenario())


def test_point_of_interest_entry(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(3, 3))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.press("p")
            await pilot.pause()
            assert app.point_input.has_class("visible")
            app.point_input.value = "a: Treasure"
            await pilot.press("enter")
            await pilot.pause()
            assert app.session.container.points == {"a": "Treasure"}
            assert not app.point_input.has_class("visible")

    asyncio.run(scenario())


def test_click_moves_cursor_inside_border(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(5, 10))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.click(MapView, offset=(4, 3))
            await pilot.pause()
            assert app.session.container.cursor == (2, 3)
            assert app.session.dragging is False

    asyncio.run(scenario())


def test_draw_mode_toggles_from_keyboard(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(3, 3))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.press("r")
            await pilot.pause()
            assert app.session.container.draw_mode is True
            size = app.map_view.size
            assert app.map_view.grid_display.frame_size == (size.height, size.width)
            lines = app.map_view.grid_display.to_text().plain.split("\n")
            assert lines[0] == "┌" + "─" * (size.width - 2) + "┐"
            assert lines[-1] == "└" + "─" * (size.width - 2) + "┘"
            assert lines[1].startswith("│   ")

    asyncio.run(scenario())


def test_arrow_keys_ignored_while_typing_point(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(3, 3))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            await pilot.press("r", "p")
            await pilot.pause()
            await pilot.press("d", "r", "t", "q")
            await pilot.press("down", "right")
            await pilot.pause()
            mc = app.session.container
            assert app.point_input.value == "drtq"
            assert mc.cursor == (0, 0)
            assert mc.tile_at(1, 0) == " "
            assert app.session.running is True

            app.action_cancel_point()
            await pilot.pause()
            await pilot.press("down")
            await pilot.pause()
            assert mc.cursor == (1, 0)

    asyncio.run(scenario())


def test_cursor_stays_visible_on_map_larger_than_view(tmp_path):
    async def scenario():
        app = _app(tmp_path, container=MapContainer(30, 80))
        async with app.run_test(size=SIZE) as pilot:
            await pilot.pause()
            for _ in range(20):
                await pilot.press("down")
            await pilot.pause()
            display = app.map_view.grid_display
            assert app.session.container.cursor == (20, 0)
            assert display.reversed_cell is not None
            height, _ = display.frame_size
            assert display.reversed_cell == (height - 2, 1)
            assert display.origin == (20 - (height - 2) + 1, 0)

            # Clicks land on the scrolled cell, not the unscrolled one
            await pilot.click(MapView, offset=(3, 1))
            await pilot.pause()
            assert app.session.container.cursor == (display.origin[0], 2)

    asyncio.run(scenario())


def test_menu_bar_reverses_draw_entry():
    off = build_menu(False)
    on = build_menu(True)
    assert "r = Room draw mode" in on.plain
    assert off.plain == on.plain
    assert not any(span.style == "reverse" for span in off.spans)
    reversed_spans = [on.plain[s.start : s.end] for s in on.spans if s.style == "reverse"]
    assert reversed_spans == ["r = Room draw mode"]


def test_rich_frame_reverses_cursor_cell():
    mc = MapContainer(2, 3)
    mc.move_cursor(1, 2)
    display = RichDisplay(view=None)
    display.resize(4, 5)
    display.present = lambda: None
    mc.render(display)
    text = display.to_text()
    cursor = [text.plain[s.start : s.end] for s in text.spans if s.style == "reverse"]
    assert cursor == [" "]
    assert text.plain.split("\n")[2] == "│   │"
