"""Textual front end for the map editor.

Layout:
 - Menu bar (draw-mode entry shown reversed while active)
 - Status line (current level, target file, last save result)
 - Map view filling the rest of the screen
 - Point-of-interest input line (hidden until ``p`` is pressed)

The app owns no editing logic: keys are looked up in ``KEY_COMMANDS`` and
handed to the ``EditSession``, mouse press/drag/release events become the
session's pointer calls. The map view is the container's display, so every
mutation lands on screen before the next event is processed.

Run with: `python run.py edit`
"""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Static

from .config import EditorConfig
from .container import MapContainer
from .display import CharDisplay
from .errors import MapSaveError
from .logging_utils import get_logger
from .serializer import parse_point
from .session import KEY_COMMANDS, Command, EditSession

log = get_logger(__name__)

MENU = [
    ("r", "Room draw mode"),
    ("d", "Door"),
    ("t", "Stairs"),
    ("p", "Point of interest"),
    ("s", "Save"),
    ("q", "Quit"),
]


def build_menu(drawing: bool) -> Text:
    """Menu bar text; the draw-mode entry is reversed while drawing."""
    menu = Text(no_wrap=True, overflow="crop")
    for i, (key, label) in enumerate(MENU):
        if i:
            menu.append("  ")
        style = "reverse" if key == "r" and drawing else None
        menu.append(f"{key} = {label}", style=style)
    return menu


class RichDisplay(CharDisplay):
    """Frame buffer that publishes itself to a Static widget as rich text."""

    def __init__(self, view: Static):
        super().__init__()
        self.view = view

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for y, line in enumerate(self.lines()):
            if y:
                text.append("\n")
            if self.reversed_cell and self.reversed_cell[0] == y:
                x = self.reversed_cell[1]
                text.append(line[:x])
                text.append(line[x], style="reverse")
                text.append(line[x + 1 :])
            else:
                text.append(line)
        return text

    def present(self) -> None:
        self.view.update(self.to_text())


class MapView(Static):
    """Bordered grid view; forwards pointer events to the edit session."""

    can_focus = True

    def __init__(self, **kwargs):
        super().__init__("", **kwargs)
        self.grid_display = RichDisplay(self)
        self.session: Optional[EditSession] = None

    def _cell(self, event: events.MouseEvent):
        # Grid cell under the pointer; the first row/column is the border
        oy, ox = self.grid_display.origin
        return event.y - 1 + oy, event.x - 1 + ox

    def on_resize(self, event: events.Resize) -> None:
        self.grid_display.resize(event.size.height, event.size.width)
        if self.session is not None:
            self.session.container.render()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.session is None or event.button != 1:
            return
        self.capture_mouse()
        self.session.pointer_press(*self._cell(event))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.session is not None and self.session.dragging:
            self.session.pointer_motion(*self._cell(event))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.session is None:
            return
        self.session.pointer_release(*self._cell(event))
        self.release_mouse()


class MapEditorApp(App):
    """Interactive dungeon map editor."""

    CSS = """
    Screen { layout: vertical; }
    #menu { height: 1; }
    #status { height: 1; }
    #map { height: 1fr; }
    #point-input { display: none; }
    #point-input.visible { display: block; }
    """

    BINDINGS = [
        Binding(key, f"edit('{command.value}')", command.value.replace("_", " "), show=False)
        for key, command in KEY_COMMANDS.items()
    ] + [
        Binding("p", "point", "Point of interest", show=False),
        Binding("escape", "cancel_point", "Cancel", show=False),
    ]

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        container: Optional[MapContainer] = None,
    ) -> None:
        super().__init__()
        self.editor_config = config or EditorConfig()
        self._initial_container = container
        self.session: Optional[EditSession] = None
        self.last_status = ""

    def compose(self) -> ComposeResult:  # type: ignore[override]
        self.menu_bar = Static(id="menu")
        self.status_line = Static(id="status")
        self.map_view = MapView(id="map")
        self.point_input = Input(placeholder="<marker>: <label>  (empty label removes)", id="point-input")
        yield self.menu_bar
        yield self.status_line
        yield self.map_view
        yield self.point_input

    def on_mount(self) -> None:  # type: ignore[override]
        """Lifecycle hook: size the first level once layout is known."""
        self.call_after_refresh(self.start_session)

    def start_session(self) -> None:
        if self.session is not None:
            return
        container = self._initial_container
        if container is None:
            height = max(1, self.map_view.size.height - 2)
            width = max(1, self.map_view.size.width - 2)
            container = MapContainer(height, width)
        container.display = self.map_view.grid_display
        self.session = EditSession(container, filename=self.editor_config.filename)
        self.map_view.session = self.session
        self.map_view.focus()
        log.info(event="session_start", height=container.height, width=container.width, filename=self.editor_config.filename)
        self.refresh_chrome()
        container.render()

    def refresh_chrome(self) -> None:
        drawing = bool(self.session and self.session.container.draw_mode)
        self.menu_bar.update(build_menu(drawing))
        level = self.session.container.current_level if self.session else 1
        status = f"Level {level}   {self.editor_config.filename}"
        if self.last_status:
            status += f"   {self.last_status}"
        self.status_line.update(Text(status, no_wrap=True, overflow="crop"))

    async def action_edit(self, name: str) -> None:
        # Keys typed into the point input must not edit the hidden map
        if self.session is None or self.point_input.has_class("visible"):
            return
        command = Command(name)
        try:
            running = self.session.dispatch(command)
        except MapSaveError as e:
            self.last_status = "save failed"
            self.notify(str(e), title="Save failed", severity="error")
            running = True
        else:
            if command is Command.SAVE:
                self.last_status = "saved"
                self.notify(f"Map saved to {self.editor_config.filename}")
        self.refresh_chrome()
        if not running:
            self.exit()

    def action_point(self) -> None:
        if self.session is None:
            return
        self.point_input.value = ""
        self.point_input.add_class("visible")
        self.point_input.focus()

    def action_cancel_point(self) -> None:
        self._hide_point_input()

    def _hide_point_input(self) -> None:
        self.point_input.remove_class("visible")
        self.map_view.focus()

    def on_input_submitted(self, message: Input.Submitted) -> None:
        if message.input is not self.point_input or self.session is None:
            return
        try:
            marker, label = parse_point(message.value)
            self.session.set_point(marker, label)
        except ValueError as e:
            self.notify(str(e), title="Point of interest", severity="warning")
            return
        self._hide_point_input()
        self.refresh_chrome()


def run_editor(config: EditorConfig, container: Optional[MapContainer] = None) -> None:  # pragma: no cover (interactive)
    app = MapEditorApp(config=config, container=container)
    app.run()
