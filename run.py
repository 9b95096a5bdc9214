"""Keep Mapper CLI entry point.

Provides subcommands for launching the interactive map editor and for
printing a saved map. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mapper.config import EditorConfig
from mapper.display import display_for
from mapper.errors import MapFormatError
from mapper.logging_utils import configure_logging, get_logger
from mapper.serializer import read_map
from mapper.tiles import tile_name

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except Exception:  # pragma: no cover
    _COLOR_ENABLED = False
if _COLOR_ENABLED:
    _color_init()  # pragma: no cover

log = get_logger("mapper.cli")


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Keep Mapper

    Paint dungeon levels in the terminal: room floors, doors, stairs and
    points of interest, saved to a flat text map file. Configuration can be
    provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAPPER_FILE       Map file to save to (default: keep.map)
          MAPPER_OPEN       Load MAPPER_FILE on start if it exists (1/0, default: 0)
          MAPPER_LOG_FILE   Log file path (default: instance/mapper.log)
          MAPPER_LOG_LEVEL  debug, info, warn or error (default: info)
          MAPPER_LOG_JSON   Emit log records as JSON (1/0, default: 0)

        Examples:
          # Start a fresh map sized to the terminal
          python run.py edit

          # Continue editing an existing map
          python run.py edit --file castle.map --open

          # Print a saved map
          python run.py show castle.map

        Editor keys:
          arrows  move cursor            r  room draw mode on/off
          d       door (closed/open/off) t  stairs (down/up/off)
          p       point of interest      s  save
          q       quit                   mouse drag paints in draw mode
        """
    )

    parser = argparse.ArgumentParser(
        prog="Mapper",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Keep Mapper {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # edit subcommand
    edit_parser = subparsers.add_parser(
        "edit",
        help="Launch the interactive map editor",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the terminal map editor (Textual).",
    )
    edit_parser.add_argument(
        "--file",
        dest="filename",
        default=None,
        help="Map file to save to (default: env MAPPER_FILE or keep.map)",
    )
    edit_parser.add_argument(
        "--open",
        dest="open_existing",
        action="store_true",
        help="Load the map file first if it already exists",
    )
    edit_parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Log file path (default: env MAPPER_LOG_FILE or instance/mapper.log)",
    )
    edit_parser.set_defaults(command="edit")

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Print a saved map file",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Print the points of interest and every level of a map file.",
    )
    show_parser.add_argument("path", help="Path to the map file")
    show_parser.set_defaults(command="show")

    args = parser.parse_args(argv)
    # If no subcommand provided, default to the editor
    if args.command is None:
        args.command = "edit"
    return args


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def show_map(path: str) -> int:
    if not os.path.exists(path):
        print(f"[ERROR] File not found: {path}")
        return 1
    try:
        container = read_map(path)
    except (MapFormatError, OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] {path}: {e}")
        return 1

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {label('File:'):12} {value(path)}",
        f"  {label('Levels:'):12} {value(len(container.levels))}",
        f"  {label('Points:'):12} {value(len(container.points))}",
        divider,
    ]
    for marker in sorted(container.points):
        lines.append(f"  {value(marker)}: {container.points[marker]}")
    print("\n".join(lines))

    for mp in container.sorted_levels():
        counts = {}
        for row in mp.grid:
            for ch in row:
                counts[ch] = counts.get(ch, 0) + 1
        summary = ", ".join(f"{tile_name(ch)}={n}" for ch, n in sorted(counts.items()) if ch != " ")
        print(f"\n{label(f'Level {mp.level}')}  {mp.width} x {mp.height}  {summary}")
        display = display_for(mp.height, mp.width)
        container.current_level = mp.level
        container.render(display)
        print(display.last_frame)
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested, else the default .env if present
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    config = EditorConfig.from_env()
    if getattr(args, "filename", None):
        config.filename = args.filename
    if getattr(args, "open_existing", False):
        config.open_existing = True
    if getattr(args, "log_file", None):
        config.log_file = args.log_file

    mode = (getattr(args, "command", None) or "edit").lower()

    if mode == "show":
        configure_logging(None, config.log_level)
        return show_map(args.path)

    configure_logging(config.log_file, config.log_level)
    log.info(event="startup", mode=mode, filename=config.filename, open_existing=config.open_existing)

    container = None
    if config.open_existing and os.path.exists(config.filename):
        try:
            container = read_map(config.filename)
        except (MapFormatError, OSError, UnicodeDecodeError) as e:
            print(f"[ERROR] Cannot open {config.filename}: {e}")
            return 1

    # Lazy import so `show` does not require Textual
    try:
        from mapper.tui import run_editor
    except ModuleNotFoundError:
        print("[ERROR] The 'textual' package is not installed. Install it with:\n  pip install textual")
        return 1
    run_editor(config, container=container)
    return 0


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
