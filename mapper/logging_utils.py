"""Minimal structured logging helper.

Emits key=value pairs (or compact JSON) with a timestamp and level through
the stdlib ``logging`` tree, so whatever handlers ``configure_logging``
installed decide where the records go. While the terminal UI owns the
screen that is a rotating file only.

Usage:
    from .logging_utils import get_logger
    log = get_logger(__name__)
    log.info(event="map_saved", path="keep.map", levels=1)

All non-str key/value values are repr()'d. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import logging
import os
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAPPER_LOG_LEVEL", "info"), 20)
JSON_MODE = os.getenv("MAPPER_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=repr)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "mapper"
        self._std = logging.getLogger(self.name)

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        self._std.log(LEVELS[lvl], _format(lvl, **fields))

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


def set_level(level: str) -> None:
    """Change the emit threshold (``debug``/``info``/``warn``/``error``)."""
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS.get(level.lower(), CURRENT_LEVEL)


def configure_logging(log_path: Optional[str] = None, level: str = "info", console: bool = False) -> None:
    """Configure the ``mapper`` logger tree.

    Writes to a rotating file at ``log_path`` (parent directories are
    created) and, when ``console`` is set, to stderr as well. Safe to call
    repeatedly: existing handlers are replaced, not duplicated.
    """
    set_level(level)
    root = logging.getLogger("mapper")
    root.setLevel(logging.DEBUG)
    root.propagate = False

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    formatter = logging.Formatter(LOG_FORMAT)
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    if console:
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        root.addHandler(stream)
    if not root.handlers:
        root.addHandler(logging.NullHandler())


log = get_logger("mapper")
