import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mapper.container import MapContainer  # noqa: E402
from mapper.display import display_for  # noqa: E402
from mapper.logging_utils import configure_logging  # noqa: E402


@pytest.fixture()
def container():
    """5x5 container wired to a text display so redraws can be counted."""
    mc = MapContainer(5, 5)
    mc.display = display_for(5, 5)
    return mc


@pytest.fixture()
def text_display(container):
    return container.display


@pytest.fixture()
def tmp_map_path(tmp_path):
    return str(tmp_path / "keep.map")


@pytest.fixture(autouse=True)
def _isolate_mapper_env():
    """Keep MAPPER_* variables (including ones loaded from .env files) and
    log handlers from leaking between tests."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("MAPPER_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("MAPPER_")]:
        del os.environ[key]
    os.environ.update(saved)
    configure_logging(None)
