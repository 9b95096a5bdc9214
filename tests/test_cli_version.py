import importlib
import sys

import pytest

from mapper.container import MapContainer
from mapper.serializer import write_map

# Import run.py as a module and exercise parse_args + main with a patched
# editor launcher so no terminal UI is started.


@pytest.fixture()
def run_module():
    # Ensure a clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


@pytest.fixture()
def fake_editor(monkeypatch):
    calls = {}

    def fake_run_editor(config, container=None):
        calls["config"] = config
        calls["container"] = container

    import mapper.tui as tui_mod

    monkeypatch.setattr(tui_mod, "run_editor", fake_run_editor)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert "Keep Mapper" in out


def test_default_command_is_edit(run_module):
    assert run_module.parse_args([]).command == "edit"


def test_edit_uses_env_and_flags(monkeypatch, tmp_path, run_module, fake_editor):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MAPPER_FILE", "from_env.map")
    assert run_module.main(["edit", "--log-file", str(tmp_path / "m.log")]) == 0
    assert fake_editor["config"].filename == "from_env.map"
    assert fake_editor["container"] is None

    assert run_module.main(["edit", "--file", "flag.map", "--log-file", str(tmp_path / "m.log")]) == 0
    assert fake_editor["config"].filename == "flag.map"


def test_edit_open_loads_existing(monkeypatch, tmp_path, run_module, fake_editor):
    monkeypatch.chdir(tmp_path)
    mc = MapContainer(2, 2)
    mc.set_point("a", "Treasure")
    write_map(mc, str(tmp_path / "keep.map"))
    assert run_module.main(["edit", "--open", "--log-file", str(tmp_path / "m.log")]) == 0
    assert fake_editor["container"].points == {"a": "Treasure"}


def test_edit_open_rejects_malformed(monkeypatch, tmp_path, run_module, fake_editor, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "keep.map").write_text("\nLevel one\n", encoding="utf-8")
    assert run_module.main(["edit", "--open", "--log-file", str(tmp_path / "m.log")]) == 1
    assert "config" not in fake_editor
    assert "[ERROR]" in capsys.readouterr().out


def test_env_file_argument(monkeypatch, tmp_path, run_module, fake_editor):
    env_file = tmp_path / ".env"
    env_file.write_text("MAPPER_FILE=dotenv.map\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    run_module.main(["--env-file", str(env_file), "edit", "--log-file", str(tmp_path / "m.log")])
    assert fake_editor["config"].filename == "dotenv.map"


def test_show_prints_levels(tmp_path, run_module, capsys):
    path = tmp_path / "castle.map"
    mc = MapContainer(2, 3)
    mc.set_point("a", "Treasure")
    mc.current_map.set_tile(0, 0, ".")
    write_map(mc, str(path))
    assert run_module.main(["show", str(path)]) == 0
    out = capsys.readouterr().out
    assert "a: Treasure" in out
    assert "Level 1" in out
    assert "│.  │" in out
    assert "room=1" in out


def test_show_missing_file(tmp_path, run_module, capsys):
    assert run_module.main(["show", str(tmp_path / "nope.map")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_show_malformed_file(tmp_path, run_module, capsys):
    path = tmp_path / "bad.map"
    path.write_text("\nLevel 1\n2 × 1\n.\n", encoding="utf-8")
    assert run_module.main(["show", str(path)]) == 1
    assert "line 4" in capsys.readouterr().out
