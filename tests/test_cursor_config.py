import json
import sys
from pathlib import Path

import pytest

from agentnose.agent_config import HookConfigError
from agentnose.cursor_config import CursorConfig

EVENTS = [
    "beforeShellExecution",
    "afterFileEdit",
    "beforeReadFile",
    "beforeMCPExecution",
    "stop",
]


@pytest.fixture
def linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)


def test_make_hook_entry():
    entry = CursorConfig.make_hook_entry("/usr/bin/nose", "beforeShellExecution")
    assert "hook-handler --agent cursor --event beforeShellExecution" in entry["command"]
    assert entry["_nose_managed"] is True


def test_is_nose_managed():
    assert CursorConfig.is_nose_managed({"command": "nose hook-handler", "_nose_managed": True})
    assert not CursorConfig.is_nose_managed({"command": "something"})


def test_linux_paths(tmp_path, linux):
    cfg = CursorConfig(tmp_path)
    assert cfg.name() == "Cursor"
    assert cfg.config_dir() == tmp_path / ".config" / "cursor"
    assert cfg.config_path() == tmp_path / ".config" / "cursor" / "hooks.json"


def test_macos_paths(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    cfg = CursorConfig(tmp_path)
    assert cfg.config_dir() == tmp_path / "Library" / "Application Support" / "Cursor"
    assert cfg.config_path().name == "hooks.json"
    assert cfg.config_path().parent == cfg.config_dir()


def test_unknown_platform_falls_back_to_current_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "sunos5")
    cfg = CursorConfig(tmp_path)
    assert cfg.config_dir() == Path(".")
    assert cfg.config_path() == Path(".")


def test_explicit_home_ignores_xdg(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "elsewhere"))
    assert CursorConfig(tmp_path).config_dir() == tmp_path / ".config" / "cursor"


def test_is_installed(tmp_path, linux):
    cfg = CursorConfig(tmp_path)
    assert cfg.is_installed() is False
    cfg.config_dir().mkdir(parents=True)
    assert cfg.is_installed() is True


def test_install_and_uninstall_round_trip(tmp_path, linux):
    cfg = CursorConfig(tmp_path)
    path = cfg.config_path()
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"stop": [{"command": "user-stop"}]}))

    msg = cfg.install_hooks("/usr/bin/nose")
    assert msg == "Cursor: installed hooks for " + ", ".join(EVENTS)
    data = json.loads(path.read_text())
    assert all(len(data[e]) == (2 if e == "stop" else 1) for e in EVENTS)

    msg = cfg.uninstall_hooks()
    assert msg == "Cursor: removed hooks for " + ", ".join(EVENTS)
    data = json.loads(path.read_text())
    assert data["stop"] == [{"command": "user-stop"}]
    assert not any(CursorConfig.is_nose_managed(e) for ev in EVENTS for e in data[ev])


def test_reinstall_keeps_single_managed_entry(tmp_path, linux):
    cfg = CursorConfig(tmp_path)
    cfg.install_hooks("/old/nose")
    cfg.install_hooks("/new/nose")
    data = json.loads(cfg.config_path().read_text())
    assert len(data["afterFileEdit"]) == 1
    assert data["afterFileEdit"][0]["command"].startswith("/new/nose ")


def test_uninstall_without_config(tmp_path, linux):
    assert CursorConfig(tmp_path).uninstall_hooks() == (
        "Cursor: no config found, nothing to uninstall"
    )


def test_install_rejects_non_object(tmp_path, linux):
    cfg = CursorConfig(tmp_path)
    cfg.config_path().parent.mkdir(parents=True)
    cfg.config_path().write_text("42")
    with pytest.raises(HookConfigError, match="cursor config is not an object"):
        cfg.install_hooks("/usr/bin/nose")