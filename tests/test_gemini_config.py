import json

import pytest

from agentnose.agent_config import HookConfigError, read_json_config, write_json_config
from agentnose.gemini_config import GeminiConfig

GEMINI_EVENTS = "BeforeTool, AfterTool, SessionStart, SessionEnd"


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ({"command": "nose hook-handler", "_nose_managed": True}, True),
        ({"command": "something"}, False),
        ({"command": "nose", "_nose_managed": "yes"}, False),
    ],
)
def test_is_nose_managed(entry, expected):
    assert GeminiConfig.is_nose_managed(entry) is expected


def test_make_hook_entry_command():
    entry = GeminiConfig.make_hook_entry("/usr/bin/nose", "BeforeTool")
    assert entry["command"].endswith("hook-handler --agent gemini --event BeforeTool")
    assert GeminiConfig.is_nose_managed(entry)


def test_settings_location(tmp_path):
    gemini = GeminiConfig(tmp_path)
    assert gemini.name() == "Gemini CLI"
    assert gemini.config_path() == tmp_path / ".gemini" / "settings.json"
    was_installed = gemini.is_installed()
    (tmp_path / ".gemini").mkdir()
    assert (was_installed, gemini.is_installed()) == (False, True)


def test_gemini_config_structure(tmp_path):
    gemini = GeminiConfig(tmp_path)
    assert gemini.install_hooks("/usr/bin/nose") == f"Gemini CLI: installed hooks for {GEMINI_EVENTS}"
    before_tool = read_json_config(gemini.config_path())["hooks"]["BeforeTool"]
    assert [e["command"] for e in before_tool] == [
        "/usr/bin/nose hook-handler --agent gemini --event BeforeTool"
    ]


def test_install_preserves_other_settings_and_uninstall(tmp_path):
    gemini = GeminiConfig(tmp_path)
    write_json_config(
        gemini.config_path(),
        {"theme": "dark", "hooks": {"AfterTool": [{"command": "something"}]}},
    )
    gemini.install_hooks("/usr/bin/nose")
    installed = json.loads(gemini.config_path().read_text())
    assert installed["theme"] == "dark"
    assert len(installed["hooks"]["AfterTool"]) == 2

    assert gemini.uninstall_hooks() == f"Gemini CLI: removed hooks for {GEMINI_EVENTS}"
    hooks = json.loads(gemini.config_path().read_text())["hooks"]
    assert hooks["AfterTool"] == [{"command": "something"}]
    assert hooks["BeforeTool"] == []


def test_uninstall_when_nothing_to_do(tmp_path):
    gemini = GeminiConfig(tmp_path)
    assert gemini.uninstall_hooks() == "Gemini CLI: no config found, nothing to uninstall"
    write_json_config(gemini.config_path(), {"theme": "dark"})
    assert gemini.uninstall_hooks() == "Gemini CLI: no nose-managed hooks found"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        (42, "gemini settings is not an object"),
        ({"hooks": {"BeforeTool": "x"}}, "hooks.BeforeTool is not an array"),
    ],
)
def test_install_rejects_bad_settings(tmp_path, content, message):
    gemini = GeminiConfig(tmp_path)
    write_json_config(gemini.config_path(), content)
    with pytest.raises(HookConfigError, match=message):
        gemini.install_hooks("/usr/bin/nose")