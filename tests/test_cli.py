import io
import json
import sys

import pytest

from agentnose.cli import build_parser, main
from agentnose.handler import append_events, events_dir, transform_payload
from agentnose.offset import load_offsets


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def record(home, event_name, session_id="sess_01"):
    events = transform_payload("claude", event_name, {"session_id": session_id}, session_id)
    append_events(events, "claude", session_id, events_dir(home))


def output_lines(capsys):
    return [line for line in capsys.readouterr().out.splitlines() if line.strip()]


def test_parser_parse_new_flag():
    args = build_parser().parse_args(["parse", "--new"])
    assert args.command == "parse"
    assert args.new is True


def test_parser_hook_handler_arguments():
    args = build_parser().parse_args(["hook-handler", "--agent", "claude", "--event", "PreToolUse"])
    assert (args.agent, args.event) == ("claude", "PreToolUse")


def test_parser_hook_handler_requires_agent():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["hook-handler", "--event", "PreToolUse"])
    assert info.value.code == 2


def test_parser_requires_command():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args([])
    assert info.value.code == 2


def test_parse_with_empty_home_prints_nothing(home, capsys):
    assert main(["parse"]) == 0
    assert output_lines(capsys) == []


def test_parse_emits_recorded_events(home, capsys):
    record(home, "SessionStart")
    record(home, "SessionEnd")
    assert main(["parse"]) == 0
    lines = output_lines(capsys)
    assert len(lines) == 2
    parsed = [json.loads(line) for line in lines]
    assert [p["event_type"] for p in parsed] == ["SessionStart", "SessionEnd"]
    assert all(p["session_id"] == "sess_01" and p["agent_type"] == "claude" for p in parsed)


def test_parse_new_only_emits_unseen_events(home, capsys):
    record(home, "SessionStart")
    main(["parse", "--new"])
    assert len(output_lines(capsys)) == 1

    main(["parse", "--new"])
    assert output_lines(capsys) == []

    record(home, "SessionEnd")
    main(["parse", "--new"])
    lines = output_lines(capsys)
    assert len(lines) == 1
    assert json.loads(lines[0])["event_type"] == "SessionEnd"

    path = events_dir(home) / "claude_sess_01.jsonl"
    assert load_offsets(home)[path] == path.stat().st_size


def test_stats_reports_sessions(home, capsys):
    record(home, "SessionStart")
    record(home, "SessionStart", session_id="sess_02")
    assert main(["stats"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(f"Nose Stats for {home}")
    assert "Sessions: 2" in out


def test_hook_handler_writes_event_file(home, capsys, monkeypatch):
    payload = {"session_id": "abc123", "tool_name": "Read", "tool_input": {"file_path": "/src/main.rs"}}
    monkeypatch.setattr(sys, "stdin", io.StringIO(json.dumps(payload)))
    assert main(["hook-handler", "--agent", "claude", "--event", "PreToolUse"]) == 0
    assert capsys.readouterr().out == "{}"

    path = events_dir(home) / "claude_abc123.jsonl"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert event["event_type"] == "ToolCall"
    assert event["tool_name"] == "Read"


def test_hooks_install_and_uninstall_codex(home, capsys):
    (home / ".codex").mkdir()
    assert main(["hooks", "install"]) == 0
    config = json.loads((home / ".codex" / "hooks.json").read_text(encoding="utf-8"))
    assert len(config["SessionStart"]) == 1
    assert config["SessionStart"][0]["_nose_managed"] is True
    assert "Skipping Claude Code (not installed)" in capsys.readouterr().out

    assert main(["hooks", "uninstall"]) == 0
    config = json.loads((home / ".codex" / "hooks.json").read_text(encoding="utf-8"))
    assert config["SessionStart"] == []
    assert config["SessionStop"] == []