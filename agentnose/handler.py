"""Turning agent hook payloads into events and appending them to disk."""

from __future__ import annotations

import json
import os
import sys
import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from agentnose.output import write_events_jsonl

AGENT_TYPES = ("claude", "codex", "gemini", "cursor", "copilot")


def truncate(s: str, max_len: int) -> str:
    """Cut ``s`` to at most ``max_len`` UTF-8 bytes without splitting a character."""
    encoded = s.encode("utf-8")
    if len(encoded) <= max_len:
        return s
    return encoded[:max_len].decode("utf-8", errors="ignore")


def _get(payload: Any, key: str) -> Any:
    return payload.get(key) if isinstance(payload, dict) else None


def _get_str(payload: Any, key: str) -> str | None:
    value = _get(payload, key)
    return value if isinstance(value, str) else None


def _event_data(agent_type: str, event_name: str, payload: Any) -> dict[str, Any] | None:
    key = (agent_type, event_name)

    if key in (("claude", "PreToolUse"), ("gemini", "BeforeTool")):
        return {
            "event_type": "ToolCall",
            "tool_name": _get_str(payload, "tool_name") or "unknown",
            "input": _get(payload, "tool_input"),
        }
    if key in (("claude", "PostToolUse"), ("gemini", "AfterTool")):
        response = _get_str(payload, "tool_response")
        return {
            "event_type": "ToolResult",
            "tool_name": _get_str(payload, "tool_name") or "unknown",
            "output_summary": truncate(response, 500) if response is not None else None,
            "error": None,
            "duration_ms": None,
        }

    if agent_type == "cursor":
        if event_name == "beforeShellExecution":
            return {
                "event_type": "CommandExec",
                "command": _get_str(payload, "command") or "",
                "cwd": _get_str(payload, "cwd"),
                "exit_code": None,
                "duration_ms": None,
            }
        if event_name == "afterFileEdit":
            return {
                "event_type": "FileWrite",
                "path": _get_str(payload, "file_path") or "",
                "bytes_written": None,
            }
        if event_name == "beforeReadFile":
            return {"event_type": "FileRead", "path": _get_str(payload, "file_path") or ""}
        if event_name == "beforeMCPExecution":
            return {
                "event_type": "McpCall",
                "server_name": _get_str(payload, "server_name") or "unknown",
                "method": _get_str(payload, "tool_name") or "unknown",
                "params": _get(payload, "tool_input"),
            }
        if event_name == "stop":
            return {"event_type": "SessionEnd", "exit_code": None, "duration_ms": 0}

    if agent_type == "copilot":
        if event_name == "preToolUse":
            return {
                "event_type": "ToolCall",
                "tool_name": _get_str(payload, "toolName") or "unknown",
                "input": _get(payload, "toolArgs"),
            }
        if event_name == "postToolUse":
            return {
                "event_type": "ToolResult",
                "tool_name": _get_str(payload, "toolName") or "unknown",
                "output_summary": _get_str(payload, "toolResult"),
                "error": None,
                "duration_ms": None,
            }
        if event_name == "errorOccurred":
            return {
                "event_type": "Error",
                "error_type": _get_str(payload, "error") or "unknown",
                "message": _get_str(payload, "message") or "",
                "context": None,
            }

    if event_name in ("SessionStart", "sessionStart"):
        return {"event_type": "SessionStart", "environment": None, "args": [], "config": None}
    if event_name in ("SessionEnd", "sessionEnd") or key == ("codex", "SessionStop"):
        return {"event_type": "SessionEnd", "exit_code": None, "duration_ms": 0}
    return None


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def transform_payload(
    agent_type: str, event_name: str, payload: Any, session_id: str
) -> list[dict[str, Any]]:
    """Map a hook payload to zero or one events for ``agent_type``."""
    data = _event_data(agent_type, event_name, payload)
    if data is None:
        return []
    try:
        workspace = os.getcwd()
    except OSError:
        workspace = ""
    event: dict[str, Any] = {
        "event_id": str(uuid.uuid4()),
        "session_id": session_id,
        "timestamp": _now_rfc3339(),
        "agent_type": agent_type,
        "workspace": workspace,
        "confidence": "native",
        "raw_payload": payload,
    }
    event.update(data)
    return [event]


def events_dir(home: str | Path | None = None) -> Path:
    """Directory that holds hook event files: ``~/.nose/events``."""
    base = Path(home) if home is not None else Path.home()
    return base / ".nose" / "events"


def append_events(
    events: Iterable[Mapping[str, Any]],
    agent: str,
    session_id: str,
    directory: str | Path | None = None,
) -> Path:
    """Append events to ``<agent>_<session_id>.jsonl`` and return its path."""
    target_dir = Path(directory) if directory is not None else events_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{agent}_{session_id}.jsonl"
    with path.open("a", encoding="utf-8") as handle:
        write_events_jsonl(events, handle)
    return path


def run_hook_handler(
    agent: str,
    event: str,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Read a hook payload, record it as events, and always answer ``{}``."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        text = stdin.read()
    except (OSError, UnicodeDecodeError):
        text = ""

    try:
        payload = json.loads(text.strip())
    except ValueError:
        stdout.write("{}")
        stdout.flush()
        return

    session_id = _get_str(payload, "session_id")
    if session_id is None:
        session_id = "unknown"

    if agent not in AGENT_TYPES:
        stdout.write("{}")
        stdout.flush()
        return

    events = transform_payload(agent, event, payload, session_id)
    if events:
        try:
            append_events(events, agent, session_id)
        except (OSError, RuntimeError) as exc:
            print(f"nose: hook-handler: failed to write events: {exc}", file=sys.stderr)

    stdout.write("{}")
    stdout.flush()