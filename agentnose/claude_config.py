"""Hook configuration for Claude Code (``~/.claude/settings.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agentnose.agent_config import MANAGED_KEY, AgentConfig


class ClaudeConfig(AgentConfig):
    """Manages hooks in Claude Code's settings file.

    Each hook entry wraps its commands in a ``hooks`` list with a matcher.
    """

    DISPLAY_NAME = "Claude Code"
    HOOK_EVENTS = ("PreToolUse", "PostToolUse", "SessionStart", "SessionEnd")
    HOOKS_KEY = "hooks"
    ROOT_LABEL = "settings"

    def name(self) -> str:
        return self.DISPLAY_NAME

    def config_path(self) -> Path:
        return self.home / ".claude" / "settings.json"

    @staticmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        command = {
            "type": "command",
            "command": f"{nose_bin} hook-handler --agent claude --event {event}",
            MANAGED_KEY: True,
        }
        return {"matcher": "", "hooks": [command]}

    @staticmethod
    def is_nose_managed(entry: Any) -> bool:
        hooks = entry.get("hooks") if isinstance(entry, dict) else None
        return isinstance(hooks, list) and any(
            isinstance(h, dict) and h.get(MANAGED_KEY) is True for h in hooks
        )

    def install_hooks(self, nose_bin: str) -> str:
        return super().install_hooks(nose_bin)

    def uninstall_hooks(self) -> str:
        return super().uninstall_hooks()