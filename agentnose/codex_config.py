"""Hook configuration for Codex CLI (``~/.codex/hooks.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agentnose.agent_config import MANAGED_KEY, AgentConfig


def _command_hook_entry(agent: str, nose_bin: str, event: str) -> dict[str, Any]:
    """A plain ``{"command": ...}`` hook entry marked as nose-managed."""
    return {
        "command": f"{nose_bin} hook-handler --agent {agent} --event {event}",
        MANAGED_KEY: True,
    }


def _is_managed_command(entry: Any) -> bool:
    """Whether a plain command entry carries the nose-managed marker."""
    return isinstance(entry, dict) and entry.get(MANAGED_KEY) is True


class CodexConfig(AgentConfig):
    """Manages hooks in Codex CLI's hooks file."""

    DISPLAY_NAME = "Codex CLI"
    HOOK_EVENTS = ("SessionStart", "SessionStop")
    HOOKS_KEY = None
    ROOT_LABEL = "codex config"

    def name(self) -> str:
        return self.DISPLAY_NAME

    def config_path(self) -> Path:
        return self.home / ".codex" / "hooks.json"

    def is_installed(self) -> bool:
        return (self.home / ".codex").exists()

    @staticmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        return _command_hook_entry("codex", nose_bin, event)

    @staticmethod
    def is_nose_managed(entry: Any) -> bool:
        return _is_managed_command(entry)

    def install_hooks(self, nose_bin: str) -> str:
        return super().install_hooks(nose_bin)

    def uninstall_hooks(self) -> str:
        return super().uninstall_hooks()