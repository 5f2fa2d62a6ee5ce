"""Hook configuration for Gemini CLI (``~/.gemini/settings.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agentnose.agent_config import AgentConfig
from agentnose.codex_config import _command_hook_entry, _is_managed_command


class GeminiConfig(AgentConfig):
    """Manages hooks in Gemini CLI's settings file."""

    DISPLAY_NAME = "Gemini CLI"
    HOOK_EVENTS = ("BeforeTool", "AfterTool", "SessionStart", "SessionEnd")
    HOOKS_KEY = "hooks"
    ROOT_LABEL = "gemini settings"

    def name(self) -> str:
        return self.DISPLAY_NAME

    def config_path(self) -> Path:
        return self.home / ".gemini" / "settings.json"

    def is_installed(self) -> bool:
        return (self.home / ".gemini").exists()

    @staticmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        return _command_hook_entry("gemini", nose_bin, event)

    @staticmethod
    def is_nose_managed(entry: Any) -> bool:
        return _is_managed_command(entry)

    def install_hooks(self, nose_bin: str) -> str:
        return super().install_hooks(nose_bin)

    def uninstall_hooks(self) -> str:
        return super().uninstall_hooks()