"""Hook configuration for GitHub Copilot (``~/.github-copilot/hooks.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agentnose.agent_config import AgentConfig
from agentnose.codex_config import _command_hook_entry, _is_managed_command


class CopilotConfig(AgentConfig):
    """Manages hooks in GitHub Copilot's hooks file."""

    DISPLAY_NAME = "GitHub Copilot"
    HOOK_EVENTS = (
        "sessionStart",
        "sessionEnd",
        "preToolUse",
        "postToolUse",
        "errorOccurred",
    )
    HOOKS_KEY = None
    ROOT_LABEL = "copilot config"

    def name(self) -> str:
        return self.DISPLAY_NAME

    def config_path(self) -> Path:
        return self.home / ".github-copilot" / "hooks.json"

    def is_installed(self) -> bool:
        return (self.home / ".github-copilot").exists()

    @staticmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        return _command_hook_entry("copilot", nose_bin, event)

    @staticmethod
    def is_nose_managed(entry: Any) -> bool:
        return _is_managed_command(entry)

    def install_hooks(self, nose_bin: str) -> str:
        return super().install_hooks(nose_bin)

    def uninstall_hooks(self) -> str:
        return super().uninstall_hooks()