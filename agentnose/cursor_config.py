"""Hook configuration for Cursor (``hooks.json`` in its platform config dir)."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from agentnose.agent_config import AgentConfig
from agentnose.codex_config import _command_hook_entry, _is_managed_command


class CursorConfig(AgentConfig):
    """Manages hooks in Cursor's hooks file.

    The location depends on the platform: the user data directory on macOS
    and Windows, the user config directory on Linux. Environment overrides
    (``XDG_CONFIG_HOME``, ``APPDATA``) apply only when no home directory was
    given explicitly.
    """

    DISPLAY_NAME = "Cursor"
    HOOK_EVENTS = (
        "beforeShellExecution",
        "afterFileEdit",
        "beforeReadFile",
        "beforeMCPExecution",
        "stop",
    )
    HOOKS_KEY = None
    ROOT_LABEL = "cursor config"

    def __init__(self, home: str | Path | None = None) -> None:
        super().__init__(home)
        self._explicit_home = home is not None

    def _env_dir(self, variable: str, require_absolute: bool) -> Path | None:
        if self._explicit_home:
            return None
        value = os.environ.get(variable)
        if not value:
            return None
        path = Path(value)
        if require_absolute and not path.is_absolute():
            return None
        return path

    def _platform_dir(self) -> Path | None:
        platform = sys.platform
        if platform == "darwin":
            return self.home / "Library" / "Application Support" / "Cursor"
        if platform.startswith("linux"):
            base = self._env_dir("XDG_CONFIG_HOME", require_absolute=True)
            return (base or self.home / ".config") / "cursor"
        if platform == "win32":
            base = self._env_dir("APPDATA", require_absolute=False)
            return (base or self.home / "AppData" / "Roaming") / "Cursor"
        return None

    def name(self) -> str:
        return self.DISPLAY_NAME

    def config_dir(self) -> Path:
        """Cursor's configuration directory, or ``.`` on unknown platforms."""
        directory = self._platform_dir()
        return directory if directory is not None else Path(".")

    def config_path(self) -> Path:
        directory = self._platform_dir()
        return directory / "hooks.json" if directory is not None else Path(".")

    def is_installed(self) -> bool:
        return self.config_dir().exists()

    @staticmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        return _command_hook_entry("cursor", nose_bin, event)

    @staticmethod
    def is_nose_managed(entry: Any) -> bool:
        return _is_managed_command(entry)

    def install_hooks(self, nose_bin: str) -> str:
        return super().install_hooks(nose_bin)

    def uninstall_hooks(self) -> str:
        return super().uninstall_hooks()