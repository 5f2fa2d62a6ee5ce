"""Shared machinery for reading and editing agent hook configuration files."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

MANAGED_KEY = "_nose_managed"


class HookConfigError(Exception):
    """Raised when an agent configuration cannot be read, changed or written."""


def read_json_config(path: str | Path) -> Any:
    """Load a JSON config file, or return an empty object if it does not exist."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise HookConfigError(f"failed to read {path}: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise HookConfigError(f"failed to parse {path}: {exc}") from exc


def write_json_config(path: str | Path, value: Any) -> None:
    """Write ``value`` as pretty-printed JSON, creating parent directories."""
    path = Path(path)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise HookConfigError(f"failed to create dir {parent}: {exc}") from exc
    try:
        content = json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise HookConfigError(f"failed to serialize config: {exc}") from exc
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise HookConfigError(f"failed to write {path}: {exc}") from exc


class AgentConfig(ABC):
    """An agent whose hook configuration can be managed.

    Subclasses name the hook events they manage and, through ``HOOKS_KEY``,
    whether the per-event lists sit at the top level of the file or inside
    a nested object.
    """

    DISPLAY_NAME: ClassVar[str]
    HOOK_EVENTS: ClassVar[tuple[str, ...]]
    HOOKS_KEY: ClassVar[str | None] = None
    ROOT_LABEL: ClassVar[str] = "config"

    def __init__(self, home: str | Path | None = None) -> None:
        self.home = Path(home) if home is not None else Path.home()

    def name(self) -> str:
        """Human-readable agent name."""
        return self.DISPLAY_NAME

    @abstractmethod
    def config_path(self) -> Path:
        """Path to the agent's hook configuration file."""

    def is_installed(self) -> bool:
        """Whether the agent appears to be installed (its config dir exists)."""
        return self.config_path().parent.exists()

    @staticmethod
    @abstractmethod
    def make_hook_entry(nose_bin: str, event: str) -> dict[str, Any]:
        """Build the config entry that runs the hook handler for ``event``."""

    @staticmethod
    @abstractmethod
    def is_nose_managed(entry: Any) -> bool:
        """Whether a config entry was added by this tool."""

    def install_hooks(self, nose_bin: str) -> str:
        """Install managed hooks, replacing earlier managed entries."""
        path = self.config_path()
        config = read_json_config(path)
        if not isinstance(config, dict):
            raise HookConfigError(f"{self.ROOT_LABEL} is not an object")

        table = config
        prefix = ""
        if self.HOOKS_KEY:
            table = config.setdefault(self.HOOKS_KEY, {})
            if not isinstance(table, dict):
                raise HookConfigError(f"{self.HOOKS_KEY} is not an object")
            prefix = f"{self.HOOKS_KEY}."

        for event in self.HOOK_EVENTS:
            entries = table.setdefault(event, [])
            if not isinstance(entries, list):
                raise HookConfigError(f"{prefix}{event} is not an array")
            entries[:] = [e for e in entries if not self.is_nose_managed(e)]
            entries.append(self.make_hook_entry(nose_bin, event))

        write_json_config(path, config)
        return f"{self.name()}: installed hooks for {', '.join(self.HOOK_EVENTS)}"

    def uninstall_hooks(self) -> str:
        """Remove managed hooks, leaving every other entry in place."""
        path = self.config_path()
        if not path.exists():
            return f"{self.name()}: no config found, nothing to uninstall"

        config = read_json_config(path)
        table = config if isinstance(config, dict) else None
        if table is not None and self.HOOKS_KEY:
            table = table.get(self.HOOKS_KEY)
            if not isinstance(table, dict):
                table = None

        removed: list[str] = []
        if table is not None:
            for event in self.HOOK_EVENTS:
                entries = table.get(event)
                if not isinstance(entries, list):
                    continue
                kept = [e for e in entries if not self.is_nose_managed(e)]
                if len(kept) < len(entries):
                    removed.append(event)
                entries[:] = kept

        write_json_config(path, config)

        if not removed:
            return f"{self.name()}: no nose-managed hooks found"
        return f"{self.name()}: removed hooks for {', '.join(removed)}"