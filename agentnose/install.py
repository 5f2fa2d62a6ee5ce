"""Install and remove hook configuration across all supported agents."""

from __future__ import annotations

import sys
from pathlib import Path

from agentnose.agent_config import AgentConfig, HookConfigError
from agentnose.claude_config import ClaudeConfig
from agentnose.codex_config import CodexConfig
from agentnose.copilot_config import CopilotConfig
from agentnose.cursor_config import CursorConfig
from agentnose.gemini_config import GeminiConfig


def all_agents(home: str | Path | None = None) -> list[AgentConfig]:
    """Every agent whose hooks can be managed, in a fixed order."""
    return [
        ClaudeConfig(home),
        CodexConfig(home),
        GeminiConfig(home),
        CursorConfig(home),
        CopilotConfig(home),
    ]


def _default_nose_bin() -> str | None:
    program = sys.argv[0] if sys.argv else ""
    if not program:
        return None
    return str(Path(program).resolve())


def run_install(home: str | Path | None = None, nose_bin: str | None = None) -> None:
    """Create the events directory and install hooks into detected agents."""
    home_path = Path(home) if home is not None else Path.home()
    events_dir = home_path / ".nose" / "events"
    try:
        events_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        print(f"nose: failed to create {events_dir}: {exc}", file=sys.stderr)
        return
    print(f"Created {events_dir}")

    if nose_bin is None:
        nose_bin = _default_nose_bin()
        if nose_bin is None:
            print("nose: could not determine binary path", file=sys.stderr)
            return

    for agent in all_agents(home):
        if not agent.is_installed():
            print(f"Skipping {agent.name()} (not installed)")
            continue
        try:
            print(agent.install_hooks(nose_bin))
        except HookConfigError as exc:
            print(f"nose: warning: {agent.name()}: {exc}", file=sys.stderr)

    print("Done.")


def run_uninstall(home: str | Path | None = None) -> None:
    """Remove managed hooks from every detected agent."""
    for agent in all_agents(home):
        if not agent.is_installed():
            print(f"Skipping {agent.name()} (not installed)")
            continue
        try:
            print(agent.uninstall_hooks())
        except HookConfigError as exc:
            print(f"nose: warning: {agent.name()}: {exc}", file=sys.stderr)

    print("Done. (event files in ~/.nose/events/ were not removed)")