"""Summary statistics over a stream of events."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_FILE_EVENTS = frozenset({"FileRead", "FileWrite", "FileDelete"})


def format_number(n: int) -> str:
    """Format an integer with comma thousands separators."""
    return f"{n:,}"


def format_duration(total_ms: int) -> str:
    """Render milliseconds as ``Xh Ym``, ``Ym`` or ``Xs``."""
    total_secs = total_ms // 1000
    hours = total_secs // 3600
    mins = (total_secs % 3600) // 60
    if hours > 0:
        return f"{hours}h {mins}m"
    if mins > 0:
        return f"{mins}m"
    return f"{total_secs}s"


def _ranked(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


@dataclass
class Stats:
    """Accumulated counters for sessions, tokens, tools, files and commands."""

    sessions: int = 0
    total_events: int = 0
    total_duration_ms: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    commands_run: int = 0
    event_counts: Counter = field(default_factory=Counter)
    model_counts: Counter = field(default_factory=Counter)
    tool_counts: Counter = field(default_factory=Counter)
    files_touched: set = field(default_factory=set)

    def add_event(self, event: Mapping[str, Any]) -> None:
        """Fold one event into the counters."""
        self.total_events += 1
        event_type = event.get("event_type")
        self.event_counts[event_type] += 1

        if event_type == "SessionStart":
            self.sessions += 1
        elif event_type == "SessionEnd":
            self.total_duration_ms += event.get("duration_ms") or 0
        elif event_type == "ModelRequest":
            self.model_counts[event.get("model")] += 1
            self.input_tokens += event.get("input_tokens") or 0
        elif event_type == "ModelResponse":
            self.output_tokens += event.get("output_tokens") or 0
        elif event_type == "ToolCall":
            self.tool_counts[event.get("tool_name")] += 1
        elif event_type in _FILE_EVENTS:
            self.files_touched.add(event.get("path"))
        elif event_type == "CommandExec":
            self.commands_run += 1

    def render(self, workspace: str) -> str:
        """The summary report as text."""
        lines = [
            f"Nose Stats for {workspace}",
            "",
            f"Sessions: {self.sessions}",
            f"Total events: {format_number(self.total_events)}",
            f"Duration: {format_duration(self.total_duration_ms)}",
            "",
            "Events by type:",
        ]
        lines += [
            f"  {name:<16} {format_number(count)}"
            for name, count in _ranked(self.event_counts)
        ]
        lines.append("")

        total_tokens = self.input_tokens + self.output_tokens
        lines += [
            "Tokens:",
            f"  Input:  {format_number(self.input_tokens):>12}",
            f"  Output: {format_number(self.output_tokens):>12}",
            f"  Total:  {format_number(total_tokens):>12}",
            "",
        ]

        if self.model_counts:
            lines.append("Models used:")
            lines += [
                f"  {model:<28} {format_number(count)} requests"
                for model, count in _ranked(self.model_counts)
            ]
            lines.append("")

        if self.tool_counts:
            lines.append("Top tools:")
            lines += [
                f"  {tool:<16} {format_number(count)}"
                for tool, count in _ranked(self.tool_counts)[:10]
            ]
            lines.append("")

        lines.append(f"Files touched: {len(self.files_touched)}")
        lines.append(f"Commands run: {format_number(self.commands_run)}")
        return "\n".join(lines) + "\n"

    def display(self, workspace: str) -> None:
        """Print the summary report to standard output."""
        print(self.render(workspace), end="")