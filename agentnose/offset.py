"""Bookmarks of how far each session file has already been read."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from agentnose.watch import parse_file_from_offset

__all__ = ["offsets_path", "load_offsets", "save_offsets", "parse_file_from_offset"]


def offsets_path(home: str | Path | None = None) -> Path:
    """Location of the bookmark file: ``~/.nose/offsets.json``."""
    base = Path(home) if home is not None else Path.home()
    return base / ".nose" / "offsets.json"


def load_offsets(home: str | Path | None = None) -> dict[Path, int]:
    """Load saved byte offsets; an absent or unreadable file gives ``{}``."""
    path = offsets_path(home)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        return {}
    if not isinstance(raw, dict):
        return {}
    offsets: dict[Path, int] = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return {}
        offsets[Path(key)] = value
    return offsets


def save_offsets(offsets: Mapping[Path, int], home: str | Path | None = None) -> None:
    """Write byte offsets to the bookmark file, ignoring write failures."""
    path = offsets_path(home)
    raw = {str(key): int(value) for key, value in offsets.items()}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(raw, indent=2), encoding="utf-8")
    except OSError:
        pass