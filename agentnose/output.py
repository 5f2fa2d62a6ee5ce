"""Writing events as JSON Lines."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any, TextIO


def write_events_jsonl(events: Iterable[Mapping[str, Any]], writer: TextIO) -> None:
    """Write each event as one compact JSON object per line."""
    for event in events:
        writer.write(json.dumps(event, separators=(",", ":"), ensure_ascii=False))
        writer.write("\n")