"""Incremental reading of session files and live streaming of new events."""

from __future__ import annotations

import io
import json
import os
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Protocol, TextIO


class SessionParser(Protocol):
    """Anything that turns a text stream of session lines into events."""

    def parse(self, reader: TextIO, session_id: str, workspace: str) -> list[Any]:
        ...


def _split_lines(data: bytes) -> list[str]:
    """Split raw bytes into text lines, stopping at the first undecodable one."""
    chunks = data.split(b"\n")
    if chunks and chunks[-1] == b"":
        chunks.pop()
    lines: list[str] = []
    for chunk in chunks:
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
        try:
            lines.append(chunk.decode("utf-8"))
        except UnicodeDecodeError:
            break
    return lines


def parse_file_from_offset(
    path: str | Path,
    offset: int,
    adapter: SessionParser,
    session_id: str,
    workspace: str,
) -> tuple[list[Any], int]:
    """Parse whatever was appended to ``path`` after ``offset``.

    Returns the new events and the byte position reached. When the file is
    no longer than ``offset`` nothing is read and ``offset`` is returned.
    """
    with Path(path).open("rb") as handle:
        size = os.fstat(handle.fileno()).st_size
        if size <= offset:
            return [], offset
        handle.seek(offset)
        data = handle.read()
        new_pos = handle.tell()

    lines = _split_lines(data)
    if not lines:
        return [], new_pos

    reader = io.StringIO("\n".join(lines) + "\n")
    events = adapter.parse(reader, session_id, workspace)
    return events, new_pos


def record_file_position(positions: MutableMapping[Path, int], path: str | Path) -> None:
    """Set the stored position of ``path`` to its current size, if it exists."""
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError:
        return
    positions[path] = size


def extract_session_meta(path: str | Path) -> tuple[str, str]:
    """Read a session's id and workspace from the first line of its file.

    Falls back to the file stem for the id and ``"unknown"`` for the
    workspace.
    """
    path = Path(path)
    fallback_id = path.stem or "unknown"

    try:
        with path.open("r", encoding="utf-8") as handle:
            first_line = handle.readline()
    except (OSError, UnicodeDecodeError):
        return fallback_id, "unknown"

    try:
        value = json.loads(first_line)
    except ValueError:
        return fallback_id, "unknown"

    fields = value if isinstance(value, dict) else {}
    session_id = fields.get("sessionId")
    workspace = fields.get("cwd")
    return (
        session_id if isinstance(session_id, str) else fallback_id,
        workspace if isinstance(workspace, str) else "unknown",
    )