"""Command-line entry point."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any, NamedTuple, TextIO

from agentnose.handler import events_dir, run_hook_handler
from agentnose.install import run_install, run_uninstall
from agentnose.offset import load_offsets, save_offsets
from agentnose.output import write_events_jsonl
from agentnose.stats import Stats
from agentnose.watch import extract_session_meta, parse_file_from_offset, record_file_position

_POLL_INTERVAL = 0.2


class _Session(NamedTuple):
    path: Path
    session_id: str
    workspace: str


class _EventLogReader:
    """Reads the event files written by the hook handler."""

    def parse(self, reader: TextIO, session_id: str, workspace: str) -> list[dict[str, Any]]:
        events = []
        for line in reader:
            line = line.strip()
            if not line:
                continue
            try:
                value = json.loads(line)
            except ValueError:
                continue
            if isinstance(value, dict) and isinstance(value.get("event_type"), str):
                events.append(value)
        return events


def _warn(message: str) -> None:
    print(f"nose: warning: {message}", file=sys.stderr)


def _sessions(home: Path) -> list[_Session]:
    directory = events_dir(home)
    if not directory.is_dir():
        return []
    sessions = []
    for path in sorted(directory.glob("*.jsonl")):
        if path.is_file():
            session_id, workspace = extract_session_meta(path)
            sessions.append(_Session(path, session_id, workspace))
    return sessions


def _parse_whole(session: _Session, adapter: _EventLogReader) -> list[dict[str, Any]] | None:
    try:
        with session.path.open("r", encoding="utf-8", errors="replace") as handle:
            return adapter.parse(handle, session.session_id, session.workspace)
    except OSError as exc:
        _warn(f"could not open {session.path}: {exc}")
        return None


def _session_event_batches(home: Path) -> Iterator[list[dict[str, Any]]]:
    adapter = _EventLogReader()
    for session in _sessions(home):
        events = _parse_whole(session, adapter)
        if events is not None:
            yield events


def _write(events: list[dict[str, Any]], out: TextIO) -> None:
    try:
        write_events_jsonl(events, out)
    except OSError as exc:
        _warn(f"write error: {exc}")


def _run_parse(incremental: bool, home: Path) -> None:
    out = sys.stdout
    if not incremental:
        for events in _session_event_batches(home):
            _write(events, out)
        return

    offsets = load_offsets(home)
    adapter = _EventLogReader()
    for session in _sessions(home):
        offset = offsets.get(session.path, 0)
        try:
            events, new_pos = parse_file_from_offset(
                session.path, offset, adapter, session.session_id, session.workspace
            )
        except OSError as exc:
            _warn(f"failed to parse {session.path}: {exc}")
            continue
        if events:
            _write(events, out)
        offsets[session.path] = new_pos
    save_offsets(offsets, home)


def _run_stats(home: Path) -> None:
    try:
        workspace = os.getcwd()
    except OSError:
        workspace = "."
    stats = Stats()
    for events in _session_event_batches(home):
        for event in events:
            stats.add_event(event)
    stats.display(workspace)


def _run_watch(home: Path) -> None:
    print("nose: watching for events... (Ctrl+C to stop)", file=sys.stderr)
    out = sys.stdout
    adapter = _EventLogReader()
    positions: dict[Path, int] = {}

    def emit_new_file(session: _Session) -> None:
        record_file_position(positions, session.path)
        events = _parse_whole(session, adapter)
        if events:
            _write(events, out)
            out.flush()

    for session in _sessions(home):
        emit_new_file(session)
    out.flush()

    try:
        while True:
            time.sleep(_POLL_INTERVAL)
            for session in _sessions(home):
                offset = positions.get(session.path)
                if offset is None:
                    emit_new_file(session)
                    continue
                try:
                    events, new_pos = parse_file_from_offset(
                        session.path, offset, adapter, session.session_id, session.workspace
                    )
                except OSError as exc:
                    _warn(f"failed to parse {session.path}: {exc}")
                    continue
                if events:
                    _write(events, out)
                    out.flush()
                positions[session.path] = new_pos
    except KeyboardInterrupt:
        pass


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``nose`` command."""
    parser = argparse.ArgumentParser(prog="nose", description="Agent Activity Observability")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Parse agent sessions and emit unified JSONL events")
    parse_cmd.add_argument(
        "--new",
        action="store_true",
        help="Only emit events not yet seen (uses ~/.nose/offsets.json as bookmark)",
    )

    commands.add_parser("stats", help="Show a statistics summary of agent activity")
    commands.add_parser("watch", help="Stream events in real-time")

    hooks_cmd = commands.add_parser("hooks", help="Manage agent hook configuration")
    actions = hooks_cmd.add_subparsers(dest="action", required=True)
    actions.add_parser("install", help="Install nose hooks into all detected agents")
    actions.add_parser("uninstall", help="Remove nose hooks from all detected agents")

    handler_cmd = commands.add_parser(
        "hook-handler", help="Handle an agent hook event (reads JSON from stdin)"
    )
    handler_cmd.add_argument("--agent", required=True)
    handler_cmd.add_argument("--event", required=True)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)
    home = Path.home()

    if args.command == "parse":
        _run_parse(args.new, home)
    elif args.command == "stats":
        _run_stats(home)
    elif args.command == "watch":
        _run_watch(home)
    elif args.command == "hooks":
        if args.action == "install":
            run_install()
        else:
            run_uninstall()
    elif args.command == "hook-handler":
        run_hook_handler(args.agent, args.event)
    return 0


if __name__ == "__main__":
    sys.exit(main())