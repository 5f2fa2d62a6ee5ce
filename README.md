# agentnose

Observability for coding agents. `agentnose` adds hooks to the configuration
of supported agents: Claude Code, Codex CLI, Gemini CLI, Cursor and GitHub
Copilot. Each hook call is recorded as a unified JSONL event. The package can
replay those events, stream them as they arrive, and summarise them.

## Installation

```
pip install .
```

This installs the `nose` command.

## Hooks

Install hooks into every agent that appears to be installed on this machine:

```
nose hooks install
```

This creates `~/.nose/events`. It then adds managed entries, marked with
`"_nose_managed": true`, to each agent's config file:

| Agent          | Config file                                   | Hook events |
|----------------|-----------------------------------------------|-------------|
| Claude Code    | `~/.claude/settings.json` (under `hooks`)     | PreToolUse, PostToolUse, SessionStart, SessionEnd |
| Codex CLI      | `~/.codex/hooks.json`                         | SessionStart, SessionStop |
| Gemini CLI     | `~/.gemini/settings.json` (under `hooks`)     | BeforeTool, AfterTool, SessionStart, SessionEnd |
| Cursor         | `hooks.json` in Cursor's config directory     | beforeShellExecution, afterFileEdit, beforeReadFile, beforeMCPExecution, stop |
| GitHub Copilot | `~/.github-copilot/hooks.json`                | sessionStart, sessionEnd, preToolUse, postToolUse, errorOccurred |

Cursor's directory is `~/Library/Application Support/Cursor` on macOS. On
Linux it is `$XDG_CONFIG_HOME/cursor`, or `~/.config/cursor`. On Windows it is
`%APPDATA%\Cursor`.

Running the install again replaces the earlier managed entries. Entries added
by hand are left alone. Agents without a config directory are skipped.

Remove the managed entries again. Recorded event files are kept:

```
nose hooks uninstall
```

Each installed hook runs:

```
nose hook-handler --agent <agent> --event <event>
```

The agent passes its hook payload as JSON on stdin. The handler turns
recognised events into one event each. It appends them to
`~/.nose/events/<agent>_<session_id>.jsonl` and always writes `{}` to stdout,
so the agent is never blocked. Nothing is recorded in these cases:

- the payload is not valid JSON;
- the agent is unknown;
- the event has no mapping.

## Reading events

Write every recorded event to stdout as JSONL:

```
nose parse
```

Write only events added since the last `--new` run. The byte offset reached in
each file is kept in `~/.nose/offsets.json`:

```
nose parse --new
```

Print a summary of all recorded events. The report covers sessions, total
duration, events by type, input and output tokens, models used, the top ten
tools, distinct files touched and commands run. Its heading names the current
directory:

```
nose stats
```

Stream events as they are written. The command prints the existing events
first, then checks the event files every 0.2 seconds for new lines. Stop it
with Ctrl+C:

```
nose watch
```

## Event format

Each line is a JSON object with these fields:

- `event_id`
- `session_id`
- `timestamp` (RFC 3339, UTC)
- `agent_type`
- `workspace`
- `confidence`
- `raw_payload`, the original hook payload

It also has an `event_type` and the fields of that type:

- `ToolCall`: `tool_name`, `input`
- `ToolResult`: `tool_name`, `output_summary`, `error`, `duration_ms`
- `CommandExec`: `command`, `cwd`, `exit_code`, `duration_ms`
- `FileRead`: `path`
- `FileWrite`: `path`, `bytes_written`
- `McpCall`: `server_name`, `method`, `params`
- `Error`: `error_type`, `message`, `context`
- `SessionStart`: `environment`, `args`, `config`
- `SessionEnd`: `exit_code`, `duration_ms`

For Claude and Gemini, the `output_summary` of a tool result is cut to 500
bytes.

## Library use

- `agentnose.install.all_agents(home)` returns the agent config objects.
  Each has `name()`, `config_path()`, `is_installed()`,
  `install_hooks(nose_bin)` and `uninstall_hooks()`. Failures raise
  `agentnose.agent_config.HookConfigError`.
- `agentnose.handler.transform_payload(agent_type, event_name, payload, session_id)`
  maps a hook payload to events.
- `agentnose.stats.Stats` accumulates events with `add_event`. `render`
  returns the report as text and `display` prints it.
- `agentnose.watch.parse_file_from_offset(path, offset, adapter, session_id, workspace)`
  parses what was appended to a file after a byte offset. It returns the
  events and the new offset.
- `agentnose.offset` provides `load_offsets` and `save_offsets`.

## What it does not do

`parse`, `stats` and `watch` read only the event files that the hook handler
writes under `~/.nose/events`. They do not read the agents' own session or
transcript files, so activity from before the hooks were installed is not
seen. `stats` reports on every recorded event. It does not filter by the
current directory.

## Development

```
pip install -e .[test]
pytest
```