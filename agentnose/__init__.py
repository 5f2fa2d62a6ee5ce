"""Agent hook management, JSONL event capture, replay and activity statistics."""

__version__ = "0.1.0"