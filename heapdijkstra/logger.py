"""Structured event loggers used by the engine and the command-line tool.

An event is a short name plus keyword fields, e.g. ``settle vertex=B cost=1``.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol, TextIO

LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}


class Logger(Protocol):
    """Anything that accepts leveled events with keyword fields."""

    def debug(self, event: str, **fields: Any) -> None:
        ...

    def info(self, event: str, **fields: Any) -> None:
        ...

    def warning(self, event: str, **fields: Any) -> None:
        ...


class NoopLogger:
    """Logger that discards all events."""

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _plain(level: str, event: str, fields: Dict[str, Any]) -> str:
    parts = [level, event]
    parts.extend(f"{key}={value}" for key, value in fields.items())
    return " ".join(parts)


def _json(level: str, event: str, fields: Dict[str, Any]) -> str:
    record: Dict[str, Any] = {"level": level, "event": event}
    record.update(fields)
    # Vertices may be tuples or other non-JSON labels.
    return json.dumps(record, default=str)


class StdLogger:
    """Line-oriented logger writing one record per event.

    Args:
        level: Minimum level emitted, one of ``"debug"``, ``"info"`` or
            ``"warning"``.
        json_fmt: Write one JSON object per event instead of
            ``level event key=value`` text.
        stream: Destination stream, ``sys.stderr`` when omitted.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in LEVELS:
            raise ValueError(f"unknown log level {level!r}; expected one of {sorted(LEVELS)}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr
        self._format = _json if json_fmt else _plain

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` would be written."""
        return LEVELS[level] >= LEVELS[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        if self.enabled(level):
            self.stream.write(self._format(level, event, fields) + "\n")

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


__all__ = ["LEVELS", "Logger", "NoopLogger", "StdLogger"]
