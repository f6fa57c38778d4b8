"""Message sinks.

Packaging phases report progress and warnings through a `MessageSink` passed
in by the caller instead of a global build logger. Levels are the standard
`logging` levels.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger("sharppkg")


class MessageSink(Protocol):
    def record(self, level: int, message: str) -> None: ...


class LoggingSink:
    """Forward records to a standard-library logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log if log is not None else logger

    def record(self, level: int, message: str) -> None:
        self.log.log(level, message)


class RecordingSink:
    """Keep `(level, message)` pairs in memory."""

    def __init__(self) -> None:
        self.records: list[tuple[int, str]] = []

    def record(self, level: int, message: str) -> None:
        self.records.append((int(level), str(message)))

    def messages(self, level: int | None = None) -> list[str]:
        if level is None:
            return [m for _, m in self.records]
        return [m for lvl, m in self.records if lvl == level]


def default_sink(sink: MessageSink | None) -> MessageSink:
    return sink if sink is not None else LoggingSink()


__all__ = ["LoggingSink", "MessageSink", "RecordingSink", "default_sink", "logger"]
