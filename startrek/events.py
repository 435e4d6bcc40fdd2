"""
Narrative event log for the Star Trek simulation engine.

Every line the engine prints is recorded as an immutable LogLine in an
append-only full log, queued in a pending-output buffer for the UI to
drain, and pushed to any subscribed callbacks in append order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


# Color tag used for echoed player input
ECHO_COLOR = "inherit"


@dataclass(frozen=True)
class LogLine:
    """
    A single line of narrative output.

    Attributes:
        text: The line as it would appear on a terminal.
        color: Optional presentation hint for the UI.
    """
    text: str
    color: Optional[str] = None

    def __str__(self) -> str:
        return self.text


LogListener = Callable[[LogLine], None]


class EventLog:
    """
    Append-only log with a drainable output buffer and subscribers.

    Usage:
        log = EventLog()
        log.subscribe(lambda line: print(line.text))
        log.print("HELLO")
        log.get_output()   # [LogLine("HELLO")], buffer now empty
        log.get_full_log() # [LogLine("HELLO")]
    """

    def __init__(self) -> None:
        self._pending: list[LogLine] = []
        self._full: list[LogLine] = []
        self._listeners: list[LogListener] = []

    def print(self, text: str = "", color: Optional[str] = None) -> LogLine:
        """Append a narrative line to both the pending buffer and full log."""
        line = LogLine(text=text, color=color)
        self._pending.append(line)
        self._full.append(line)
        self._notify(line)
        return line

    def echo(self, text: str) -> LogLine:
        """Record player input in the full log only (never in pending output)."""
        line = LogLine(text=f"> {text}", color=ECHO_COLOR)
        self._full.append(line)
        self._notify(line)
        return line

    def clear(self) -> None:
        """Drop all recorded lines. Subscribers stay registered."""
        self._pending = []
        self._full = []

    def get_output(self) -> list[LogLine]:
        """Return and drain the pending output buffer."""
        out = self._pending
        self._pending = []
        return out

    def get_full_log(self) -> list[LogLine]:
        """Return a copy of every line recorded since the last clear."""
        return list(self._full)

    def texts(self) -> list[str]:
        """Full log as plain strings."""
        return [line.text for line in self._full]

    def subscribe(self, listener: LogListener) -> None:
        """Register a callback invoked with each appended line."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: LogListener) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        self._listeners = [l for l in self._listeners if l is not listener]

    def _notify(self, line: LogLine) -> None:
        for listener in list(self._listeners):
            try:
                listener(line)
            except Exception as e:
                print(f"[ENGINE] Log listener error: {e}")
