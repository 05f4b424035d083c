"""Configuration event log — where each value came from.

A config's values can arrive from three places: an environment key at
construction, a native assignment through ``set``, or a string through
``decode``.  When a service misbehaves the first question is usually
"which of those set this?", so every write is recorded here:

- **LogLevel** — severity, ordered for filtering.  Bound environment
  keys are DEBUG, object-API writes are INFO, failures are ERROR.
- **LogEntry** — one event: what happened, on which path (``source``
  is ``"env"`` or ``"config"``), and to which variable.
- **Logger** — the append-only event list a ``Config`` writes into.
  ``origin`` answers the "who set this?" question directly.

Values are never logged.  Entries name the variable and the
environment key, but configuration often carries secrets, so the value
itself stays out of the log.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a configuration event."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One configuration event.

    Attributes:
        level: DEBUG for bound keys, INFO for writes, ERROR for failures.
        message: ``"decoded from <KEY>"``, ``"set"``, ``"decoded"``, or
            the error message of a failed operation.
        source: ``"env"`` for binding, ``"config"`` for the object API.
        variable: The variable written, or None when the event concerns
            no declared variable (an unknown environment key).

    """

    level: LogLevel
    message: str
    source: str
    variable: str | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: variable: message``."""
        if self.variable is None:
            return f"[{self.level.name}] {self.source}: {self.message}"
        return f"[{self.level.name}] {self.source}: {self.variable}: {self.message}"


class Logger:
    """The event list shared by a config and its environment binding.

    One logger can be injected into several configs to collect the
    history of a whole process in one place.
    """

    def __init__(self) -> None:
        """Create a logger with no events."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every event, oldest first."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        variable: str | None = None,
    ) -> None:
        """Record an event.

        Args:
            level: Severity of the event.
            message: What happened; never the value itself.
            source: ``"env"`` or ``"config"``.
            variable: The variable concerned, if any.

        """
        self._entries.append(
            LogEntry(level=level, message=message, source=source, variable=variable)
        )

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
        variable: str | None = None,
    ) -> list[LogEntry]:
        """Return events matching every given criterion.

        Args:
            min_level: Keep events at or above this level.
            source: Keep events from this path only.
            variable: Keep events about this variable only.

        Returns:
            Matching events, oldest first.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        if variable is not None:
            result = [e for e in result if e.variable == variable]
        return result

    def origin(self, variable: str) -> LogEntry | None:
        """Return the event that produced *variable*'s current value.

        Failed writes leave the value untouched, so ERROR events are
        skipped.  None means the value is still the declared default.
        """
        for entry in reversed(self._entries):
            if entry.variable == variable and entry.level < LogLevel.ERROR:
                return entry
        return None

    def clear(self) -> None:
        """Forget every recorded event (values are unaffected)."""
        self._entries.clear()
