"""Operating-system event log appender.

The event log itself is reached through an ``EventLogSink``; the default sink
forwards entries to the standard ``logging`` module, which keeps the appender
usable on platforms without a Windows Event Log.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Protocol

from ..errors import InvalidArgumentError
from ..formatting import DEFAULT_EVENT_FORMAT
from ..models import ALL_LEVELS, Log, LogLevel
from .base import LogAppender

logger = logging.getLogger(__name__)

DEFAULT_EVENT_SOURCE = "Application"


class EventEntryType(str, Enum):
    """Severity of an event log entry."""

    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"


_ENTRY_TYPES: dict[LogLevel, EventEntryType] = {
    LogLevel.TRACE: EventEntryType.INFORMATION,
    LogLevel.DEBUG: EventEntryType.INFORMATION,
    LogLevel.INFO: EventEntryType.INFORMATION,
    LogLevel.WARNING: EventEntryType.WARNING,
    LogLevel.ERROR: EventEntryType.ERROR,
}


def entry_type_for(level: LogLevel) -> EventEntryType:
    return _ENTRY_TYPES[level]


class EventLogSink(Protocol):
    """Minimal surface of an OS event log."""

    def source_exists(self, source: str) -> bool:
        """Return True if the event source is registered."""
        ...

    def create_source(self, source: str, log_name: str) -> None:
        """Register an event source. May raise PermissionError."""
        ...

    def write_entry(
        self, log_name: str, source: str, message: str, entry_type: EventEntryType
    ) -> None:
        """Write one entry to the named log under the given source."""
        ...


_LOGGING_LEVELS: dict[EventEntryType, int] = {
    EventEntryType.INFORMATION: logging.INFO,
    EventEntryType.WARNING: logging.WARNING,
    EventEntryType.ERROR: logging.ERROR,
}


class LoggingEventSink:
    """Event sink backed by standard-library loggers named ``<log>.<source>``."""

    def __init__(self, prefix: str = "logsmith.events") -> None:
        self.prefix = prefix
        self._sources: set[str] = {DEFAULT_EVENT_SOURCE}

    def source_exists(self, source: str) -> bool:
        return source in self._sources

    def create_source(self, source: str, log_name: str) -> None:
        self._sources.add(source)

    def write_entry(
        self, log_name: str, source: str, message: str, entry_type: EventEntryType
    ) -> None:
        logging.getLogger(f"{self.prefix}.{log_name}.{source}").log(
            _LOGGING_LEVELS[entry_type], message
        )


class WindowsEventAppender(LogAppender):
    """Write entries to a named event log under an event source.

    If the source does not exist it is created; when creation is refused for
    lack of privilege the appender falls back to the ``Application`` source.
    """

    def __init__(
        self,
        name: str,
        event_source: str | None = None,
        format: str = DEFAULT_EVENT_FORMAT,
        *,
        log_levels: Iterable[LogLevel] | None = ALL_LEVELS,
        enabled: bool = True,
        throw_errors: bool = False,
        sink: EventLogSink | None = None,
    ) -> None:
        super().__init__(
            log_levels=log_levels,
            enabled=enabled,
            format=format,
            throw_errors=throw_errors,
        )
        self.name = name
        self.sink: EventLogSink = sink if sink is not None else LoggingEventSink()
        self.event_source = self._create_event_source(event_source)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("name must not be None")
        self._name = value

    def _create_event_source(self, requested: str | None) -> str:
        source = requested or DEFAULT_EVENT_SOURCE
        try:
            if not self.sink.source_exists(source):
                if not self._name:
                    self._name = DEFAULT_EVENT_SOURCE
                self.sink.create_source(source, self._name)
        except PermissionError:
            logger.debug("Cannot create event source %r; using %s", source, DEFAULT_EVENT_SOURCE)
            source = DEFAULT_EVENT_SOURCE
        return source

    def export_log(self, log: Log) -> None:
        if not self.valid_export(log):
            return

        message = self.format_log(log)
        with self._lock:
            try:
                self.sink.write_entry(
                    self._name or DEFAULT_EVENT_SOURCE,
                    self.event_source,
                    message,
                    entry_type_for(log.level),
                )
            except OSError as exc:
                self._handle_error(exc)
