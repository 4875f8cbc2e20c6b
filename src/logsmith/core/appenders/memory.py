"""In-memory ring-buffer appender."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import InvalidArgumentError
from ..events import Event
from ..models import ALL_LEVELS, Log, LogLevel
from ..repository import match_filter
from .base import LogAppender


class DefaultMemoryAppender(LogAppender):
    """Keep exported entries in a list, optionally capped at ``max_in_memory``.

    A cap of 0 means unbounded. When capped, the oldest entries are evicted
    before each insert so the list never exceeds the cap.

    Events: ``log_removed(log)``, ``logs_cleared()``,
    ``logs_cleared_by_level(level)``, ``logs_cleared_by_context(context)``,
    ``logs_cleared_by_level_and_context(level, context)`` and
    ``logs_retrieved(logs)``.
    """

    def __init__(
        self,
        max_in_memory: int = 0,
        *,
        log_levels: Iterable[LogLevel] | None = ALL_LEVELS,
        enabled: bool = True,
    ) -> None:
        super().__init__(log_levels=log_levels, enabled=enabled)
        self.max_in_memory = max_in_memory
        self._logs: list[Log] = []

        self.log_removed = Event()
        self.logs_cleared = Event()
        self.logs_cleared_by_level = Event()
        self.logs_cleared_by_context = Event()
        self.logs_cleared_by_level_and_context = Event()
        self.logs_retrieved = Event()

    @property
    def max_in_memory(self) -> int:
        return self._max_in_memory

    @max_in_memory.setter
    def max_in_memory(self, value: int) -> None:
        if value < 0:
            raise InvalidArgumentError("max_in_memory must be >= 0")
        self._max_in_memory = value

    def __len__(self) -> int:
        return len(self._logs)

    def export_log(self, log: Log | None) -> None:
        if log is None or not self.valid_export(log):
            return

        with self._lock:
            evicted = self._evict_for_insert()
            self._logs.append(log)
        for old in evicted:
            self.log_removed.emit(old)

    async def export_log_async(self, log: Log | None) -> None:
        self.export_log(log)

    def _evict_for_insert(self) -> list[Log]:
        evicted: list[Log] = []
        if self._max_in_memory <= 0:
            return evicted
        while self._logs and len(self._logs) + 1 > self._max_in_memory:
            evicted.append(self._logs.pop(0))
        return evicted

    def get_logs(self, level: LogLevel | None = None, context: str | None = None) -> list[Log]:
        """Return stored entries; a ``None`` filter matches everything."""
        keep = match_filter(level, context)
        with self._lock:
            retrieved = [log for log in self._logs if keep(log)]
        self.logs_retrieved.emit(retrieved)
        return retrieved

    def remove_log(self, log: Log) -> None:
        with self._lock:
            removed = False
            for i, stored in enumerate(self._logs):
                if stored is log:
                    del self._logs[i]
                    removed = True
                    break
        if removed:
            self.log_removed.emit(log)

    def clear_logs(self, level: LogLevel | None = None, context: str | None = None) -> None:
        """Remove matching entries and raise the event for that filter shape."""
        drop = match_filter(level, context)
        with self._lock:
            self._logs[:] = [log for log in self._logs if not drop(log)]

        if level is None and context is None:
            self.logs_cleared.emit()
        elif context is None:
            self.logs_cleared_by_level.emit(level)
        elif level is None:
            self.logs_cleared_by_context.emit(context)
        else:
            self.logs_cleared_by_level_and_context.emit(level, context)

    def _release_resources(self) -> None:
        self._logs.clear()
