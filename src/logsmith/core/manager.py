"""LogManager: fan-out hub between a Logger, its repository and appenders."""

from __future__ import annotations

from collections.abc import Iterable

from .appenders.base import LogAppender
from .errors import InvalidArgumentError
from .events import Event
from .models import Log, LogLevel
from .repository import LogRepository

DEFAULT_MAX_IN_MEMORY = 1000


class LogManager:
    """Store accepted entries and push them to every appender in order.

    ``add_log`` evicts the oldest stored entries (when ``clear_memory`` is
    set) until the new entry fits under ``max_in_memory``, stores the entry,
    exports it to each appender in registration order, then raises
    ``log_added``.

    There is no manager-level lock: concurrent ``add_log`` calls on the same
    manager may interleave their repository writes and appender exports.
    Each appender serializes its own writes.
    """

    def __init__(
        self,
        *,
        max_in_memory: int = DEFAULT_MAX_IN_MEMORY,
        clear_memory: bool = False,
        appenders: Iterable[LogAppender] | None = None,
    ) -> None:
        self._repository = LogRepository()
        self._appenders: list[LogAppender] = []
        self.max_in_memory = max_in_memory
        self.clear_memory = clear_memory
        for appender in appenders or ():
            self.add_log_appender(appender)

        self.log_added = Event()
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
        if value < 1:
            raise InvalidArgumentError("max_in_memory must be >= 1")
        self._max_in_memory = value

    # Appenders

    def add_log_appender(self, appender: LogAppender) -> None:
        if appender is None:
            raise InvalidArgumentError("appender must not be None")
        self._appenders.append(appender)

    def remove_log_appender(self, appender: LogAppender) -> None:
        if appender is None:
            raise InvalidArgumentError("appender must not be None")
        try:
            self._appenders.remove(appender)
        except ValueError:
            pass

    def set_log_appenders(self, appenders: Iterable[LogAppender]) -> None:
        if appenders is None:
            raise InvalidArgumentError("appenders must not be None")
        appenders = list(appenders)
        if any(a is None for a in appenders):
            raise InvalidArgumentError("appender must not be None")
        self._appenders = appenders

    def get_log_appenders(self) -> list[LogAppender]:
        return list(self._appenders)

    def close(self) -> None:
        """Close every appender, waiting for in-flight writes."""
        for appender in self._appenders:
            appender.close()

    # Entries

    def _store(self, log: Log) -> None:
        if log is None:
            raise InvalidArgumentError("log must not be None")
        if self.clear_memory:
            while len(self._repository) and len(self._repository) + 1 > self._max_in_memory:
                self._repository.remove(self._repository.oldest())
        self._repository.add(log)

    def add_log(self, log: Log) -> None:
        self._store(log)
        for appender in self._appenders:
            appender.export_log(log)
        self.log_added.emit(log)

    async def add_log_async(self, log: Log) -> None:
        self._store(log)
        for appender in list(self._appenders):
            await appender.export_log_async(log)
        self.log_added.emit(log)

    def remove_log(self, log: Log) -> None:
        if self._repository.remove(log):
            self.log_removed.emit(log)

    def get_logs(self, level: LogLevel | None = None, context: str | None = None) -> list[Log]:
        """Return stored entries; a ``None`` filter matches everything."""
        retrieved = self._repository.get_by_level_and_context(level, context)
        self.logs_retrieved.emit(retrieved)
        return retrieved

    def clear_logs(self, level: LogLevel | None = None, context: str | None = None) -> None:
        """Remove matching entries and raise the event for that filter shape."""
        if level is None and context is None:
            self._repository.clear_all()
            self.logs_cleared.emit()
        elif context is None:
            self._repository.clear_by_level(level)
            self.logs_cleared_by_level.emit(level)
        elif level is None:
            self._repository.clear_by_context(context)
            self.logs_cleared_by_context.emit(context)
        else:
            self._repository.clear_by_level_and_context(level, context)
            self.logs_cleared_by_level_and_context.emit(level, context)

    def __len__(self) -> int:
        return len(self._repository)
