"""In-process store of log entries owned by a single LogManager."""

from __future__ import annotations

from collections.abc import Callable

from .models import Log, LogLevel

LogPredicate = Callable[[Log], bool]


def match_filter(level: LogLevel | None, context: str | None) -> LogPredicate:
    """Build an entry predicate where a ``None`` dimension matches everything."""
    if level is None and context is None:
        return lambda log: True
    if level is None:
        return lambda log: log.context == context
    if context is None:
        return lambda log: log.level == level
    return lambda log: log.level == level and log.context == context


class LogRepository:
    """Append-only, insertion-ordered list of Log entries.

    Retrieval always returns a fresh list; callers never hold a live view of
    the store.
    """

    def __init__(self) -> None:
        self._logs: list[Log] = []

    def __len__(self) -> int:
        return len(self._logs)

    def add(self, log: Log) -> None:
        self._logs.append(log)

    def remove(self, log: Log) -> bool:
        """Remove an entry by identity. Returns False when it was not stored."""
        for i, stored in enumerate(self._logs):
            if stored is log:
                del self._logs[i]
                return True
        return False

    def oldest(self) -> Log | None:
        return self._logs[0] if self._logs else None

    def get_all(self) -> list[Log]:
        return list(self._logs)

    def get_by_level(self, level: LogLevel | None) -> list[Log]:
        return self.get_by_level_and_context(level, None)

    def get_by_context(self, context: str | None) -> list[Log]:
        return self.get_by_level_and_context(None, context)

    def get_by_level_and_context(self, level: LogLevel | None, context: str | None) -> list[Log]:
        keep = match_filter(level, context)
        return [log for log in self._logs if keep(log)]

    def clear_all(self) -> None:
        self._logs.clear()

    def clear_by_level(self, level: LogLevel | None) -> None:
        self.clear_by_level_and_context(level, None)

    def clear_by_context(self, context: str | None) -> None:
        self.clear_by_level_and_context(None, context)

    def clear_by_level_and_context(self, level: LogLevel | None, context: str | None) -> None:
        drop = match_filter(level, context)
        self._logs[:] = [log for log in self._logs if not drop(log)]
