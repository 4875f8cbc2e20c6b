"""Appender interface and the state every appender shares."""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from types import TracebackType

from ..errors import InvalidArgumentError
from ..formatting import DEFAULT_FORMAT, format_log
from ..models import ALL_LEVELS, Log, LogLevel

logger = logging.getLogger(__name__)


class LogAppender(ABC):
    """A sink that receives one log entry at a time.

    An entry is exported only when the appender is enabled and the entry's
    level is a member of ``log_levels``. I/O failures are re-raised when
    ``throw_errors`` is set and otherwise abandon the export for this
    appender only.
    """

    def __init__(
        self,
        *,
        log_levels: Iterable[LogLevel] | None = ALL_LEVELS,
        enabled: bool = True,
        format: str = DEFAULT_FORMAT,
        throw_errors: bool = False,
        append_date: bool = True,
        append_level: bool = True,
        append_context: bool = True,
        append_content: bool = True,
    ) -> None:
        self.log_levels = log_levels
        self.format = format
        self.enabled = enabled
        self.throw_errors = throw_errors
        self.append_date = append_date
        self.append_level = append_level
        self.append_context = append_context
        self.append_content = append_content
        self._lock = threading.Lock()

    @property
    def log_levels(self) -> set[LogLevel]:
        return self._log_levels

    @log_levels.setter
    def log_levels(self, value: Iterable[LogLevel] | None) -> None:
        if value is None:
            raise InvalidArgumentError("log_levels must not be None")
        self._log_levels = {LogLevel(v) for v in value}

    @property
    def format(self) -> str:
        return self._format

    @format.setter
    def format(self, value: str) -> None:
        if value is None:
            raise InvalidArgumentError("format must not be None")
        self._format = value

    def add_log_level(self, level: LogLevel) -> None:
        self._log_levels.add(LogLevel(level))

    def remove_log_level(self, level: LogLevel) -> None:
        self._log_levels.discard(level)

    def valid_export(self, log: Log | None) -> bool:
        if log is None:
            raise InvalidArgumentError("log must not be None")
        return self.enabled and log.level in self._log_levels

    def format_log(self, log: Log) -> str:
        return format_log(
            self._format,
            log,
            append_date=self.append_date,
            append_level=self.append_level,
            append_context=self.append_context,
            append_content=self.append_content,
        )

    @abstractmethod
    def export_log(self, log: Log) -> None:
        """Validate, format and write one entry."""

    async def export_log_async(self, log: Log) -> None:
        """Run ``export_log`` on a worker thread.

        The write lock is taken inside the worker and is never held across
        an ``await``.
        """
        if not self.valid_export(log):
            return
        await asyncio.to_thread(self.export_log, log)

    def _handle_error(self, exc: BaseException) -> None:
        """Apply the throw_errors policy to an I/O failure.

        Must be called from inside an ``except`` block.
        """
        if self.throw_errors:
            raise
        logger.debug("%s export suppressed: %s", type(self).__name__, exc)

    def _release_resources(self) -> None:
        """Release owned I/O handles. Called with the write lock held."""

    def close(self) -> None:
        """Wait for any in-flight write, then release owned resources."""
        with self._lock:
            self._release_resources()

    def __enter__(self) -> LogAppender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        levels = ",".join(level.value for level in LogLevel if level in self._log_levels)
        return f"{type(self).__name__}(enabled={self.enabled}, log_levels={{{levels}}})"
