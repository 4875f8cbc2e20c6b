"""User-facing Logger facade."""

from __future__ import annotations

import logging
import traceback

from .errors import InvalidArgumentError
from .manager import LogManager
from .models import Log, LogLevel

_LOGGER = logging.getLogger(__name__)

_LEVEL_FLAGS: dict[LogLevel, str] = {
    LogLevel.TRACE: "trace_enabled",
    LogLevel.DEBUG: "debug_enabled",
    LogLevel.INFO: "info_enabled",
    LogLevel.WARNING: "warning_enabled",
    LogLevel.ERROR: "error_enabled",
}


def describe_exception(exc: BaseException) -> str:
    """Render an exception as its message followed by its stack trace."""
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return f"{exc}\n{trace}".rstrip("\n")


class Logger:
    """Stamp level and context onto entries and hand them to a LogManager.

    A call produces an entry only when both ``enabled`` and the per-level
    flag are true. Failures raised by the manager or its appenders are
    reported through the ``logging`` module and swallowed unless
    ``throw_exceptions`` is set. Invalid arguments (such as ``None``
    content) always raise.
    """

    def __init__(self, name: str, log_manager: LogManager | None = None) -> None:
        self.name = name
        self._log_manager = log_manager if log_manager is not None else LogManager()

        self.enabled = True
        self.throw_exceptions = False
        self.trace_enabled = True
        self.debug_enabled = True
        self.info_enabled = True
        self.warning_enabled = True
        self.error_enabled = True

    @property
    def log_manager(self) -> LogManager:
        return self._log_manager

    def get_log_manager(self) -> LogManager:
        return self._log_manager

    @property
    def max_in_memory(self) -> int:
        return self._log_manager.max_in_memory

    @max_in_memory.setter
    def max_in_memory(self, value: int) -> None:
        self._log_manager.max_in_memory = value

    @property
    def clear_memory(self) -> bool:
        return self._log_manager.clear_memory

    @clear_memory.setter
    def clear_memory(self, value: bool) -> None:
        self._log_manager.clear_memory = value

    def is_level_enabled(self, level: LogLevel) -> bool:
        return self.enabled and getattr(self, _LEVEL_FLAGS[level])

    def _build(self, content: str | BaseException, context: str | None, level: LogLevel) -> Log:
        if isinstance(content, BaseException):
            content = describe_exception(content)
        if context is not None:
            return Log(content, level, context)
        return Log(content, level)

    def log(self, level: LogLevel, content: str | BaseException, context: str | None = None) -> None:
        if not self.is_level_enabled(level):
            return
        entry = self._build(content, context, level)
        try:
            self._log_manager.add_log(entry)
        except InvalidArgumentError:
            raise
        except Exception:
            if self.throw_exceptions:
                raise
            _LOGGER.exception("Logger %r failed to add a %s entry", self.name, level.value)

    async def log_async(
        self, level: LogLevel, content: str | BaseException, context: str | None = None
    ) -> None:
        if not self.is_level_enabled(level):
            return
        entry = self._build(content, context, level)
        try:
            await self._log_manager.add_log_async(entry)
        except InvalidArgumentError:
            raise
        except Exception:
            if self.throw_exceptions:
                raise
            _LOGGER.exception("Logger %r failed to add a %s entry", self.name, level.value)

    def trace(self, content: str, context: str | None = None) -> None:
        self.log(LogLevel.TRACE, content, context)

    def debug(self, content: str, context: str | None = None) -> None:
        self.log(LogLevel.DEBUG, content, context)

    def info(self, content: str, context: str | None = None) -> None:
        self.log(LogLevel.INFO, content, context)

    def warn(self, content: str, context: str | None = None) -> None:
        self.log(LogLevel.WARNING, content, context)

    def error(self, content: str | BaseException, context: str | None = None) -> None:
        """Log an error message, or an exception rendered with its traceback."""
        self.log(LogLevel.ERROR, content, context)

    async def trace_async(self, content: str, context: str | None = None) -> None:
        await self.log_async(LogLevel.TRACE, content, context)

    async def debug_async(self, content: str, context: str | None = None) -> None:
        await self.log_async(LogLevel.DEBUG, content, context)

    async def info_async(self, content: str, context: str | None = None) -> None:
        await self.log_async(LogLevel.INFO, content, context)

    async def warn_async(self, content: str, context: str | None = None) -> None:
        await self.log_async(LogLevel.WARNING, content, context)

    async def error_async(self, content: str | BaseException, context: str | None = None) -> None:
        await self.log_async(LogLevel.ERROR, content, context)

    def __repr__(self) -> str:
        return f"Logger(name={self.name!r}, enabled={self.enabled})"
