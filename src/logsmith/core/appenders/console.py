"""Console appender."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from ..formatting import DEFAULT_FORMAT
from ..models import ALL_LEVELS, Log, LogLevel
from .base import LogAppender

Sink = Callable[[str], None]

_TRACE_LOGGER = logging.getLogger("logsmith.console.trace")
_DEBUG_LOGGER = logging.getLogger("logsmith.console.debug")


def _trace_sink(line: str) -> None:
    _TRACE_LOGGER.debug(line)


def _debug_sink(line: str) -> None:
    _DEBUG_LOGGER.debug(line)


class DefaultConsoleAppender(LogAppender):
    """Write formatted entries to the console.

    Trace entries go to the trace sink, Debug entries to the debug sink, and
    Info/Warning/Error to ``stream`` (standard output unless overridden).
    """

    def __init__(
        self,
        format: str = DEFAULT_FORMAT,
        *,
        log_levels: Iterable[LogLevel] | None = ALL_LEVELS,
        enabled: bool = True,
        throw_errors: bool = False,
        stream: TextIO | None = None,
        trace_sink: Sink | None = None,
        debug_sink: Sink | None = None,
        **flags: bool,
    ) -> None:
        super().__init__(
            log_levels=log_levels,
            enabled=enabled,
            format=format,
            throw_errors=throw_errors,
            **flags,
        )
        self.stream = stream
        self.trace_sink = trace_sink or _trace_sink
        self.debug_sink = debug_sink or _debug_sink

    def _write_stdout(self, line: str) -> None:
        # sys.stdout is looked up per write.
        out = self.stream if self.stream is not None else sys.stdout
        out.write(line + "\n")
        out.flush()

    def export_log(self, log: Log) -> None:
        if not self.valid_export(log):
            return

        line = self.format_log(log)
        with self._lock:
            try:
                if log.level is LogLevel.TRACE:
                    self.trace_sink(line)
                elif log.level is LogLevel.DEBUG:
                    self.debug_sink(line)
                else:
                    self._write_stdout(line)
            except OSError as exc:
                self._handle_error(exc)
