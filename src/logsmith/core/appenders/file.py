"""Line-oriented file appenders (plain text and CSV)."""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import TextIO

from ..errors import InvalidArgumentError
from ..formatting import DEFAULT_FORMAT, format_date
from ..models import ALL_LEVELS, Log, LogLevel
from .base import LogAppender

DEFAULT_ENCODING = "utf-8"
DEFAULT_DELIMITER = ","


class FileAppender(LogAppender):
    """Base for appenders that persist entries under ``file_path``."""

    def __init__(
        self,
        file_path: str | os.PathLike[str],
        *,
        encoding: str = DEFAULT_ENCODING,
        log_levels: Iterable[LogLevel] | None = ALL_LEVELS,
        enabled: bool = True,
        format: str = DEFAULT_FORMAT,
        throw_errors: bool = False,
        **flags: bool,
    ) -> None:
        super().__init__(
            log_levels=log_levels,
            enabled=enabled,
            format=format,
            throw_errors=throw_errors,
            **flags,
        )
        self.file_path = file_path
        self.encoding = encoding

    @property
    def file_path(self) -> str:
        return self._file_path

    @file_path.setter
    def file_path(self, value: str | os.PathLike[str]) -> None:
        if value is None:
            raise InvalidArgumentError("file_path must not be None")
        self._file_path = os.fspath(value)


class StreamFileAppender(FileAppender):
    """Keep one append-mode stream open and write one flushed line per entry.

    The stream is opened at construction; if that fails (and the failure is
    suppressed) it is retried on the next export. After ``close()`` exports
    are dropped, or raise ``ValueError`` when ``throw_errors`` is set.
    """

    def __init__(self, file_path: str | os.PathLike[str], **kwargs) -> None:
        super().__init__(file_path, **kwargs)
        self._stream: TextIO | None = None
        self._closed = False
        self._open_stream()

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def _open_stream(self) -> None:
        try:
            self._stream = open(self.file_path, "a", encoding=self.encoding)
        except OSError as exc:
            self._stream = None
            self._handle_error(exc)

    def export_log(self, log: Log) -> None:
        if not self.valid_export(log):
            return

        line = self.format_log(log)
        with self._lock:
            try:
                if self._closed:
                    raise ValueError(f"{type(self).__name__} is closed: {self.file_path}")
                if self._stream is None and self.file_path:
                    self._open_stream()
                if self._stream is None:
                    return
                self._stream.write(line + "\n")
                self._stream.flush()
            except (OSError, ValueError) as exc:
                self._handle_error(exc)

    def _release_resources(self) -> None:
        self._closed = True
        if self._stream is not None:
            self._stream.close()
            self._stream = None


class DefaultFileAppender(StreamFileAppender):
    """Write entries rendered through the ``format`` template."""


class CsvFileAppender(StreamFileAppender):
    """Write entries as delimited rows: date, level, "context", "content".

    The ``append_*`` flags select which columns are written. Context and
    content are quoted, with embedded quotes doubled.
    """

    def __init__(
        self,
        file_path: str | os.PathLike[str],
        *,
        delimiter: str = DEFAULT_DELIMITER,
        **kwargs,
    ) -> None:
        self.delimiter = delimiter
        super().__init__(file_path, **kwargs)

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @delimiter.setter
    def delimiter(self, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise InvalidArgumentError("delimiter must be a single character")
        self._delimiter = value

    @staticmethod
    def _quote(value: str | None) -> str:
        return '"' + (value or "").replace('"', '""') + '"'

    def format_log(self, log: Log) -> str:
        fields: list[str] = []
        if self.append_date:
            fields.append(format_date(log.log_date))
        if self.append_level:
            fields.append(log.level.value)
        if self.append_context:
            fields.append(self._quote(log.context))
        if self.append_content:
            fields.append(self._quote(log.content))
        return self._delimiter.join(fields)
