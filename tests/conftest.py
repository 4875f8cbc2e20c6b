from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from logsmith.core.appenders.base import LogAppender
from logsmith.core.models import Log, LogLevel

FIXED_DATE = datetime(2024, 1, 2, 3, 4, 5)


class RecordingAppender(LogAppender):
    """Collects formatted lines; optionally fails every export."""

    def __init__(self, label: str = "rec", journal: list[str] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.label = label
        self.lines: list[str] = []
        self.journal = journal if journal is not None else []
        self.fail_with: BaseException | None = None
        self.closed = False

    def export_log(self, log: Log) -> None:
        if not self.valid_export(log):
            return
        if self.fail_with is not None:
            raise self.fail_with
        with self._lock:
            self.lines.append(self.format_log(log))
            self.journal.append(self.label)

    def _release_resources(self) -> None:
        self.closed = True


@pytest.fixture
def fixed_date() -> datetime:
    return FIXED_DATE


@pytest.fixture
def make_log() -> Callable[..., Log]:
    def _make(
        content: str = "hello",
        level: LogLevel = LogLevel.INFO,
        context: str | None = None,
        log_date: datetime = FIXED_DATE,
    ) -> Log:
        return Log(content, level, context, log_date)

    return _make


@pytest.fixture
def recording_appender() -> Callable[..., RecordingAppender]:
    def _make(label: str = "rec", journal: list[str] | None = None, **kwargs) -> RecordingAppender:
        return RecordingAppender(label, journal, **kwargs)

    return _make
