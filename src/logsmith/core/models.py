"""Core data models for log entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from .errors import InvalidArgumentError


class LogLevel(str, Enum):
    """Log levels, ordered Trace < Debug < Info < Warning < Error.

    Appenders filter by set membership, never by threshold.
    """

    TRACE = "Trace"
    DEBUG = "Debug"
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


ALL_LEVELS: tuple[LogLevel, ...] = tuple(LogLevel)


@dataclass(frozen=True, slots=True, eq=False)
class Log:
    """A single log entry.

    Entries compare by identity: two entries with equal fields are still
    distinct when removed from a repository.
    """

    content: str
    level: LogLevel = LogLevel.TRACE
    context: str | None = None
    log_date: datetime = field(default_factory=datetime.now)  # local clock

    def __post_init__(self) -> None:
        if self.content is None:
            raise InvalidArgumentError("content must not be None")
        if not isinstance(self.level, LogLevel):
            raise InvalidArgumentError(f"invalid log level: {self.level!r}")


class LogRecord(BaseModel):
    """Serialized form of a Log inside a JSON/XML log file."""

    log_date: datetime
    level: LogLevel
    context: str | None = None
    content: str

    @classmethod
    def from_log(cls, log: Log) -> LogRecord:
        return cls(log_date=log.log_date, level=log.level, context=log.context, content=log.content)

    def to_log(self) -> Log:
        return Log(content=self.content, level=self.level, context=self.context, log_date=self.log_date)


class LogRoot(BaseModel):
    """Document persisted by the JSON and XML file appenders."""

    logs: list[LogRecord] = Field(default_factory=list)
