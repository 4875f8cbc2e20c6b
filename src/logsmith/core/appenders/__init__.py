"""Log appenders.

Every appender filters by its enabled flag and level set, formats the entry
and writes it to its sink.
"""

from __future__ import annotations

from .base import LogAppender
from .console import DefaultConsoleAppender
from .document import DocumentFileAppender, JsonFileAppender, XmlFileAppender
from .event import (
    DEFAULT_EVENT_SOURCE,
    EventEntryType,
    EventLogSink,
    LoggingEventSink,
    WindowsEventAppender,
)
from .file import CsvFileAppender, DefaultFileAppender, FileAppender, StreamFileAppender
from .memory import DefaultMemoryAppender

__all__ = [
    "DEFAULT_EVENT_SOURCE",
    "CsvFileAppender",
    "DefaultConsoleAppender",
    "DefaultFileAppender",
    "DefaultMemoryAppender",
    "DocumentFileAppender",
    "EventEntryType",
    "EventLogSink",
    "FileAppender",
    "JsonFileAppender",
    "LogAppender",
    "LoggingEventSink",
    "StreamFileAppender",
    "WindowsEventAppender",
    "XmlFileAppender",
]
