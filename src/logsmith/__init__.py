"""Structured application logging.

A ``Logger`` stamps level and context onto entries, its ``LogManager`` keeps
a bounded in-memory history and fans each entry out to appenders (console,
text/CSV/JSON/XML files, event log, memory). File rotation is driven by
``FileMover``/``FileArchiver`` gated by age and size policies.
"""

from __future__ import annotations

from .core.appenders import (
    CsvFileAppender,
    DefaultConsoleAppender,
    DefaultFileAppender,
    DefaultMemoryAppender,
    JsonFileAppender,
    LogAppender,
    WindowsEventAppender,
    XmlFileAppender,
)
from .core.config import LoggerRoot, RotationRoot, SaveFormat
from .core.errors import (
    ConfigurationFormatError,
    InvalidArgumentError,
    LoggerNotFoundError,
    LogsmithError,
)
from .core.factory import LogFactory, get_default_factory
from .core.logger import Logger
from .core.manager import LogManager
from .core.models import ALL_LEVELS, Log, LogLevel
from .core.repository import LogRepository
from .core.rotation import FileAgePolicy, FileArchiver, FileMover, FileSizePolicy

__all__ = [
    "ALL_LEVELS",
    "ConfigurationFormatError",
    "CsvFileAppender",
    "DefaultConsoleAppender",
    "DefaultFileAppender",
    "DefaultMemoryAppender",
    "FileAgePolicy",
    "FileArchiver",
    "FileMover",
    "FileSizePolicy",
    "InvalidArgumentError",
    "JsonFileAppender",
    "Log",
    "LogAppender",
    "LogFactory",
    "LogLevel",
    "LogManager",
    "LogRepository",
    "Logger",
    "LoggerNotFoundError",
    "LoggerRoot",
    "LogsmithError",
    "RotationRoot",
    "SaveFormat",
    "WindowsEventAppender",
    "XmlFileAppender",
    "get_default_factory",
]
