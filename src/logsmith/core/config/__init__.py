"""Configuration documents for loggers and file rotation."""

from __future__ import annotations

from .manager import (
    SaveFormat,
    detect_format,
    dump_document,
    load_document,
    load_document_async,
    parse_document,
    parse_document_bytes,
    save_document,
    save_document_async,
)
from .schema import (
    AppenderDefinition,
    ConsoleAppenderDefinition,
    CsvFileAppenderDefinition,
    DefaultFileAppenderDefinition,
    EventAppenderDefinition,
    FileAgePolicyDefinition,
    FileArchiverDefinition,
    FileMoverDefinition,
    FileSizePolicyDefinition,
    JsonFileAppenderDefinition,
    LoggerDefinition,
    LoggerRoot,
    LogManagerDefinition,
    MemoryAppenderDefinition,
    RotationRoot,
    XmlFileAppenderDefinition,
)

__all__ = [
    "AppenderDefinition",
    "ConsoleAppenderDefinition",
    "CsvFileAppenderDefinition",
    "DefaultFileAppenderDefinition",
    "EventAppenderDefinition",
    "FileAgePolicyDefinition",
    "FileArchiverDefinition",
    "FileMoverDefinition",
    "FileSizePolicyDefinition",
    "JsonFileAppenderDefinition",
    "LogManagerDefinition",
    "LoggerDefinition",
    "LoggerRoot",
    "MemoryAppenderDefinition",
    "RotationRoot",
    "SaveFormat",
    "XmlFileAppenderDefinition",
    "detect_format",
    "dump_document",
    "load_document",
    "load_document_async",
    "parse_document",
    "parse_document_bytes",
    "save_document",
    "save_document_async",
]
