"""Configuration document models.

A ``LoggerRoot`` describes a set of loggers, each with its LogManager and an
ordered list of appenders tagged by ``type``. A ``RotationRoot`` describes
file configurations and their invoke policies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..appenders import (
    CsvFileAppender,
    DefaultConsoleAppender,
    DefaultFileAppender,
    DefaultMemoryAppender,
    DocumentFileAppender,
    JsonFileAppender,
    LogAppender,
    WindowsEventAppender,
    XmlFileAppender,
)
from ..appenders.event import DEFAULT_EVENT_SOURCE
from ..appenders.file import DEFAULT_DELIMITER, DEFAULT_ENCODING
from ..formatting import DEFAULT_EVENT_FORMAT, DEFAULT_FORMAT
from ..logger import Logger
from ..manager import DEFAULT_MAX_IN_MEMORY, LogManager
from ..models import ALL_LEVELS, LogLevel
from ..rotation import FileAgePolicy, FileArchiver, FileMover, FileSizePolicy, InvokePolicy
from ..rotation.configuration import FileConfiguration

logger = logging.getLogger(__name__)


def _ordered_levels(levels: Iterable[LogLevel]) -> list[LogLevel]:
    present = set(levels)
    return [level for level in LogLevel if level in present]


class _Definition(BaseModel):
    model_config = ConfigDict(extra="forbid")


# Appenders


class _AppenderDefinition(_Definition):
    enabled: bool = True
    log_levels: list[LogLevel] = Field(default_factory=lambda: list(ALL_LEVELS))

    def _common(self) -> dict:
        return {"enabled": self.enabled, "log_levels": self.log_levels}

    @staticmethod
    def _common_from(appender: LogAppender) -> dict:
        return {"enabled": appender.enabled, "log_levels": _ordered_levels(appender.log_levels)}


class _FormattedDefinition(_AppenderDefinition):
    throw_errors: bool = False
    append_date: bool = True
    append_level: bool = True
    append_context: bool = True
    append_content: bool = True

    def _flags(self) -> dict:
        return {
            "throw_errors": self.throw_errors,
            "append_date": self.append_date,
            "append_level": self.append_level,
            "append_context": self.append_context,
            "append_content": self.append_content,
        }

    @staticmethod
    def _flags_from(appender: LogAppender) -> dict:
        return {
            "throw_errors": appender.throw_errors,
            "append_date": appender.append_date,
            "append_level": appender.append_level,
            "append_context": appender.append_context,
            "append_content": appender.append_content,
        }


class ConsoleAppenderDefinition(_FormattedDefinition):
    type: Literal["console"] = "console"
    format: str = DEFAULT_FORMAT

    def build(self) -> DefaultConsoleAppender:
        return DefaultConsoleAppender(self.format, **self._common(), **self._flags())

    @classmethod
    def from_appender(cls, appender: DefaultConsoleAppender) -> ConsoleAppenderDefinition:
        return cls(format=appender.format, **cls._common_from(appender), **cls._flags_from(appender))


class DefaultFileAppenderDefinition(_FormattedDefinition):
    type: Literal["file"] = "file"
    file_path: str
    encoding: str = DEFAULT_ENCODING
    format: str = DEFAULT_FORMAT

    def build(self) -> DefaultFileAppender:
        return DefaultFileAppender(
            self.file_path,
            encoding=self.encoding,
            format=self.format,
            **self._common(),
            **self._flags(),
        )

    @classmethod
    def from_appender(cls, appender: DefaultFileAppender) -> DefaultFileAppenderDefinition:
        return cls(
            file_path=appender.file_path,
            encoding=appender.encoding,
            format=appender.format,
            **cls._common_from(appender),
            **cls._flags_from(appender),
        )


class CsvFileAppenderDefinition(_FormattedDefinition):
    type: Literal["csv"] = "csv"
    file_path: str
    encoding: str = DEFAULT_ENCODING
    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1, max_length=1)

    def build(self) -> CsvFileAppender:
        return CsvFileAppender(
            self.file_path,
            delimiter=self.delimiter,
            encoding=self.encoding,
            **self._common(),
            **self._flags(),
        )

    @classmethod
    def from_appender(cls, appender: CsvFileAppender) -> CsvFileAppenderDefinition:
        return cls(
            file_path=appender.file_path,
            encoding=appender.encoding,
            delimiter=appender.delimiter,
            **cls._common_from(appender),
            **cls._flags_from(appender),
        )


class _DocumentAppenderDefinition(_AppenderDefinition):
    appender_class: ClassVar[type[DocumentFileAppender]]

    file_path: str
    encoding: str = DEFAULT_ENCODING
    throw_errors: bool = False

    def build(self) -> DocumentFileAppender:
        return self.appender_class(
            self.file_path,
            encoding=self.encoding,
            throw_errors=self.throw_errors,
            **self._common(),
        )

    @classmethod
    def from_appender(cls, appender: DocumentFileAppender) -> _DocumentAppenderDefinition:
        return cls(
            file_path=appender.file_path,
            encoding=appender.encoding,
            throw_errors=appender.throw_errors,
            **cls._common_from(appender),
        )


class JsonFileAppenderDefinition(_DocumentAppenderDefinition):
    appender_class = JsonFileAppender
    type: Literal["json"] = "json"


class XmlFileAppenderDefinition(_DocumentAppenderDefinition):
    appender_class = XmlFileAppender
    type: Literal["xml"] = "xml"


class EventAppenderDefinition(_AppenderDefinition):
    type: Literal["event"] = "event"
    name: str
    event_source: str = DEFAULT_EVENT_SOURCE
    format: str = DEFAULT_EVENT_FORMAT
    throw_errors: bool = False

    def build(self) -> WindowsEventAppender:
        return WindowsEventAppender(
            self.name,
            self.event_source,
            self.format,
            throw_errors=self.throw_errors,
            **self._common(),
        )

    @classmethod
    def from_appender(cls, appender: WindowsEventAppender) -> EventAppenderDefinition:
        return cls(
            name=appender.name,
            event_source=appender.event_source,
            format=appender.format,
            throw_errors=appender.throw_errors,
            **cls._common_from(appender),
        )


class MemoryAppenderDefinition(_AppenderDefinition):
    type: Literal["memory"] = "memory"
    max_in_memory: int = Field(default=0, ge=0)

    def build(self) -> DefaultMemoryAppender:
        return DefaultMemoryAppender(self.max_in_memory, **self._common())

    @classmethod
    def from_appender(cls, appender: DefaultMemoryAppender) -> MemoryAppenderDefinition:
        return cls(max_in_memory=appender.max_in_memory, **cls._common_from(appender))


AppenderDefinition = Annotated[
    Union[
        ConsoleAppenderDefinition,
        DefaultFileAppenderDefinition,
        CsvFileAppenderDefinition,
        JsonFileAppenderDefinition,
        XmlFileAppenderDefinition,
        EventAppenderDefinition,
        MemoryAppenderDefinition,
    ],
    Field(discriminator="type"),
]

_APPENDER_DEFINITIONS: dict[type[LogAppender], type] = {
    DefaultConsoleAppender: ConsoleAppenderDefinition,
    DefaultFileAppender: DefaultFileAppenderDefinition,
    CsvFileAppender: CsvFileAppenderDefinition,
    JsonFileAppender: JsonFileAppenderDefinition,
    XmlFileAppender: XmlFileAppenderDefinition,
    WindowsEventAppender: EventAppenderDefinition,
    DefaultMemoryAppender: MemoryAppenderDefinition,
}


def appender_definition(appender: LogAppender):
    """Return the definition for a built-in appender, or None for custom types."""
    definition = _APPENDER_DEFINITIONS.get(type(appender))
    if definition is None:
        return None
    return definition.from_appender(appender)


# Loggers


class LogManagerDefinition(_Definition):
    max_in_memory: int = Field(default=DEFAULT_MAX_IN_MEMORY, ge=1)
    clear_memory: bool = False
    log_appenders: list[AppenderDefinition] = Field(default_factory=list)

    def build(self) -> LogManager:
        return LogManager(
            max_in_memory=self.max_in_memory,
            clear_memory=self.clear_memory,
            appenders=[a.build() for a in self.log_appenders],
        )

    @classmethod
    def from_manager(cls, manager: LogManager) -> LogManagerDefinition:
        appenders = []
        for appender in manager.get_log_appenders():
            definition = appender_definition(appender)
            if definition is None:
                logger.warning("Skipping unsupported appender type %s", type(appender).__name__)
                continue
            appenders.append(definition)
        return cls(
            max_in_memory=manager.max_in_memory,
            clear_memory=manager.clear_memory,
            log_appenders=appenders,
        )


class LoggerDefinition(_Definition):
    name: str
    enabled: bool = True
    throw_exceptions: bool = False
    trace_enabled: bool = True
    debug_enabled: bool = True
    info_enabled: bool = True
    warning_enabled: bool = True
    error_enabled: bool = True
    log_manager: LogManagerDefinition = Field(default_factory=LogManagerDefinition)

    def build(self) -> Logger:
        built = Logger(self.name, self.log_manager.build())
        built.enabled = self.enabled
        built.throw_exceptions = self.throw_exceptions
        built.trace_enabled = self.trace_enabled
        built.debug_enabled = self.debug_enabled
        built.info_enabled = self.info_enabled
        built.warning_enabled = self.warning_enabled
        built.error_enabled = self.error_enabled
        return built

    @classmethod
    def from_logger(cls, source: Logger) -> LoggerDefinition:
        return cls(
            name=source.name,
            enabled=source.enabled,
            throw_exceptions=source.throw_exceptions,
            trace_enabled=source.trace_enabled,
            debug_enabled=source.debug_enabled,
            info_enabled=source.info_enabled,
            warning_enabled=source.warning_enabled,
            error_enabled=source.error_enabled,
            log_manager=LogManagerDefinition.from_manager(source.log_manager),
        )


class LoggerRoot(_Definition):
    loggers: list[LoggerDefinition] = Field(default_factory=list)

    def build(self) -> list[Logger]:
        return [definition.build() for definition in self.loggers]

    @classmethod
    def from_loggers(cls, loggers: Iterable[Logger]) -> LoggerRoot:
        return cls(loggers=[LoggerDefinition.from_logger(lg) for lg in loggers])


# Rotation


class FileAgePolicyDefinition(_Definition):
    type: Literal["age"] = "age"
    max_days: int = -1
    max_hours: int = Field(default=-1, le=23)
    max_minutes: int = Field(default=-1, le=59)
    max_seconds: int = Field(default=-1, le=59)

    def build(self) -> FileAgePolicy:
        return FileAgePolicy(self.max_days, self.max_hours, self.max_minutes, self.max_seconds)


class FileSizePolicyDefinition(_Definition):
    type: Literal["size"] = "size"
    max_file_size: int = Field(gt=0)

    def build(self) -> FileSizePolicy:
        return FileSizePolicy(self.max_file_size)


InvokePolicyDefinition = Annotated[
    Union[FileAgePolicyDefinition, FileSizePolicyDefinition],
    Field(discriminator="type"),
]


def policy_definition(policy: InvokePolicy) -> FileAgePolicyDefinition | FileSizePolicyDefinition:
    if isinstance(policy, FileAgePolicy):
        return FileAgePolicyDefinition(
            max_days=policy.max_days,
            max_hours=policy.max_hours,
            max_minutes=policy.max_minutes,
            max_seconds=policy.max_seconds,
        )
    if isinstance(policy, FileSizePolicy):
        return FileSizePolicyDefinition(max_file_size=policy.max_file_size)
    raise TypeError(f"Unsupported invoke policy: {type(policy).__name__}")


class _FileConfigurationDefinition(_Definition):
    enabled: bool = True
    throw_errors: bool = False
    invoke_policies: list[InvokePolicyDefinition] = Field(default_factory=list)

    def _common(self) -> dict:
        return {
            "enabled": self.enabled,
            "throw_errors": self.throw_errors,
            "invoke_policies": [p.build() for p in self.invoke_policies],
        }

    @staticmethod
    def _common_from(configuration: FileConfiguration) -> dict:
        return {
            "enabled": configuration.enabled,
            "throw_errors": configuration.throw_errors,
            "invoke_policies": [policy_definition(p) for p in configuration.invoke_policies],
        }


class FileMoverDefinition(_FileConfigurationDefinition):
    type: Literal["mover"] = "mover"
    directory: str | None = None

    def build(self) -> FileMover:
        return FileMover(self.directory, **self._common())

    @classmethod
    def from_configuration(cls, mover: FileMover) -> FileMoverDefinition:
        return cls(directory=mover.directory, **cls._common_from(mover))


class FileArchiverDefinition(_FileConfigurationDefinition):
    type: Literal["archiver"] = "archiver"
    zip_path: str | None = None

    def build(self) -> FileArchiver:
        return FileArchiver(self.zip_path, **self._common())

    @classmethod
    def from_configuration(cls, archiver: FileArchiver) -> FileArchiverDefinition:
        return cls(zip_path=archiver.zip_path, **cls._common_from(archiver))


FileConfigurationDefinition = Annotated[
    Union[FileMoverDefinition, FileArchiverDefinition],
    Field(discriminator="type"),
]


class RotationRoot(_Definition):
    file_configurations: list[FileConfigurationDefinition] = Field(default_factory=list)

    def build(self) -> list[FileConfiguration]:
        return [definition.build() for definition in self.file_configurations]

    @classmethod
    def from_configurations(cls, configurations: Iterable[FileConfiguration]) -> RotationRoot:
        out = []
        for configuration in configurations:
            if isinstance(configuration, FileMover):
                out.append(FileMoverDefinition.from_configuration(configuration))
            elif isinstance(configuration, FileArchiver):
                out.append(FileArchiverDefinition.from_configuration(configuration))
            else:
                raise TypeError(f"Unsupported file configuration: {type(configuration).__name__}")
        return cls(file_configurations=out)
