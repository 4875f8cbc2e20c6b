"""LogFactory: a process-wide registry of named loggers."""

from __future__ import annotations

import logging
import os
import threading
import uuid
from collections.abc import Iterable

from .config import (
    LoggerRoot,
    SaveFormat,
    load_document,
    load_document_async,
    parse_document,
    parse_document_bytes,
    save_document,
    save_document_async,
)
from .errors import InvalidArgumentError, LoggerNotFoundError
from .logger import Logger

logger = logging.getLogger(__name__)


class LogFactory:
    """Create, look up and persist loggers.

    Names are not required to be unique; lookups by name return the first
    registered match. All registry operations hold one lock.
    """

    def __init__(self, loggers: Iterable[Logger] | None = None) -> None:
        self._lock = threading.Lock()
        self._loggers: list[Logger] = []
        for item in loggers or ():
            self.add_logger(item)

    @property
    def loggers(self) -> list[Logger]:
        with self._lock:
            return list(self._loggers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def generate_logger(self, name: str | None = None) -> Logger:
        """Create and register a logger with a fresh LogManager.

        A random name is generated when none is given.
        """
        created = Logger(name if name is not None else uuid.uuid4().hex)
        with self._lock:
            self._loggers.append(created)
        return created

    def add_logger(self, item: Logger) -> None:
        if item is None:
            raise InvalidArgumentError("logger must not be None")
        with self._lock:
            self._loggers.append(item)

    def get_logger(self, name: str) -> Logger:
        with self._lock:
            for item in self._loggers:
                if item.name == name:
                    return item
        raise LoggerNotFoundError(name)

    def get_loggers(self, name: str) -> list[Logger]:
        with self._lock:
            return [item for item in self._loggers if item.name == name]

    def remove_logger(self, target: str | Logger) -> bool:
        """Remove one logger, by identity or by first name match."""
        if target is None:
            raise InvalidArgumentError("target must not be None")
        with self._lock:
            for index, item in enumerate(self._loggers):
                if item is target or (isinstance(target, str) and item.name == target):
                    del self._loggers[index]
                    return True
        return False

    def remove_loggers(self, name: str) -> int:
        with self._lock:
            kept = [item for item in self._loggers if item.name != name]
            removed = len(self._loggers) - len(kept)
            self._loggers = kept
        return removed

    def clear_loggers(self) -> None:
        with self._lock:
            self._loggers.clear()

    # Configuration

    def to_logger_root(self) -> LoggerRoot:
        return LoggerRoot.from_loggers(self.loggers)

    def _register(self, root: LoggerRoot) -> list[Logger]:
        built = root.build()
        with self._lock:
            self._loggers.extend(built)
        logger.debug("Loaded %d logger(s) from configuration", len(built))
        return built

    def load_configuration(self, path: str | os.PathLike[str]) -> list[Logger]:
        """Build loggers from a JSON or XML file and register them."""
        return self._register(load_document(path, LoggerRoot))

    async def load_configuration_async(self, path: str | os.PathLike[str]) -> list[Logger]:
        return self._register(await load_document_async(path, LoggerRoot))

    def load_configuration_text(self, data: str) -> list[Logger]:
        return self._register(parse_document(data, LoggerRoot))

    def load_configuration_bytes(self, data: bytes) -> list[Logger]:
        return self._register(parse_document_bytes(data, LoggerRoot))

    def save_configuration(
        self, path: str | os.PathLike[str], fmt: SaveFormat = SaveFormat.JSON
    ) -> None:
        save_document(path, self.to_logger_root(), fmt)

    async def save_configuration_async(
        self, path: str | os.PathLike[str], fmt: SaveFormat = SaveFormat.JSON
    ) -> None:
        await save_document_async(path, self.to_logger_root(), fmt)


_default_factory: LogFactory | None = None
_default_lock = threading.Lock()


def get_default_factory() -> LogFactory:
    global _default_factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = LogFactory()
        return _default_factory
