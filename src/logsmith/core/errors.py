"""Exception types raised by logsmith."""

from __future__ import annotations


class LogsmithError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(LogsmithError, ValueError):
    """A value was rejected at assignment or construction time."""


class LoggerNotFoundError(LogsmithError, KeyError):
    """No logger is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No logger registered under name: {self.name}"


class ConfigurationFormatError(LogsmithError, ValueError):
    """Configuration text is neither JSON nor XML, or does not match the schema."""
