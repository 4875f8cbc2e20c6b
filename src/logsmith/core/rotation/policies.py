"""Invoke policies: predicates deciding whether a file should be rotated."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta

from ..errors import InvalidArgumentError

Clock = Callable[[], datetime]


def file_creation_time(path: str | os.PathLike[str]) -> datetime:
    """Best-effort creation time in local time.

    Uses ``st_birthtime`` where the platform records it and falls back to
    ``st_ctime`` elsewhere.
    """
    st = os.stat(path)
    return datetime.fromtimestamp(getattr(st, "st_birthtime", st.st_ctime))


def elapsed_components(elapsed: timedelta) -> tuple[int, int, int, int]:
    """Split a duration into (days, hours, minutes, seconds) components.

    Hours, minutes and seconds are the remainders within the day, hour and
    minute respectively, not totals.
    """
    secs = elapsed.seconds
    return elapsed.days, secs // 3600, (secs // 60) % 60, secs % 60


class InvokePolicy(ABC):
    """Pure predicate over a file path."""

    @abstractmethod
    def should_invoke(self, file_path: str | os.PathLike[str]) -> bool:
        """Return True when a rotation action should apply to the file."""


class FileAgePolicy(InvokePolicy):
    """Invoke when a file's age reaches every configured threshold.

    Thresholds of 0 or less are unset. Each configured unit is compared
    against the matching component of the elapsed time (see
    ``elapsed_components``) and the comparisons are ANDed. A file that is
    1 day 2 hours old therefore fails ``max_hours=3`` even though it is 26
    hours old. With no threshold configured the policy never invokes.
    """

    def __init__(
        self,
        max_days: int = -1,
        max_hours: int = -1,
        max_minutes: int = -1,
        max_seconds: int = -1,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        self.max_days = max_days
        self.max_hours = max_hours
        self.max_minutes = max_minutes
        self.max_seconds = max_seconds
        self.clock = clock

    @property
    def max_hours(self) -> int:
        return self._max_hours

    @max_hours.setter
    def max_hours(self, value: int) -> None:
        if value > 23:
            raise InvalidArgumentError("max_hours must be <= 23")
        self._max_hours = value

    @property
    def max_minutes(self) -> int:
        return self._max_minutes

    @max_minutes.setter
    def max_minutes(self, value: int) -> None:
        if value > 59:
            raise InvalidArgumentError("max_minutes must be <= 59")
        self._max_minutes = value

    @property
    def max_seconds(self) -> int:
        return self._max_seconds

    @max_seconds.setter
    def max_seconds(self, value: int) -> None:
        if value > 59:
            raise InvalidArgumentError("max_seconds must be <= 59")
        self._max_seconds = value

    @property
    def configured(self) -> bool:
        return any(v > 0 for v in (self.max_days, self._max_hours, self._max_minutes, self._max_seconds))

    def should_invoke_after(self, elapsed: timedelta) -> bool:
        if not self.configured:
            return False
        thresholds = (self.max_days, self._max_hours, self._max_minutes, self._max_seconds)
        return all(
            actual >= limit
            for actual, limit in zip(elapsed_components(elapsed), thresholds)
            if limit > 0
        )

    def should_invoke(self, file_path: str | os.PathLike[str]) -> bool:
        if not os.path.isfile(file_path) or not self.configured:
            return False
        return self.should_invoke_after(self.clock() - file_creation_time(file_path))

    def __repr__(self) -> str:
        return (
            f"FileAgePolicy(max_days={self.max_days}, max_hours={self._max_hours}, "
            f"max_minutes={self._max_minutes}, max_seconds={self._max_seconds})"
        )


class FileSizePolicy(InvokePolicy):
    """Invoke when a file is at least ``max_file_size`` bytes."""

    def __init__(self, max_file_size: int) -> None:
        self.max_file_size = max_file_size

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    @max_file_size.setter
    def max_file_size(self, value: int) -> None:
        if value is None or value <= 0:
            raise InvalidArgumentError("max_file_size must be > 0")
        self._max_file_size = value

    def should_invoke(self, file_path: str | os.PathLike[str]) -> bool:
        if not os.path.isfile(file_path):
            return False
        return os.path.getsize(file_path) >= self._max_file_size

    def __repr__(self) -> str:
        return f"FileSizePolicy(max_file_size={self._max_file_size})"
