"""File configurations: move or archive files chosen by invoke policies."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..errors import InvalidArgumentError
from .policies import InvokePolicy

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


def add_files_to_zip(
    zip_path: PathLike,
    files: Sequence[PathLike],
    delete_files: bool,
    handled: list[str] | None = None,
) -> None:
    """Add files to a ZIP archive, creating it when absent and appending otherwise.

    Entries are stored under each file's base name. Originals are deleted
    after being added when ``delete_files`` is set. Each file is appended to
    ``handled`` once it is fully processed, so a failure part way through
    leaves the completed files recorded.
    """
    if not files:
        return

    with zipfile.ZipFile(zip_path, mode="a", compression=zipfile.ZIP_DEFLATED) as archive:
        for file in files:
            path = Path(file)
            archive.write(path, arcname=path.name)
            if delete_files:
                path.unlink()
            if handled is not None:
                handled.append(os.fspath(file))


class FileConfiguration(ABC):
    """A rotation action gated by an ordered list of invoke policies.

    A file qualifies when any policy says it should be invoked. Nothing
    happens when the configuration is disabled, has no policies, or no file
    qualifies. I/O failures follow the ``throw_errors`` convention.
    """

    def __init__(
        self,
        invoke_policies: Iterable[InvokePolicy] | None = None,
        *,
        enabled: bool = True,
        throw_errors: bool = False,
    ) -> None:
        self.enabled = enabled
        self.throw_errors = throw_errors
        self.invoke_policies: list[InvokePolicy] = list(invoke_policies or ())

    def add_invoke_policy(self, policy: InvokePolicy) -> None:
        if policy is None:
            raise InvalidArgumentError("policy must not be None")
        self.invoke_policies.append(policy)

    def matching_files(self, files: Iterable[PathLike]) -> list[str]:
        """Files for which at least one policy invokes, in first-seen order."""
        candidates = [os.fspath(f) for f in files]
        matched: dict[str, None] = {}
        for policy in self.invoke_policies:
            for file in candidates:
                if file not in matched and policy.should_invoke(file):
                    matched[file] = None
        return list(matched)

    @property
    @abstractmethod
    def ready(self) -> bool:
        """True when the action has a usable target."""

    @abstractmethod
    def apply(self, files: list[str], handled: list[str]) -> None:
        """Perform the action on qualifying files.

        Appends each file to ``handled`` as soon as the action on it completes.
        """

    def invoke(self, files: Iterable[PathLike]) -> list[str]:
        """Evaluate policies over ``files`` and act on the qualifying ones.

        Returns the files that were acted upon. When a failure is suppressed
        part way through, the files handled before it are still returned.
        """
        if not self.enabled or not self.ready or not self.invoke_policies:
            return []

        handled: list[str] = []
        try:
            qualifying = self.matching_files(files)
            if qualifying:
                self.apply(qualifying, handled)
        except OSError as exc:
            if self.throw_errors:
                raise
            logger.debug(
                "%s failed after %d file(s): %s", type(self).__name__, len(handled), exc
            )
        return handled

    async def invoke_async(self, files: Iterable[PathLike]) -> list[str]:
        return await asyncio.to_thread(self.invoke, list(files))


class FileMover(FileConfiguration):
    """Move qualifying files into ``directory``.

    The directory is created when missing. A file whose name already exists
    in the target raises ``FileExistsError``.
    """

    def __init__(self, directory: PathLike | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.directory = directory

    @property
    def directory(self) -> str | None:
        return self._directory

    @directory.setter
    def directory(self, value: PathLike | None) -> None:
        if value is None:
            self._directory = None
            return
        directory = os.fspath(value)
        separators = tuple(s for s in (os.sep, os.altsep, "\\") if s)
        if not directory.endswith(separators):
            # Keep the separator style the caller used.
            windows_style = "\\" in directory and "/" not in directory
            directory += "\\" if windows_style else os.sep
        self._directory = directory

    @property
    def ready(self) -> bool:
        return bool(self._directory)

    def apply(self, files: list[str], handled: list[str]) -> None:
        os.makedirs(self._directory, exist_ok=True)
        for file in files:
            target = self._directory + os.path.basename(file)
            if os.path.exists(target):
                raise FileExistsError(f"Target already exists: {target}")
            shutil.move(file, target)
            handled.append(file)


class FileArchiver(FileConfiguration):
    """Zip qualifying files into ``zip_path`` and delete the originals."""

    def __init__(self, zip_path: PathLike | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._zip_path: str | None = None
        if zip_path is not None:
            self.zip_path = zip_path

    @property
    def zip_path(self) -> str | None:
        return self._zip_path

    @zip_path.setter
    def zip_path(self, value: PathLike) -> None:
        if value is None:
            raise InvalidArgumentError("zip_path must not be None")
        self._zip_path = os.fspath(value)

    @property
    def ready(self) -> bool:
        return bool(self._zip_path)

    def apply(self, files: list[str], handled: list[str]) -> None:
        add_files_to_zip(self._zip_path, files, delete_files=True, handled=handled)
