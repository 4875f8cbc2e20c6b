"""File rotation: invoke policies and the move/archive actions they gate."""

from __future__ import annotations

from .configuration import FileArchiver, FileConfiguration, FileMover, add_files_to_zip
from .policies import (
    FileAgePolicy,
    FileSizePolicy,
    InvokePolicy,
    elapsed_components,
    file_creation_time,
)

__all__ = [
    "FileAgePolicy",
    "FileArchiver",
    "FileConfiguration",
    "FileMover",
    "FileSizePolicy",
    "InvokePolicy",
    "add_files_to_zip",
    "elapsed_components",
    "file_creation_time",
]
