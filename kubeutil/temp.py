"""Temporary directories in which new files can be created."""

from __future__ import annotations

import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


class Directory(ABC):
    """A temporary directory in which new files can be created."""

    @abstractmethod
    def new_file(self, name: str) -> BinaryIO:
        """Create a new file; creating the same name twice is an error."""

    @abstractmethod
    def delete(self) -> None:
        """Remove the directory and its content."""

    def __enter__(self) -> "Directory":
        return self

    def __exit__(self, *exc_info) -> None:
        self.delete()


@dataclass
class TempDir(Directory):
    """A temporary directory on disk; ``name`` is its full path."""

    name: str

    def new_file(self, name: str) -> BinaryIO:
        """Create ``name`` in the directory for writing.

        Raises FileExistsError if the file already exists.
        """
        fd = os.open(
            os.path.join(self.name, name),
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_EXCL,
            0o700,
        )
        return os.fdopen(fd, "wb")

    def delete(self) -> None:
        """Remove the directory and all of its content; a missing one is fine."""
        try:
            shutil.rmtree(self.name)
        except FileNotFoundError:
            pass


def create_temp_dir(prefix: str) -> TempDir:
    """Create a new temporary directory whose name starts with ``prefix-``."""
    return TempDir(tempfile.mkdtemp(prefix=f"{prefix}-"))