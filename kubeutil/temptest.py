"""In-memory stand-ins for temporary directories and files, for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Union

from kubeutil.temp import Directory


@dataclass
class FakeFile:
    """A writable file that keeps what was written in ``buffer``."""

    buffer: bytearray = field(default_factory=bytearray)
    closed: bool = False

    def write(self, data: Union[bytes, str]) -> int:
        """Append ``data``; raises ValueError once the file is closed."""
        if self.closed:
            raise ValueError("can't write to closed FakeFile")
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.buffer.extend(data)
        return len(data)

    def close(self) -> None:
        """Mark the file closed; raises ValueError if it already was."""
        if self.closed:
            raise ValueError("FakeFile was closed multiple times")
        self.closed = True

    def __enter__(self) -> "FakeFile":
        return self

    def __exit__(self, *exc_info) -> None:
        if not self.closed:
            self.close()


@dataclass
class FakeDir(Directory):
    """A Directory whose files live in memory in ``files``."""

    files: Dict[str, FakeFile] = field(default_factory=dict)
    deleted: bool = False

    def new_file(self, name: str) -> FakeFile:
        """Create a new FakeFile named ``name``.

        Raises FileNotFoundError if the directory was deleted and
        FileExistsError if the name is taken.
        """
        if self.deleted:
            raise FileNotFoundError("can't create file in deleted FakeDir")
        if name in self.files:
            raise FileExistsError(f'FakeDir already has file named "{name}"')
        created = FakeFile()
        self.files[name] = created
        return created

    def delete(self) -> None:
        """Record the directory as deleted; raises FileNotFoundError the second time."""
        if self.deleted:
            raise FileNotFoundError("failed to re-delete FakeDir")
        self.deleted = True