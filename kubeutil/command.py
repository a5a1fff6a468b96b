"""Running external commands and capturing their combined output."""

from __future__ import annotations

import subprocess
from typing import Sequence


class CommandError(Exception):
    """A command finished with a non-zero exit status."""

    def __init__(self, status: int, output: str = "") -> None:
        super().__init__(status, output)
        self.status = status
        self.output = output or ""

    def __str__(self) -> str:
        return f"exit {self.status}"


def run_command(argv: Sequence[str]) -> str:
    """Run ``argv`` and return its stdout and stderr combined.

    Raises CommandError if the command exits with a non-zero status and
    OSError if it cannot be started.
    """
    completed = subprocess.run(
        list(argv),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=False,
    )
    output = completed.stdout.decode("utf-8", errors="replace")
    if completed.returncode != 0:
        raise CommandError(completed.returncode, output)
    return output