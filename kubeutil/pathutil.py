"""Existence checks and cheap directory listings."""

from __future__ import annotations

import os
from enum import IntEnum
from typing import List


class LinkTreatment(IntEnum):
    """How ``exists`` treats symlinks."""

    CHECK_FOLLOW_SYMLINK = 0
    """Follow the symlink and check that its target exists."""
    CHECK_SYMLINK_ONLY = 1
    """Check only that the symlink itself exists."""


def exists(link_behavior: LinkTreatment, filename: str) -> bool:
    """Return True if ``filename`` exists, treating symlinks as requested.

    Raises ValueError for an unknown link treatment and OSError for errors
    other than the file not existing.
    """
    if link_behavior == LinkTreatment.CHECK_FOLLOW_SYMLINK:
        stat = os.stat
    elif link_behavior == LinkTreatment.CHECK_SYMLINK_ONLY:
        stat = os.lstat
    else:
        raise ValueError("unknown link behavior")
    try:
        stat(filename)
    except FileNotFoundError:
        return False
    return True


def read_dir_no_stat(dirname: str) -> List[str]:
    """Return the names in ``dirname`` (the current directory if empty)."""
    return os.listdir(dirname or ".")