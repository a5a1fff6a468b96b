"""Small helpers for lists of strings."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence


def equal(s1: Optional[Sequence[str]], s2: Optional[Sequence[str]]) -> bool:
    """Return True if both have the same length and equal elements in order.

    None counts as an empty sequence.
    """
    return list(s1 or ()) == list(s2 or ())


def filter_strings(
    dest: Optional[List[str]],
    source: Sequence[str],
    keep: Callable[[str], bool],
) -> List[str]:
    """Append each element of ``source`` for which ``keep`` is true to ``dest``.

    Returns ``dest``, or a new list when ``dest`` is None. When ``dest`` is
    ``source`` itself, the list is filtered in place.
    """
    kept = [item for item in source if keep(item)]
    if dest is None:
        return kept
    if dest is source:
        dest[:] = kept
        return dest
    dest.extend(kept)
    return dest


def index(s: Optional[Sequence[str]], v: str) -> int:
    """Return the index of the first ``v`` in ``s``, or -1 if absent."""
    for position, item in enumerate(s or ()):
        if item == v:
            return position
    return -1


def contains(s: Optional[Sequence[str]], v: str) -> bool:
    """Return True if ``v`` is in ``s``."""
    return index(s, v) >= 0


def clone(s: Optional[Sequence[str]]) -> Optional[List[str]]:
    """Return a new list with the elements of ``s``, or None if ``s`` is None."""
    if s is None:
        return None
    return list(s)