"""Helpers for qualified names of the form "namespace/name"."""

from __future__ import annotations

import posixpath
from typing import Tuple


def escape_qualified_name(name: str) -> str:
    """Make a qualified name safe for use on disk by replacing "/" with "~"."""
    return name.replace("/", "~")


def unescape_qualified_name(name: str) -> str:
    """Undo ``escape_qualified_name``."""
    return name.replace("~", "/")


def split_qualified_name(name: str) -> Tuple[str, str]:
    """Split a qualified name into (namespace, name).

    A name without "/" has an empty namespace; parts past the second are dropped.
    """
    parts = name.split("/")
    if len(parts) < 2:
        return "", name
    return parts[0], parts[1]


def join_qualified_name(namespace: str, name: str) -> str:
    """Join a namespace and a name with "/", skipping empty parts."""
    joined = "/".join(part for part in (namespace, name) if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def shorten_string(text: str, n: int) -> str:
    """Return at most the first ``n`` characters of ``text``."""
    if len(text) <= n:
        return text
    return text[:n]