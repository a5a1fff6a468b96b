"""Helpers for values that may be None."""

from __future__ import annotations

import dataclasses
import types
import typing
from typing import Any, Optional, TypeVar

T = TypeVar("T")

_UNION_TYPES = (typing.Union, getattr(types, "UnionType", typing.Union))


def _string_allows_none(hint: str) -> bool:
    """Return True if the textual annotation ``hint`` admits None."""
    compact = hint.replace(" ", "")
    if compact in ("None", "NoneType"):
        return True
    for prefix in ("Optional[", "typing.Optional["):
        if compact.startswith(prefix):
            return True
    for prefix in ("Union[", "typing.Union["):
        if compact.startswith(prefix) and compact.endswith("]"):
            inner = compact[len(prefix):-1]
            if "None" in inner.split(","):
                return True
    return "None" in compact.split("|")


def _allows_none(hint: Any) -> bool:
    """Return True if the annotation ``hint`` admits None."""
    if isinstance(hint, str):
        return _string_allows_none(hint)
    if hint is None or hint is type(None):
        return True
    if typing.get_origin(hint) in _UNION_TYPES:
        return type(None) in typing.get_args(hint)
    return False


def all_optional_fields_none(obj: Any) -> bool:
    """Return True if every field of the dataclass ``obj`` that may hold None does.

    Fields whose annotation does not admit None are ignored. Passing None
    returns True. Raises TypeError for anything other than a dataclass instance.
    """
    if obj is None:
        return True
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"expected a dataclass instance, got {obj!r}")
    for field in dataclasses.fields(obj):
        if _allows_none(field.type) and getattr(obj, field.name) is not None:
            return False
    return True


def deref(value: Optional[T], default: T) -> T:
    """Return ``value`` unless it is None, in which case return ``default``."""
    return default if value is None else value


def optional_equal(a: Optional[Any], b: Optional[Any]) -> bool:
    """Return True if both are None or both are set and equal."""
    if (a is None) != (b is None):
        return False
    if a is None:
        return True
    return a == b