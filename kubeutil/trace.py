"""Timing traces made of steps and nested traces, logged when they run long."""

from __future__ import annotations

import contextvars
import json
import logging
import random
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterator, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

Duration = Union[timedelta, int, float]


def _verbose() -> bool:
    """Return True when detailed trace output is wanted (DEBUG enabled)."""
    return logger.isEnabledFor(logging.DEBUG)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


@dataclass
class Field:
    """A key/value pair that adds detail to a trace or a step."""

    key: str
    value: Any

    def __str__(self) -> str:
        return f"{self.key}:{_format_value(self.value)}"


def _as_timedelta(value: Duration) -> timedelta:
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _clock(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def _stamp(moment: datetime) -> str:
    return moment.strftime("%d-%b-%Y %H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def _milliseconds(duration: timedelta) -> int:
    micros = duration // timedelta(microseconds=1)
    return micros // 1000 if micros >= 0 else -((-micros) // 1000)


def _trim(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def _format_duration(duration: timedelta) -> str:
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros, 1000)}ms"
    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    text = f"{_trim(rest, 1_000_000)}s"
    if hours:
        text = f"{hours}h{minutes}m{text}"
    elif minutes:
        text = f"{minutes}m{text}"
    return sign + text


def _fields_text(fields: Sequence[Field]) -> str:
    return ",".join(str(f) for f in fields)


def _summary(msg: str, total: timedelta, start: datetime, fields: Sequence[Field]) -> str:
    parts = [_quote(msg)]
    if fields:
        parts.append(_fields_text(fields))
    parts.append(f"{_milliseconds(total)}ms ({_clock(start)})")
    return " ".join(parts)


@dataclass
class _Step:
    time: datetime
    msg: str
    fields: Sequence[Field] = ()

    def _item_time(self) -> datetime:
        return self.time

    def _write_item(
        self,
        out: List[str],
        formatter: str,
        start_time: datetime,
        step_threshold: Optional[timedelta],
    ) -> None:
        duration = self.time - start_time
        if (
            step_threshold is None
            or not step_threshold
            or duration >= step_threshold
            or _verbose()
        ):
            out.append(f"{formatter}---")
            out.append(_summary(self.msg, duration, self.time, self.fields))


class Trace:
    """Records timed steps and nested traces of one operation.

    A nested trace is not logged by itself; it is logged when the trace it
    belongs to is logged, or on its own when its ancestors stay under their
    thresholds.
    """

    def __init__(self, name: str, *args: Field) -> None:
        self.name = name
        self.fields: List[Field] = list(args)
        self.threshold: Optional[timedelta] = None
        self.start_time = datetime.now()
        self.end_time: Optional[datetime] = None
        self.items: List[Union[_Step, "Trace"]] = []
        self.parent: Optional[Trace] = None

    def __repr__(self) -> str:
        return f"Trace({self.name!r}, items={len(self.items)})"

    def step(self, msg: str, *args: Field) -> None:
        """Record the end of a step with the given message and fields."""
        self.items.append(_Step(datetime.now(), msg, tuple(args)))

    def nest(self, msg: str, *args: Field) -> "Trace":
        """Start and return a trace nested in this one."""
        child = Trace(msg, *args)
        child.parent = self
        self.items.append(child)
        return child

    def log(self) -> None:
        """Mark the trace finished and log it, unless it is nested."""
        self.end_time = datetime.now()
        if self.parent is None:
            self._log_trace()

    def log_if_long(self, threshold: Duration) -> None:
        """Finish the trace and log it only if it took at least ``threshold``.

        ``threshold`` is a timedelta or a number of seconds. Only steps that
        took longer than their share of it are written, unless DEBUG logging
        is enabled.
        """
        self.threshold = _as_timedelta(threshold)
        self.log()

    def total_time(self) -> timedelta:
        """Return the time elapsed since the trace was created."""
        return datetime.now() - self.start_time

    def _item_time(self) -> datetime:
        return self.end_time if self.end_time is not None else self.start_time

    def _within_threshold(self) -> bool:
        if self.end_time is None:
            return False
        return (
            self.threshold is None
            or not self.threshold
            or self.end_time - self.start_time >= self.threshold
        )

    def _step_threshold(self) -> Optional[timedelta]:
        """Return the threshold each step must reach to be written, if any."""
        if self.threshold is None:
            return None
        count = len(self.items) + 1
        remaining = self.threshold
        for item in self.items:
            if isinstance(item, Trace) and item.threshold is not None:
                remaining -= item.threshold
                count -= 1
        floor = self.threshold / 4
        if remaining < floor:
            remaining = floor
            count = len(self.items) + 1
        return remaining / count

    def _write_steps(
        self, out: List[str], formatter: str, step_threshold: Optional[timedelta]
    ) -> None:
        last = self.start_time
        for item in self.items:
            item._write_item(out, formatter, last, step_threshold)
            last = item._item_time()

    def _write_item(
        self,
        out: List[str],
        formatter: str,
        start_time: datetime,
        step_threshold: Optional[timedelta],
    ) -> None:
        if self._within_threshold() or _verbose():
            out.append(f"{formatter}[")
            out.append(_summary(self.name, self.total_time(), self.start_time, self.fields))
            own = self._step_threshold()
            if own is not None:
                step_threshold = own
            self._write_steps(out, formatter + " ", step_threshold)
            out.append("]")
            return
        for item in self.items:
            if isinstance(item, Trace):
                item._write_item(out, formatter, start_time, step_threshold)

    def _log_trace(self) -> None:
        if self._within_threshold():
            assert self.end_time is not None
            number = random.randrange(2**31)
            total = self.end_time - self.start_time
            out = [f"Trace[{number}]: {_quote(self.name)} "]
            if self.fields:
                out.append(_fields_text(self.fields) + " ")
            out.append(
                f"({_stamp(self.start_time)}) (total time: {_milliseconds(total)}ms):"
            )
            self._write_steps(out, f"\nTrace[{number}]: ", self._step_threshold())
            elapsed = _format_duration(total)
            out.append(f"\nTrace[{number}]: [{elapsed}] [{elapsed}] END\n")
            logger.info("".join(out))
            return
        for item in self.items:
            if isinstance(item, Trace):
                item._log_trace()


_current: contextvars.ContextVar[Optional[Trace]] = contextvars.ContextVar(
    "kubeutil_current_trace", default=None
)


def current_trace() -> Optional[Trace]:
    """Return the trace installed by ``use_trace`` in this context, or None."""
    return _current.get()


@contextmanager
def use_trace(trace: Trace) -> Iterator[Trace]:
    """Make ``trace`` the current trace for the duration of the block."""
    token = _current.set(trace)
    try:
        yield trace
    finally:
        _current.reset(token)


def nest_current(msg: str, *args: Field) -> Trace:
    """Nest a new trace in the current one, or start a top-level trace."""
    parent = current_trace()
    if parent is None:
        return Trace(msg, *args)
    return parent.nest(msg, *args)