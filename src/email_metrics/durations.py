"""Duration text parsing and rendering.

Accepted forms (surrounding whitespace allowed, optional leading '-'):
  d                         whole days
  [d.]hh:mm[:ss[.fffffff]]  clock time with optional days
  d:hh:mm:ss[.fffffff]      days separated by a colon

Rendering uses [-][d.]hh:mm:ss[.fffffff] with 100ns ticks.
"""

from __future__ import annotations

import re

from whenever import TimeDelta

_DAYS_ONLY_RE = re.compile(r"(?P<sign>-)?(?P<days>\d+)", re.ASCII)

_CLOCK_RE = re.compile(
    r"""
    (?P<sign>-)?
    (?:(?P<days>\d+)\.)?
    (?P<hours>\d{1,2}):(?P<minutes>\d{1,2})
    (?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?
    """,
    re.VERBOSE | re.ASCII,
)

_DAYS_COLON_RE = re.compile(
    r"""
    (?P<sign>-)?
    (?P<days>\d+):
    (?P<hours>\d{1,2}):(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})
    (?:\.(?P<fraction>\d{1,7}))?
    """,
    re.VERBOSE | re.ASCII,
)

_HOUR = TimeDelta(hours=1)
_MINUTE = TimeDelta(minutes=1)
_SECOND = TimeDelta(seconds=1)
_TICK = TimeDelta(nanoseconds=100)


def parse_duration(text: str) -> TimeDelta | None:
    """Parse a duration string, returning None when it is not valid."""
    s = text.strip()
    if not s:
        return None

    for pattern in (_DAYS_ONLY_RE, _CLOCK_RE, _DAYS_COLON_RE):
        m = pattern.fullmatch(s)
        if m:
            return _build(m)
    return None


def _build(m: re.Match[str]) -> TimeDelta | None:
    parts = m.groupdict()
    days = int(parts["days"] or 0)
    hours = int(parts.get("hours") or 0)
    minutes = int(parts.get("minutes") or 0)
    seconds = int(parts.get("seconds") or 0)
    fraction = parts.get("fraction") or ""

    if hours > 23 or minutes > 59 or seconds > 59:
        return None

    nanos = int(fraction.ljust(9, "0")) if fraction else 0

    try:
        delta = TimeDelta(
            hours=days * 24 + hours,
            minutes=minutes,
            seconds=seconds,
            nanoseconds=nanos,
        )
    except (ValueError, OverflowError):
        return None

    return -delta if parts["sign"] else delta


def format_duration(delta: TimeDelta) -> str:
    """Render a duration as [-][d.]hh:mm:ss[.fffffff]."""
    sign = ""
    if delta < TimeDelta.ZERO:
        sign = "-"
        delta = -delta

    hours, rest = delta // _HOUR, delta % _HOUR
    minutes, rest = rest // _MINUTE, rest % _MINUTE
    seconds, rest = rest // _SECOND, rest % _SECOND
    days, hours = divmod(hours, 24)

    text = f"{sign}{days}." if days else sign
    text += f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    ticks = rest // _TICK
    if ticks:
        text += f".{ticks:07d}"
    return text
