"""CLEF (compact log event format) reader.

Each line is a JSON object. Reserved keys start with '@':
  @t  timestamp (required)     @l  level (default Information)
  @mt message template         @m  rendered message
  @x  exception                @i / @r and others are ignored
User properties are all other keys; a leading '@@' escapes a literal '@'.

JSON objects decode to StructureValue (`$type` becomes the type tag), arrays to
SequenceValue and everything else to ScalarValue.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from whenever import Instant, OffsetDateTime

from email_metrics.events import (
    LogEventProperty,
    PropertyValue,
    RawEvent,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger("email_metrics.clef")

_TYPE_TAG = "$type"


def read_log_file(path: Path) -> list[RawEvent]:
    """Decode every event in a CLEF file.

    Raises:
        OSError: the file is missing or unreadable.
    """
    with path.open(encoding="utf-8", errors="replace") as f:
        events = list(read_events(f))
    logger.info("Read %d events from %s", len(events), path)
    return events


def read_events(lines: Iterable[str]) -> Iterator[RawEvent]:
    """Decode CLEF lines, skipping blank and undecodable ones."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        event = decode_line(line)
        if event is None:
            logger.warning("Skipping undecodable CLEF line %d", line_number)
            continue
        yield event


def decode_line(line: str) -> RawEvent | None:
    """Decode a single CLEF line, or return None if it is not a valid event."""
    try:
        data = json.loads(line)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None

    timestamp = _parse_timestamp(data.get("@t"))
    if timestamp is None:
        return None

    properties: dict[str, PropertyValue] = {}
    for key, value in data.items():
        if key.startswith("@@"):
            properties[key[1:]] = to_property_value(value)
        elif not key.startswith("@"):
            properties[key] = to_property_value(value)

    return RawEvent(
        timestamp=timestamp,
        properties=properties,
        level=_optional_str(data.get("@l")) or "Information",
        message_template=_optional_str(data.get("@mt")),
        message=_optional_str(data.get("@m")),
        exception=_optional_str(data.get("@x")),
    )


def to_property_value(value: Any) -> PropertyValue:
    """Convert a decoded JSON value into a typed property value."""
    if isinstance(value, dict):
        tag = value.get(_TYPE_TAG)
        return StructureValue(
            properties=tuple(
                LogEventProperty(name, to_property_value(v))
                for name, v in value.items()
                if name != _TYPE_TAG
            ),
            type_tag=tag if isinstance(tag, str) else None,
        )
    if isinstance(value, list):
        return SequenceValue(elements=tuple(to_property_value(v) for v in value))
    return ScalarValue(value)


def _parse_timestamp(raw: Any) -> OffsetDateTime | None:
    if not isinstance(raw, str):
        return None
    try:
        return OffsetDateTime.parse_iso(raw)
    except ValueError:
        pass
    # Some writers emit UTC with a trailing 'Z'
    try:
        return Instant.parse_iso(raw).to_fixed_offset()
    except ValueError:
        return None


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None
