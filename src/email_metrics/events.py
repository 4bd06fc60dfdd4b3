"""Raw log event model decoded from CLEF lines.

Property values form a closed union:
- ScalarValue: null, bool, string or number
- StructureValue: ordered named properties, optional `$type` tag
- SequenceValue: ordered list of values

The extractor only reads these; it never builds or mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from whenever import OffsetDateTime  # noqa: TC002

Scalar = bool | int | float | str | None


@dataclass(frozen=True)
class ScalarValue:
    value: Scalar


@dataclass(frozen=True)
class LogEventProperty:
    name: str
    value: PropertyValue


@dataclass(frozen=True)
class StructureValue:
    properties: tuple[LogEventProperty, ...] = ()
    type_tag: str | None = None

    def get(self, name: str) -> PropertyValue | None:
        """Return the first property value named `name`, or None."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    def as_dict(self) -> dict[str, PropertyValue]:
        result: dict[str, PropertyValue] = {}
        for prop in self.properties:
            result.setdefault(prop.name, prop.value)
        return result


@dataclass(frozen=True)
class SequenceValue:
    elements: tuple[PropertyValue, ...] = ()


PropertyValue = ScalarValue | StructureValue | SequenceValue


@dataclass(frozen=True)
class RawEvent:
    """One decoded log line."""

    timestamp: OffsetDateTime
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    level: str = "Information"
    message_template: str | None = None
    message: str | None = None
    exception: str | None = None
