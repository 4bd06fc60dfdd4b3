"""Extract metric records from raw log events.

An event is a metric event when all of these hold, checked in order:
  1. EmailMetricsLogEvent is the scalar boolean True
  2. Metric is a structure
  3. Metric.Operation is a non-empty string scalar
  4. Metric.Elapsed is a string scalar holding a non-negative duration
  5. Metric.Parameters, if present, is a structure

Anything else is not a metric event and is dropped without logging.
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import TYPE_CHECKING

from whenever import TimeDelta

from email_metrics.durations import parse_duration
from email_metrics.events import (
    PropertyValue,
    RawEvent,
    Scalar,
    ScalarValue,
    StructureValue,
)
from email_metrics.models import MetricRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger("email_metrics.extractor")

MARKER_FIELD = "EmailMetricsLogEvent"
METRIC_FIELD = "Metric"
OPERATION_FIELD = "Operation"
ELAPSED_FIELD = "Elapsed"
PARAMETERS_FIELD = "Parameters"


class _Absent:
    """Optional field not present; distinct from a failed lookup (None)."""


ABSENT = _Absent()


def extract(raw_events: Iterable[RawEvent]) -> tuple[MetricRecord, ...]:
    """Return the metric records in `raw_events`, sorted by timestamp.

    The sort is stable, so records sharing a timestamp keep input order.
    """
    records = [record for event in raw_events if (record := parse_metric(event)) is not None]
    records.sort(key=attrgetter("timestamp"))
    logger.info("Extracted %d metric records", len(records))
    return tuple(records)


def parse_metric(event: RawEvent) -> MetricRecord | None:
    """Match one event against the metric shape, or return None."""
    if _true_flag(event.properties.get(MARKER_FIELD)) is None:
        return None

    metric = _structure(event.properties.get(METRIC_FIELD))
    if metric is None:
        return None

    fields = _all_of(
        lambda: _string(metric.get(OPERATION_FIELD)),
        lambda: _duration(metric.get(ELAPSED_FIELD)),
        lambda: _parameters(metric.get(PARAMETERS_FIELD)),
    )
    if fields is None:
        return None

    operation, elapsed, parameters = fields
    return MetricRecord(
        timestamp=event.timestamp,
        operation=operation,
        elapsed=elapsed,
        parameters=None if parameters is ABSENT else parameters,
    )


def _all_of(*steps: Callable[[], object | None]) -> tuple[object, ...] | None:
    """Run steps in order, stopping at the first that returns None."""
    results = []
    for step in steps:
        value = step()
        if value is None:
            return None
        results.append(value)
    return tuple(results)


# ---------------------------------------------------------------------------
# Typed lookups: each returns None when the value has the wrong shape
# ---------------------------------------------------------------------------


def _true_flag(value: PropertyValue | None) -> bool | None:
    if isinstance(value, ScalarValue) and value.value is True:
        return True
    return None


def _structure(value: PropertyValue | None) -> StructureValue | None:
    return value if isinstance(value, StructureValue) else None


def _string(value: PropertyValue | None) -> str | None:
    if isinstance(value, ScalarValue) and isinstance(value.value, str) and value.value:
        return value.value
    return None


def _duration(value: PropertyValue | None) -> TimeDelta | None:
    if not (isinstance(value, ScalarValue) and isinstance(value.value, str)):
        return None
    elapsed = parse_duration(value.value)
    if elapsed is None or elapsed < TimeDelta.ZERO:
        return None
    return elapsed


def _parameters(value: PropertyValue | None) -> dict[str, Scalar] | _Absent | None:
    if value is None:
        return ABSENT
    if not isinstance(value, StructureValue):
        return None
    return {
        name: item.value if isinstance(item, ScalarValue) else None
        for name, item in value.as_dict().items()
    }
