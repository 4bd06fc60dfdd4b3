"""Elapsed-time statistics per operation.

Each matching record contributes one sample in seconds. Records with a
non-empty Parameters mapping report the elapsed time of a whole batch, so
their sample is divided by the number of parameters to get a per-item cost.
"""

from __future__ import annotations

import statistics
from typing import TYPE_CHECKING

from whenever import TimeDelta

from email_metrics.models import AggregateResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from email_metrics.models import MetricRecord


def sample_seconds(record: MetricRecord) -> tuple[float, bool]:
    """Return the record's sample and whether it was divided by its count."""
    seconds = record.elapsed.total("seconds")
    if record.parameters:
        return seconds / len(record.parameters), True
    return seconds, False


def aggregate(records: Iterable[MetricRecord], operation: str) -> AggregateResult | None:
    """Compute mean, population std deviation, max and min for one operation.

    Returns None when no record matches; callers skip reporting in that case.
    """
    samples = [sample_seconds(r) for r in records if r.operation == operation]
    if not samples:
        return None

    values = [value for value, _ in samples]

    return AggregateResult(
        average=TimeDelta(seconds=statistics.mean(values)),
        standard_deviation=TimeDelta(seconds=statistics.pstdev(values)),
        max=TimeDelta(seconds=max(values)),
        min=TimeDelta(seconds=min(values)),
        count=len(values),
        normalized=any(divided for _, divided in samples),
    )


def aggregate_all(
    records: Sequence[MetricRecord], operations: Iterable[str]
) -> dict[str, AggregateResult]:
    """Aggregate each operation in order, omitting those with no data."""
    results: dict[str, AggregateResult] = {}
    for operation in operations:
        result = aggregate(records, operation)
        if result is not None:
            results[str(operation)] = result
    return results
