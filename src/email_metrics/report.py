"""Human-readable summary lines.

Format:
  <operation> Average[ (divided by count)]: <avg> ± <sd>. Max: <max>. Min: <min>. Total count: <n>

The "(divided by count)" label follows the aggregate itself, so batch and
single operations share one formatting path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from email_metrics.aggregator import aggregate_all
from email_metrics.durations import format_duration
from email_metrics.models import REPORT_ORDER

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from email_metrics.models import AggregateResult, MetricRecord

NORMALIZED_LABEL = " (divided by count)"


def format_summary(operation: str, result: AggregateResult) -> str:
    label = NORMALIZED_LABEL if result.normalized else ""
    return (
        f"{operation} Average{label}: {format_duration(result.average)}"
        f" ± {format_duration(result.standard_deviation)}."
        f" Max: {format_duration(result.max)}."
        f" Min: {format_duration(result.min)}."
        f" Total count: {result.count}"
    )


def build_report(
    records: Sequence[MetricRecord], operations: Iterable[str] = REPORT_ORDER
) -> list[str]:
    """One summary line per operation with data, in the given order."""
    return [
        format_summary(operation, result)
        for operation, result in aggregate_all(records, operations).items()
    ]
