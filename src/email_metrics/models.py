"""Metric record and aggregate models.

Date/Time: timestamps and durations use the `whenever` library
(OffsetDateTime for ordering, TimeDelta for elapsed times).
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from whenever import OffsetDateTime, TimeDelta

from email_metrics.events import Scalar


class Operation(StrEnum):
    """Closed set of operations reported by the email pipeline."""

    SINGLE_OUTGOING_EMAIL_SENT = "SingleOutgoingEmailSent"
    SINGLE_INCOMING_EMAIL_READ = "SingleIncomingEmailRead"
    SINGLE_INCOMING_EMAIL_PROCESSED = "SingleIncomingEmailProcessed"
    INCOMING_EMAILS_BATCH_PROCESSED = "IncomingEmailsBatchProcessed"
    OUTGOING_EMAILS_BATCH_SENT = "OutgoingEmailsBatchSent"


# Batch operations first, then single-email operations
REPORT_ORDER: tuple[Operation, ...] = (
    Operation.INCOMING_EMAILS_BATCH_PROCESSED,
    Operation.OUTGOING_EMAILS_BATCH_SENT,
    Operation.SINGLE_INCOMING_EMAIL_PROCESSED,
    Operation.SINGLE_INCOMING_EMAIL_READ,
    Operation.SINGLE_OUTGOING_EMAIL_SENT,
)


class MetricRecord(BaseModel):
    """A validated metric event.

    `parameters` is None when the event carried no Parameters field and an
    empty dict when the field was present but empty. Only its size is used.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: OffsetDateTime
    operation: str = Field(min_length=1)
    elapsed: TimeDelta
    parameters: dict[str, Scalar] | None = None


class AggregateResult(BaseModel):
    """Elapsed-time statistics for one operation."""

    model_config = ConfigDict(frozen=True)

    average: TimeDelta
    standard_deviation: TimeDelta
    max: TimeDelta
    min: TimeDelta
    count: int = Field(ge=1)
    normalized: bool = Field(
        default=False,
        description="At least one sample was divided by its parameter count",
    )
