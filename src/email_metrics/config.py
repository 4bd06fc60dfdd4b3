"""Configuration for the metrics report.

Values come from environment variables prefixed with EMAIL_METRICS_, e.g.
EMAIL_METRICS_LOG_FILE=/var/log/mail/metrics.clef
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from email_metrics.models import REPORT_ORDER, Operation


class ReportSettings(BaseSettings):
    """Main configuration for the metrics report."""

    log_file: Path = Field(default=Path("metrics.clef"), description="CLEF log file to read")
    operations: list[Operation] = Field(
        default_factory=lambda: list(REPORT_ORDER),
        description="Operations to report, in output order",
    )
    log_level: str = Field(default="WARNING", description="Python logging level")

    model_config = {"env_prefix": "EMAIL_METRICS_"}
