"""Pytest configuration and fixtures for the email metrics tests."""

import json

import pytest


@pytest.fixture
def clef_lines() -> list[str]:
    """A small CLEF log: metric events for two operations plus noise."""
    return [
        json.dumps(
            {
                "@t": "2024-05-01T09:00:02.0000000+02:00",
                "@mt": "Metric {@Metric}",
                "EmailMetricsLogEvent": True,
                "Metric": {
                    "$type": "Metric",
                    "Operation": "IncomingEmailsBatchProcessed",
                    "Elapsed": "00:00:20",
                    "Parameters": {"a": 1, "b": 2, "c": 3, "d": 4},
                },
            }
        ),
        json.dumps(
            {
                "@t": "2024-05-01T09:00:01.0000000+02:00",
                "@mt": "Metric {@Metric}",
                "EmailMetricsLogEvent": True,
                "Metric": {
                    "Operation": "SingleOutgoingEmailSent",
                    "Elapsed": "00:00:10",
                    "Parameters": {},
                },
            }
        ),
        json.dumps(
            {
                "@t": "2024-05-01T09:00:03.0000000+02:00",
                "@mt": "Metric {@Metric}",
                "EmailMetricsLogEvent": True,
                "Metric": {"Operation": "SingleOutgoingEmailSent", "Elapsed": "00:00:30"},
            }
        ),
        json.dumps(
            {
                "@t": "2024-05-01T09:00:04.0000000+02:00",
                "@mt": "Mailbox {Mailbox} polled",
                "@l": "Debug",
                "Mailbox": "inbox",
            }
        ),
    ]


@pytest.fixture
def clef_file(tmp_path, clef_lines):
    path = tmp_path / "metrics.clef"
    path.write_text("\n".join(clef_lines) + "\n", encoding="utf-8")
    return path
