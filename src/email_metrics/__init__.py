"""Email Metrics - per-operation timing statistics from CLEF event logs.

Quick Start:
    from email_metrics.clef import read_log_file
    from email_metrics.extractor import extract
    from email_metrics.report import build_report

    records = extract(read_log_file(Path("metrics.clef")))
    for line in build_report(records):
        print(line)
"""

__version__ = "0.1.0"
