"""Unit tests for metric record extraction."""

from whenever import OffsetDateTime, TimeDelta, hours

from email_metrics.events import RawEvent, ScalarValue, StructureValue
from email_metrics.extractor import extract, parse_metric

from .factories import BASE_TIME, make_event, metric_payload


def _drop(payload, *path):
    """Remove a nested key from a metric payload."""
    target = payload
    for key in path[:-1]:
        target = target[key]
    del target[path[-1]]
    return payload


class TestWellFormed:
    def test_fields_are_copied(self):
        event = make_event(
            metric_payload(
                operation="IncomingEmailsBatchProcessed",
                elapsed="00:01:30.5",
                parameters={"First": "a@example.com", "Second": 2, "Nested": {"x": 1}},
            )
        )
        record = parse_metric(event)
        assert record is not None
        assert record.timestamp == BASE_TIME
        assert record.operation == "IncomingEmailsBatchProcessed"
        assert record.elapsed == TimeDelta(minutes=1, seconds=30, milliseconds=500)
        assert record.parameters == {"First": "a@example.com", "Second": 2, "Nested": None}

    def test_missing_parameters_is_none(self):
        record = parse_metric(make_event(metric_payload()))
        assert record is not None
        assert record.parameters is None

    def test_empty_parameters_is_empty_mapping(self):
        record = parse_metric(make_event(metric_payload(parameters={})))
        assert record is not None
        assert record.parameters == {}

    def test_null_parameter_value(self):
        record = parse_metric(make_event(metric_payload(parameters={"Id": None})))
        assert record is not None
        assert record.parameters == {"Id": None}

    def test_other_properties_are_ignored(self):
        payload = metric_payload()
        payload["SourceContext"] = "Mail.Sender"
        assert parse_metric(make_event(payload)) is not None


class TestDropped:
    def test_missing_marker(self):
        assert parse_metric(make_event(_drop(metric_payload(), "EmailMetricsLogEvent"))) is None

    def test_marker_false(self):
        payload = metric_payload()
        payload["EmailMetricsLogEvent"] = False
        assert parse_metric(make_event(payload)) is None

    def test_marker_not_boolean(self):
        for marker in ("true", 1, {"value": True}):
            payload = metric_payload()
            payload["EmailMetricsLogEvent"] = marker
            assert parse_metric(make_event(payload)) is None

    def test_metric_not_structure(self):
        payload = metric_payload()
        payload["Metric"] = "SingleOutgoingEmailSent 00:00:10"
        assert parse_metric(make_event(payload)) is None

    def test_missing_metric(self):
        assert parse_metric(make_event(_drop(metric_payload(), "Metric"))) is None

    def test_missing_operation(self):
        assert parse_metric(make_event(_drop(metric_payload(), "Metric", "Operation"))) is None

    def test_operation_not_string(self):
        assert parse_metric(make_event(metric_payload(operation=42))) is None

    def test_empty_operation(self):
        assert parse_metric(make_event(metric_payload(operation=""))) is None

    def test_missing_elapsed(self):
        assert parse_metric(make_event(_drop(metric_payload(), "Metric", "Elapsed"))) is None

    def test_elapsed_not_string(self):
        assert parse_metric(make_event(metric_payload(elapsed=10))) is None

    def test_elapsed_unparseable(self):
        assert parse_metric(make_event(metric_payload(elapsed="ten seconds"))) is None

    def test_elapsed_negative(self):
        assert parse_metric(make_event(metric_payload(elapsed="-00:00:10"))) is None

    def test_parameters_not_structure(self):
        for parameters in ("a,b", [1, 2], 3):
            assert parse_metric(make_event(metric_payload(parameters=parameters))) is None

    def test_well_formed_metric_without_marker_is_excluded(self):
        event = RawEvent(
            timestamp=BASE_TIME,
            properties={"Metric": StructureValue()},
        )
        assert extract([event]) == ()

    def test_marker_scalar_with_empty_metric(self):
        event = RawEvent(
            timestamp=BASE_TIME,
            properties={"EmailMetricsLogEvent": ScalarValue(True), "Metric": StructureValue()},
        )
        assert parse_metric(event) is None


class TestExtract:
    def test_sorted_by_timestamp(self):
        late = OffsetDateTime(2024, 5, 1, 9, 0, 5, offset=hours(2))
        early = OffsetDateTime(2024, 5, 1, 9, 0, 1, offset=hours(2))
        records = extract(
            [
                make_event(metric_payload(elapsed="00:00:02"), timestamp=late),
                make_event(metric_payload(elapsed="00:00:01"), timestamp=early),
            ]
        )
        assert [r.elapsed for r in records] == [TimeDelta(seconds=1), TimeDelta(seconds=2)]

    def test_ordering_uses_exact_time_across_offsets(self):
        # 08:00 at +00:00 is later than 09:00 at +02:00
        utc = OffsetDateTime(2024, 5, 1, 8, 0, offset=hours(0))
        cest = OffsetDateTime(2024, 5, 1, 9, 0, offset=hours(2))
        records = extract(
            [
                make_event(metric_payload(operation="Later"), timestamp=utc),
                make_event(metric_payload(operation="Earlier"), timestamp=cest),
            ]
        )
        assert [r.operation for r in records] == ["Earlier", "Later"]

    def test_ties_keep_input_order(self):
        events = [make_event(metric_payload(operation=f"Op{i}")) for i in range(5)]
        assert [r.operation for r in extract(events)] == [f"Op{i}" for i in range(5)]

    def test_duplicates_are_kept(self):
        event = make_event(metric_payload())
        assert len(extract([event, event])) == 2

    def test_malformed_events_are_dropped(self):
        events = [
            make_event(metric_payload()),
            make_event({"Mailbox": "inbox"}),
            make_event(metric_payload(elapsed="soon")),
        ]
        assert len(extract(events)) == 1

    def test_empty_input(self):
        assert extract([]) == ()
