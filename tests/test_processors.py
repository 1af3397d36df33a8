"""
Tests for matched event processors
"""

import io

from trace_filter.events import DisplayColumn
from trace_filter.streaming.sinks import (
    RawEventPrinter,
    StatisticsAggregator,
    TablePrinter,
    create_processor,
)


class TestRawEventPrinter:
    def test_uses_precomputed_text(self, make_event):
        stream = io.StringIO()
        printer = RawEventPrinter(stream=stream)

        printer.consume(make_event(), "already rendered")

        assert stream.getvalue() == "already rendered\n"

    def test_renders_when_no_text_given(self, make_event):
        stream = io.StringIO()
        printer = RawEventPrinter(stream=stream)

        printer.consume(make_event(name="X", payload={"A": 1}))

        lines = stream.getvalue().splitlines()
        assert lines[0].startswith("X [PNAME=app PID=100 TID=1")
        assert lines[1] == "  " + "A".ljust(20) + " = 1"


class TestTablePrinter:
    def test_header_printed_at_construction(self):
        stream = io.StringIO()
        TablePrinter([DisplayColumn("Event", 10), DisplayColumn("PID", 5)], stream=stream, max_width=80)

        lines = stream.getvalue().splitlines()
        assert lines[0] == "Event      PID   "
        assert lines[1] == "-" * 17

    def test_row_resolves_fields(self, make_event):
        stream = io.StringIO()
        printer = TablePrinter(
            [DisplayColumn("Event", 10), DisplayColumn("PID", 5), DisplayColumn("FileName", 30)],
            stream=stream,
            max_width=80,
        )

        printer.consume(make_event(name="Read", pid=42, payload={"FileName": "a.txt"}))

        assert stream.getvalue().splitlines()[2] == "Read       42    a.txt"

    def test_absent_field_prints_null(self, make_event):
        stream = io.StringIO()
        printer = TablePrinter([DisplayColumn("Missing", 10)], stream=stream, max_width=80)

        printer.consume(make_event())

        assert stream.getvalue().splitlines()[2] == "<null>"

    def test_more_fields_than_fit(self, make_event):
        stream = io.StringIO()
        columns = [DisplayColumn(f"F{i}", 10) for i in range(5)]
        printer = TablePrinter(columns, stream=stream, max_width=25)

        printer.consume(make_event(payload={f"F{i}": str(i) for i in range(5)}))

        assert [c.name for c in printer.table.columns] == ["F0", "F1"]
        assert stream.getvalue().splitlines()[2] == "0          1"

    def test_raw_text_is_ignored(self, make_event):
        stream = io.StringIO()
        printer = TablePrinter([DisplayColumn("Event", 10)], stream=stream, max_width=80)

        printer.consume(make_event(name="E"), "raw text")

        assert stream.getvalue().splitlines()[2] == "E"


class TestStatisticsAggregator:
    def test_counts_by_name_and_process(self, make_event):
        aggregator = StatisticsAggregator(stream=io.StringIO())
        aggregator.consume(make_event(name="A", process_name="p1"))
        aggregator.consume(make_event(name="A", process_name="p2"))
        aggregator.consume(make_event(name="B", process_name="p1"), "raw text")

        assert aggregator.count_by_event_name.counts == {"A": 2, "B": 1}
        assert aggregator.count_by_process.counts == {"p1": 2, "p2": 1}

    def test_no_output_before_finalize(self, make_event):
        stream = io.StringIO()
        aggregator = StatisticsAggregator(stream=stream)
        aggregator.consume(make_event())

        assert stream.getvalue() == ""

    def test_finalize_is_idempotent(self, make_event):
        stream = io.StringIO()
        aggregator = StatisticsAggregator(stream=stream)
        aggregator.consume(make_event(name="A", process_name="p1"))

        aggregator.finalize()
        aggregator.finalize()

        output = stream.getvalue()
        assert output.count("Events by name") == 1
        assert output.count("Events by process") == 1
        assert output.index("Events by name") < output.index("Events by process")
        assert aggregator.finalized is True


class TestCreateProcessor:
    def test_stats_wins(self):
        processor = create_processor(
            stats_only=True,
            display_columns=[DisplayColumn("Event", 10)],
            stream=io.StringIO(),
        )
        assert isinstance(processor, StatisticsAggregator)

    def test_display_fields_select_table(self):
        processor = create_processor(
            display_columns=[DisplayColumn("Event", 10)],
            stream=io.StringIO(),
            max_width=80,
        )
        assert isinstance(processor, TablePrinter)

    def test_default_is_raw_printer(self):
        assert isinstance(create_processor(stream=io.StringIO()), RawEventPrinter)
