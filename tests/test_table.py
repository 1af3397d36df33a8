"""
Tests for the fixed-width table layout
"""

import io

import pytest

from trace_filter.streaming.table import Table, TableState, truncate


class TestTruncate:
    def test_long_value_gets_ellipsis(self):
        assert truncate("hello world", 8) == "hello..."

    def test_short_value_unchanged(self):
        assert truncate("hi", 8) == "hi"

    def test_value_at_limit_unchanged(self):
        assert truncate("12345678", 8) == "12345678"

    @pytest.mark.xfail(reason="limits below the ellipsis length are undefined", strict=True)
    def test_result_fits_limits_below_ellipsis(self):
        assert len(truncate("hello", 2)) <= 2


def make_table(max_width):
    stream = io.StringIO()
    return Table(max_width=max_width, stream=stream), stream


class TestColumnAdmission:
    def test_width_limited_prefix(self):
        table, stream = make_table(25)

        assert table.add_column("A", 10) is True
        assert table.add_column("B", 10) is True
        assert table.add_column("C", 10) is False

        assert [c.name for c in table.columns] == ["A", "B"]
        assert table.used_width == 22

        table.print_header()
        table.print_row(["a", "b", "c"])
        lines = stream.getvalue().splitlines()
        assert lines[2] == "a" + " " * 9 + " b"

    def test_dropped_column_does_not_affect_later_ones(self):
        table, _ = make_table(25)

        table.add_column("A", 10)
        table.add_column("Wide", 30)
        table.add_column("C", 5)

        assert [c.name for c in table.columns] == ["A", "C"]
        assert table.used_width == 17

    def test_exact_fit_is_admitted(self):
        table, _ = make_table(11)
        assert table.add_column("A", 10) is True

    def test_no_columns_after_header(self):
        table, _ = make_table(80)
        table.add_column("A", 10)
        table.print_header()

        assert table.state == TableState.HEADER_PRINTED
        with pytest.raises(RuntimeError):
            table.add_column("B", 10)


class TestRendering:
    def test_header(self):
        table, stream = make_table(80)
        table.add_column("Event", 8)
        table.add_column("PID", 5)
        table.print_header()

        assert stream.getvalue() == "Event    PID   \n" + "-" * 15 + "\n"

    def test_header_truncates_long_names(self):
        table, stream = make_table(80)
        table.add_column("VeryLongColumnName", 8)
        table.print_header()

        assert stream.getvalue().splitlines()[0] == "VeryL... "

    def test_columns_padded_and_truncated(self):
        table, _ = make_table(80)
        table.add_column("A", 5)
        table.add_column("B", 5)

        row = table.format_row(["abcdefgh", "x"])
        assert row.startswith("ab... x")

    def test_last_column_gets_remaining_budget(self):
        table, _ = make_table(40)
        table.add_column("A", 5)
        table.add_column("B", 5)

        row = table.format_row(["a", "x" * 50])

        # 40 - (6 + 6) characters remain for the last column
        assert row == "a     " + "x" * 25 + "..."

    def test_last_column_is_not_padded(self):
        table, _ = make_table(40)
        table.add_column("A", 5)
        table.add_column("B", 5)

        assert table.format_row(["a", "b"]) == "a     b"

    def test_extra_values_discarded(self):
        table, _ = make_table(40)
        table.add_column("A", 5)

        assert table.format_row(["a", "b", "c"]) == "a"

    def test_print_row_writes_line(self):
        table, stream = make_table(40)
        table.add_column("A", 5)
        table.print_header()
        table.print_row([123])

        assert stream.getvalue().endswith("123\n")
