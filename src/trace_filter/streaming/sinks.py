"""
Processors for matched events

Exactly one processor is active per run. It receives every forwarded event
and owns all event output.
"""

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, TextIO

from ..events import DisplayColumn, Event, as_raw_string, field_accessor
from .frequency import FrequencyTable
from .table import Table


class MatchedEventProcessor(ABC):
    """Base class for matched event processors"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    @abstractmethod
    def consume(self, event: Event, raw_text: Optional[str] = None) -> None:
        """Take one forwarded event, with its raw text if already rendered"""
        pass

    def finalize(self) -> None:
        """Flush any end-of-run output; later calls do nothing"""
        if self._finalized:
            return
        self._finalized = True
        self._finalize()

    def _finalize(self) -> None:
        pass


class RawEventPrinter(MatchedEventProcessor):
    """Print each event in its raw text form"""

    def consume(self, event: Event, raw_text: Optional[str] = None) -> None:
        if raw_text is None:
            raw_text = as_raw_string(event)
        self.stream.write(raw_text + "\n")


class TablePrinter(MatchedEventProcessor):
    """
    Print one table row per event

    The header is written when the printer is built. Columns that do not fit
    the width budget are never printed.
    """

    def __init__(
        self,
        columns: Sequence[DisplayColumn],
        stream: Optional[TextIO] = None,
        max_width: Optional[int] = None,
    ):
        super().__init__(stream)
        self.table = Table(max_width=max_width, stream=self.stream)
        for column in columns:
            self.table.add_column(column.name, column.width)
        self._accessors = [field_accessor(c.name) for c in self.table.columns]
        self.table.print_header()

    def consume(self, event: Event, raw_text: Optional[str] = None) -> None:
        self.table.print_row([accessor(event) for accessor in self._accessors])


class StatisticsAggregator(MatchedEventProcessor):
    """Count events by name and by process, report at the end of the run"""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream)
        self.count_by_event_name = FrequencyTable()
        self.count_by_process = FrequencyTable()

    def consume(self, event: Event, raw_text: Optional[str] = None) -> None:
        self.count_by_event_name.add(event.name)
        self.count_by_process.add(event.process_name)

    def _finalize(self) -> None:
        self.count_by_event_name.print("Events by name", "Event", stream=self.stream)
        self.count_by_process.print("Events by process", "Process", stream=self.stream)


def create_processor(
    stats_only: bool = False,
    display_columns: Optional[List[DisplayColumn]] = None,
    stream: Optional[TextIO] = None,
    max_width: Optional[int] = None,
) -> MatchedEventProcessor:
    """
    Select the run's processor

    Statistics mode wins over table output, which wins over raw printing.
    """
    if stats_only:
        return StatisticsAggregator(stream=stream)
    elif display_columns:
        return TablePrinter(display_columns, stream=stream, max_width=max_width)
    else:
        return RawEventPrinter(stream=stream)
