"""
Event stream processing for trace runs

This package provides the event sources, the processors that render or
aggregate matched events, and the dispatcher that connects them.
"""

from .dispatcher import (
    EventDispatcher,
    RunCounters,
    RunSummary,
    ShutdownCoordinator,
)
from .frequency import FrequencyTable
from .sinks import (
    MatchedEventProcessor,
    RawEventPrinter,
    StatisticsAggregator,
    TablePrinter,
    create_processor,
)
from .sources import (
    CaptureFileSource,
    EventSource,
    LiveSource,
    MemorySource,
    create_source,
    resolve_provider,
)
from .table import Table, TableState, truncate

__all__ = [
    # Dispatcher
    "EventDispatcher",
    "RunCounters",
    "RunSummary",
    "ShutdownCoordinator",

    # Processors
    "MatchedEventProcessor",
    "RawEventPrinter",
    "TablePrinter",
    "StatisticsAggregator",
    "create_processor",

    # Layout and aggregation
    "Table",
    "TableState",
    "truncate",
    "FrequencyTable",

    # Sources
    "EventSource",
    "MemorySource",
    "CaptureFileSource",
    "LiveSource",
    "create_source",
    "resolve_provider",
]
