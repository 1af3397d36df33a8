"""
Trace Filter

Streaming filter and presentation engine for structured trace events.
"""

__version__ = "0.1.0"

from .config import (
    FormatterType,
    LoggerConfig,
    RunConfig,
    get_default_config,
    set_default_config,
)
from .events import (
    DisplayColumn,
    Event,
    as_raw_string,
    expected_field_width,
    field_accessor,
    get_field_by_name,
)
from .exceptions import ConfigurationError, FieldUnavailableError, TraceFilterError
from .filtering import (
    EventFilter,
    EventNameFilter,
    FieldFilter,
    FilterEngine,
    FilterResult,
    FilterSpec,
    ProcessIdFilter,
    RawTextFilter,
    ThreadIdFilter,
)
from .formatter import PlainTextFormatter, StructuredFormatter
from .logger import get_logger, log_with_context
from .streaming import (
    CaptureFileSource,
    EventDispatcher,
    EventSource,
    FrequencyTable,
    LiveSource,
    MatchedEventProcessor,
    MemorySource,
    RawEventPrinter,
    RunCounters,
    RunSummary,
    ShutdownCoordinator,
    StatisticsAggregator,
    Table,
    TablePrinter,
    create_processor,
    create_source,
    truncate,
)

__all__ = [
    # Configuration
    "LoggerConfig",
    "RunConfig",
    "FormatterType",
    "get_default_config",
    "set_default_config",
    # Events
    "Event",
    "DisplayColumn",
    "as_raw_string",
    "expected_field_width",
    "field_accessor",
    "get_field_by_name",
    # Errors
    "TraceFilterError",
    "ConfigurationError",
    "FieldUnavailableError",
    # Filtering
    "EventFilter",
    "FilterResult",
    "FilterSpec",
    "FilterEngine",
    "ProcessIdFilter",
    "ThreadIdFilter",
    "EventNameFilter",
    "FieldFilter",
    "RawTextFilter",
    # Logging
    "get_logger",
    "log_with_context",
    "StructuredFormatter",
    "PlainTextFormatter",
    # Streaming
    "EventDispatcher",
    "RunCounters",
    "RunSummary",
    "ShutdownCoordinator",
    "MatchedEventProcessor",
    "RawEventPrinter",
    "TablePrinter",
    "StatisticsAggregator",
    "create_processor",
    "Table",
    "truncate",
    "FrequencyTable",
    "EventSource",
    "MemorySource",
    "CaptureFileSource",
    "LiveSource",
    "create_source",
]
