import os
import re
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .events import DisplayColumn
from .exceptions import ConfigurationError
from .filtering import FieldFilter, FilterSpec

FormatterType = Literal["json", "plain"]


@dataclass
class LoggerConfig:
    """Configuration for diagnostic logging"""

    log_level: str = "WARNING"
    include_timestamp: bool = True
    formatter_type: FormatterType = "plain"

    @classmethod
    def _parse_bool_env(cls, key: str, default: str = "false") -> bool:
        """Parse boolean from environment variable"""
        return os.getenv(key, default).lower() == "true"

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Create configuration from environment variables"""
        formatter_type = os.getenv("TRACE_FILTER_LOG_FORMATTER", "plain").lower()
        if formatter_type not in ["json", "plain"]:
            formatter_type = "plain"

        return cls(
            log_level=os.getenv("TRACE_FILTER_LOG_LEVEL", "WARNING"),
            include_timestamp=cls._parse_bool_env("TRACE_FILTER_LOG_TIMESTAMP", "true"),
            formatter_type=formatter_type,
        )


_default_config: Optional[LoggerConfig] = None


def get_default_config() -> LoggerConfig:
    """Get the default configuration instance"""
    global _default_config
    if _default_config is None:
        _default_config = LoggerConfig.from_env()
    return _default_config


def set_default_config(config: LoggerConfig) -> None:
    """Set the default configuration instance"""
    global _default_config
    _default_config = config


@dataclass
class RunConfig:
    """
    Options for a single trace run

    Built once from the command line before any source is opened. Call
    ``validate()`` before use; it rejects combinations that cannot run.
    """

    process_id: Optional[int] = None
    thread_id: Optional[int] = None
    events: List[str] = field(default_factory=list)
    raw_filter: Optional[str] = None
    field_filters: List[str] = field(default_factory=list)
    display_fields: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    stats_only: bool = False

    # Source selection
    capture_file: Optional[str] = None
    live_file: Optional[str] = None
    from_beginning: bool = False
    providers: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    @property
    def is_file_session(self) -> bool:
        return self.capture_file is not None

    def validate(self) -> None:
        """Raise ConfigurationError if this run cannot start"""
        if self.raw_filter is not None and self.field_filters:
            raise ConfigurationError(
                "A raw filter cannot be combined with field filters"
            )
        if self.capture_file is not None and self.live_file is not None:
            raise ConfigurationError("Specify either a capture file or a live source")

        if self.is_file_session:
            if self.providers or self.keywords:
                raise ConfigurationError(
                    "Specifying keywords and/or providers is not supported "
                    "when parsing capture files"
                )
        elif not self.providers and not self.keywords:
            raise ConfigurationError("No events to collect")

        if self.live_file is None and not self.is_file_session:
            raise ConfigurationError("No live source file given")

        if self.duration_seconds < 0:
            raise ConfigurationError("Duration must not be negative")

        # Surfaces bad regexes and display fields before the run starts
        self.filter_spec()
        self.display_columns()

    def filter_spec(self) -> FilterSpec:
        """Build the immutable filter specification for this run"""
        try:
            raw_filter = re.compile(self.raw_filter) if self.raw_filter is not None else None
            field_filters = tuple(FieldFilter.parse(f) for f in self.field_filters)
        except (re.error, ValueError) as e:
            raise ConfigurationError(f"Invalid filter: {e}") from e

        return FilterSpec(
            process_id=self.process_id,
            thread_id=self.thread_id,
            event_names=frozenset(self.events) if self.events else None,
            raw_filter=raw_filter,
            field_filters=field_filters,
        )

    def display_columns(self) -> List[DisplayColumn]:
        try:
            return [DisplayColumn.parse(f) for f in self.display_fields]
        except ValueError as e:
            raise ConfigurationError(f"Invalid display field: {e}") from e
