"""
Trace event model and field access helpers

Events are read-only records handed to the pipeline by a source. Fields are
addressed either by one of the reserved names (``Event``, ``PID``, ``TID``,
``Time``) or by a payload field name.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Tuple

from .exceptions import FieldUnavailableError

NULL_VALUE = "<null>"

DEFAULT_FIELD_WIDTH = 30

# Reserved field name -> default display width
RESERVED_FIELD_WIDTHS: Dict[str, int] = {
    "Event": 20,
    "PID": 5,
    "TID": 5,
    "Time": 15,
}

FieldAccessor = Callable[["Event"], str]


@dataclass(frozen=True)
class Event:
    """A single structured trace event"""

    name: str
    process_id: int
    thread_id: int
    timestamp: datetime
    task_name: str = ""
    process_name: str = ""
    payload_names: Tuple[str, ...] = ()
    # May be shorter than payload_names when trailing values are unreadable
    payload_values: Tuple[Any, ...] = ()
    provider: Optional[str] = None
    keywords: Tuple[str, ...] = field(default=())

    def payload_value(self, index: int) -> Any:
        """Return the payload value at ``index``"""
        if index >= len(self.payload_names):
            raise IndexError(f"payload index {index} out of range")
        if index >= len(self.payload_values):
            raise FieldUnavailableError(
                f"payload field {self.payload_names[index]!r} is unavailable"
            )
        return self.payload_values[index]

    def payload_by_name(self, name: str) -> Optional[Any]:
        """Return the payload value named ``name``, or None when absent"""
        try:
            index = self.payload_names.index(name)
            return self.payload_value(index)
        except (ValueError, IndexError):
            return None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Event":
        """Build an event from a decoded JSON trace record"""
        payload = record.get("payload") or {}
        timestamp = record.get("timestamp")
        if isinstance(timestamp, str):
            # fromisoformat only accepts a "Z" suffix from Python 3.11
            if timestamp.endswith("Z"):
                timestamp = timestamp[:-1] + "+00:00"
            timestamp = datetime.fromisoformat(timestamp)
        elif timestamp is None:
            timestamp = datetime.now()

        return cls(
            name=str(record["name"]),
            process_id=int(record.get("pid", -1)),
            thread_id=int(record.get("tid", -1)),
            timestamp=timestamp,
            task_name=str(record.get("task", "")),
            process_name=str(record.get("process_name", "")),
            payload_names=tuple(payload.keys()),
            payload_values=tuple(payload.values()),
            provider=record.get("provider"),
            keywords=tuple(record.get("keywords") or ()),
        )


def format_timestamp(timestamp: datetime) -> str:
    return str(timestamp)


def as_raw_string(event: Event) -> str:
    """
    Render the canonical raw text form of an event

    The header line carries the event metadata; each payload field follows
    on its own indented line. Fields whose value cannot be read are left out.
    """
    parts = [
        f"{event.name} [PNAME={event.process_name} PID={event.process_id} "
        f"TID={event.thread_id} TIME={format_timestamp(event.timestamp)}] "
        f"TaskName={event.task_name}"
    ]
    for index, name in enumerate(event.payload_names):
        try:
            value = event.payload_value(index)
        except FieldUnavailableError:
            continue
        parts.append(f"\n  {name:<20} = {value}")
    return "".join(parts)


def expected_field_width(name: str) -> int:
    """Default display width for a field name"""
    return RESERVED_FIELD_WIDTHS.get(name, DEFAULT_FIELD_WIDTH)


def _payload_accessor(name: str) -> FieldAccessor:
    def accessor(event: Event) -> str:
        value = event.payload_by_name(name)
        return NULL_VALUE if value is None else str(value)

    return accessor


_RESERVED_ACCESSORS: Dict[str, FieldAccessor] = {
    "Event": lambda e: e.name,
    "PID": lambda e: str(e.process_id),
    "TID": lambda e: str(e.thread_id),
    "Time": lambda e: format_timestamp(e.timestamp),
}


def field_accessor(name: str) -> FieldAccessor:
    """Return the function that reads field ``name`` as a string"""
    return _RESERVED_ACCESSORS.get(name) or _payload_accessor(name)


def get_field_by_name(event: Event, name: str) -> str:
    return field_accessor(name)(event)


@dataclass(frozen=True)
class DisplayColumn:
    """A field to show in table output, with its requested width"""

    name: str
    width: int

    _WIDTH_PATTERN = re.compile(r"^(.*)\[(\d+)\]$")

    @classmethod
    def parse(cls, spec: str) -> "DisplayColumn":
        """Parse ``name`` or ``name[width]``"""
        match = cls._WIDTH_PATTERN.match(spec)
        if match:
            name, width = match.group(1), int(match.group(2))
        else:
            name, width = spec, expected_field_width(spec)
        if not name:
            raise ValueError(f"empty field name in {spec!r}")
        return cls(name=name, width=width)
