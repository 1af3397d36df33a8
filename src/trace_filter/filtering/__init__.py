"""
Event filtering for the trace pipeline
"""

from .base import EventFilter, FilterResult
from .config import FilterSpec
from .engine import FilterEngine
from .identity_filter import EventNameFilter, ProcessIdFilter, ThreadIdFilter
from .regex_filter import FieldFilter, RawTextFilter

__all__ = [
    "FilterResult",
    "EventFilter",
    "ProcessIdFilter",
    "ThreadIdFilter",
    "EventNameFilter",
    "FieldFilter",
    "RawTextFilter",
    "FilterSpec",
    "FilterEngine",
]
