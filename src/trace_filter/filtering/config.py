"""
Immutable filter specification for a run
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Pattern, Tuple

from ..exceptions import ConfigurationError
from .regex_filter import FieldFilter


@dataclass(frozen=True)
class FilterSpec:
    """What a run forwards: hard filters plus one text-matching mode"""

    process_id: Optional[int] = None
    thread_id: Optional[int] = None
    event_names: Optional[FrozenSet[str]] = None
    raw_filter: Optional[Pattern[str]] = None
    field_filters: Tuple[FieldFilter, ...] = ()

    def __post_init__(self):
        if self.raw_filter is not None and self.field_filters:
            raise ConfigurationError(
                "A raw filter cannot be combined with field filters"
            )
