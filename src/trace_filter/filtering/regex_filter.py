"""
Regular expression filters over rendered text and single fields
"""

import re
from typing import Pattern, Union

from ..events import Event, as_raw_string, field_accessor
from .base import EventFilter


class RawTextFilter(EventFilter):
    """Match a regex against the full raw text form of an event"""

    def __init__(self, pattern: Union[str, Pattern[str]]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def render(self, event: Event) -> str:
        return as_raw_string(event)

    def search(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def matches(self, event: Event) -> bool:
        return self.search(self.render(event))


class FieldFilter(EventFilter):
    """
    Match a regex against one field's string value

    The field may be a reserved name (Event, PID, TID, Time) or a payload
    field; an absent payload field is tested as ``<null>``.
    """

    def __init__(self, field_name: str, pattern: Union[str, Pattern[str]]):
        self.field_name = field_name
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self._accessor = field_accessor(field_name)

    @classmethod
    def parse(cls, spec: str) -> "FieldFilter":
        """Parse ``Field=Regex``"""
        field_name, sep, pattern = spec.partition("=")
        if not sep or not field_name:
            raise ValueError(f"expected Field=Regex, got {spec!r}")
        return cls(field_name, pattern)

    def matches(self, event: Event) -> bool:
        return self.pattern.search(self._accessor(event)) is not None

    def __repr__(self) -> str:
        return f"FieldFilter({self.field_name!r}, {self.pattern.pattern!r})"
