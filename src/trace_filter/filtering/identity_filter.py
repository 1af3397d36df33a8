"""
Hard filters on event identity: process, thread and event name
"""

from typing import FrozenSet

from ..events import Event
from .base import EventFilter


class ProcessIdFilter(EventFilter):
    """Accept events from a single process"""

    reason = "process_id"

    def __init__(self, process_id: int):
        self.process_id = process_id

    def matches(self, event: Event) -> bool:
        return event.process_id == self.process_id


class ThreadIdFilter(EventFilter):
    """Accept events from a single thread"""

    reason = "thread_id"

    def __init__(self, thread_id: int):
        self.thread_id = thread_id

    def matches(self, event: Event) -> bool:
        return event.thread_id == self.thread_id


class EventNameFilter(EventFilter):
    """Accept events whose name is in an allow-list"""

    reason = "event_name"

    def __init__(self, names: FrozenSet[str]):
        self.names = frozenset(names)

    def matches(self, event: Event) -> bool:
        return event.name in self.names
