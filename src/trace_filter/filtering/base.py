"""
Base classes for event filtering
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..events import Event


@dataclass
class FilterResult:
    """Outcome of filtering one event"""

    should_forward: bool
    reason: Optional[str] = None
    # Rendered raw text when a raw filter produced it
    raw_text: Optional[str] = None


class EventFilter(ABC):
    """Abstract base class for per-event predicates"""

    # Reported when this filter drops an event
    reason: str = "custom"

    @abstractmethod
    def matches(self, event: Event) -> bool:
        """Return True if the event satisfies this filter"""
        pass
