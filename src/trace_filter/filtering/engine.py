"""
Filtering engine that decides which events reach the processor
"""

from collections import defaultdict
from typing import Any, Dict, List

from ..events import Event
from .base import EventFilter, FilterResult
from .config import FilterSpec
from .identity_filter import EventNameFilter, ProcessIdFilter, ThreadIdFilter
from .regex_filter import RawTextFilter

_FORWARD = FilterResult(should_forward=True, reason="all_filters_passed")
_FIELD_MISS = FilterResult(should_forward=False, reason="field_filters")
_RAW_MISS = FilterResult(should_forward=False, reason="raw_filter")


class FilterEngine:
    """
    Apply a FilterSpec to events one at a time

    Hard filters run first. Then either the raw text filter or the field
    filters decide; field filters are OR-ed and stop at the first match.
    """

    def __init__(self, spec: FilterSpec):
        self.spec = spec
        self.metrics: Dict[str, int] = defaultdict(int)

        self._hard_filters: List[EventFilter] = []
        if spec.process_id is not None:
            self._hard_filters.append(ProcessIdFilter(spec.process_id))
        if spec.thread_id is not None:
            self._hard_filters.append(ThreadIdFilter(spec.thread_id))
        if spec.event_names:
            self._hard_filters.append(EventNameFilter(spec.event_names))
        self._hard_rejections = [
            FilterResult(should_forward=False, reason=f.reason)
            for f in self._hard_filters
        ]

        self._raw_filter = (
            RawTextFilter(spec.raw_filter) if spec.raw_filter is not None else None
        )
        self._field_filters = spec.field_filters

    def evaluate(self, event: Event) -> FilterResult:
        """Decide whether ``event`` is forwarded"""
        self.metrics["total_evaluated"] += 1
        result = self._evaluate(event)
        if result.should_forward:
            self.metrics["passed_through"] += 1
        else:
            self.metrics[f"dropped_by_{result.reason}"] += 1
        return result

    def _evaluate(self, event: Event) -> FilterResult:
        for hard_filter, rejection in zip(self._hard_filters, self._hard_rejections):
            if not hard_filter.matches(event):
                return rejection

        if self._raw_filter is not None:
            text = self._raw_filter.render(event)
            if self._raw_filter.search(text):
                return FilterResult(
                    should_forward=True, reason="raw_filter", raw_text=text
                )
            return _RAW_MISS

        if self._field_filters:
            for field_filter in self._field_filters:
                if field_filter.matches(event):
                    return FilterResult(
                        should_forward=True,
                        reason=f"field_filter:{field_filter.field_name}",
                    )
            return _FIELD_MISS

        return _FORWARD

    def get_metrics(self) -> Dict[str, Any]:
        """Get filtering metrics"""
        total_evaluated = self.metrics.get("total_evaluated", 0)
        passed_through = self.metrics.get("passed_through", 0)
        return {
            "total_evaluated": total_evaluated,
            "passed_through": passed_through,
            "dropped": {
                key[len("dropped_by_"):]: value
                for key, value in self.metrics.items()
                if key.startswith("dropped_by_")
            },
            "pass_rate": passed_through / max(1, total_evaluated),
        }

    def reset_metrics(self):
        """Reset all metrics"""
        self.metrics.clear()
