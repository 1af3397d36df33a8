"""
Shared fixtures for trace filter tests
"""

from datetime import datetime

import pytest

from trace_filter.events import Event

TIMESTAMP = datetime(2026, 10, 17, 12, 30, 45)


def build_event(
    name="Test/Event",
    pid=100,
    tid=1,
    payload=None,
    process_name="app",
    task="Task",
    provider=None,
    keywords=(),
):
    payload = payload or {}
    return Event(
        name=name,
        process_id=pid,
        thread_id=tid,
        timestamp=TIMESTAMP,
        task_name=task,
        process_name=process_name,
        payload_names=tuple(payload.keys()),
        payload_values=tuple(payload.values()),
        provider=provider,
        keywords=tuple(keywords),
    )


@pytest.fixture
def make_event():
    return build_event
