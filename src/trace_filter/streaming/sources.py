"""
Event sources for the trace pipeline

Sources yield Event records in arrival order. Recorded captures and live
trace files both use JSON lines, one trace record per line.
"""

import asyncio
import json
import re
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncIterator, FrozenSet, Iterable, List, Optional, Tuple

import aiofiles

from ..events import Event
from ..logger import get_logger

_PROVIDER_NAME = re.compile(r"^[A-Za-z][\w.\-]*$")


def resolve_provider(reference: str) -> Optional[str]:
    """
    Normalize a provider reference

    GUIDs map to their canonical form and names to lower case. Returns None
    for references that are neither.
    """
    try:
        return str(uuid.UUID(reference))
    except ValueError:
        pass
    if _PROVIDER_NAME.match(reference):
        return reference.lower()
    return None


class EventSource(ABC):
    """Base class for event sources"""

    _running = True
    _events_lost = 0

    async def start(self) -> None:
        """Open the source before iteration"""
        self._running = True

    def stop(self) -> None:
        """Stop delivering events"""
        self._running = False

    @property
    def events_lost(self) -> int:
        """Events the source dropped before delivery"""
        return self._events_lost

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Event]:
        """Async iterator over events"""
        pass


@dataclass
class MemorySource(EventSource):
    """
    Deliver events from memory (for testing/development)
    """

    events: List[Event]
    events_dropped: int = 0
    delay: float = 0  # Delay between events (to simulate streaming)

    def __post_init__(self):
        self._events_lost = self.events_dropped

    async def __aiter__(self) -> AsyncIterator[Event]:
        for event in self.events:
            if not self._running:
                break
            yield event
            await asyncio.sleep(self.delay)


class JsonLinesSource(EventSource):
    """Shared decoding of JSON trace records"""

    logger = get_logger("streaming.source")

    def _decode(self, line: bytes) -> Optional[Event]:
        line = line.strip()
        if not line:
            return None
        try:
            record = json.loads(line.decode("utf-8"))
            return Event.from_record(record)
        except (UnicodeDecodeError, ValueError, KeyError, TypeError, AttributeError) as e:
            self._events_lost += 1
            self.logger.warning(f"Dropping malformed trace record: {e}")
            return None


@dataclass
class CaptureFileSource(JsonLinesSource):
    """Read a recorded capture from start to end"""

    path: str

    async def __aiter__(self) -> AsyncIterator[Event]:
        # Each line is decoded on its own by _decode
        async with aiofiles.open(self.path, "rb") as f:
            async for line in f:
                if not self._running:
                    break
                event = self._decode(line)
                if event is not None:
                    yield event


@dataclass
class LiveSource(JsonLinesSource):
    """
    Follow a trace file that an external collector keeps appending to

    Only records from enabled providers, or carrying an enabled keyword, are
    delivered. Detects file rotation and restarts from the top of the new
    file.
    """

    path: str
    providers: Iterable[str] = ()
    keywords: Iterable[str] = ()
    from_beginning: bool = False
    poll_interval: float = 0.1  # Seconds between polls

    enabled_providers: FrozenSet[str] = field(init=False, default=frozenset())
    enabled_keywords: FrozenSet[str] = field(init=False, default=frozenset())

    def __post_init__(self):
        resolved = set()
        for reference in self.providers:
            provider = resolve_provider(reference)
            if provider is None:
                self.logger.warning(f"Skipping unknown provider: {reference}")
                continue
            resolved.add(provider)
        self.enabled_providers = frozenset(resolved)
        self.enabled_keywords = frozenset(k.lower() for k in self.keywords)

    def is_enabled(self, event: Event) -> bool:
        if event.provider is not None:
            if resolve_provider(str(event.provider)) in self.enabled_providers:
                return True
        return any(k.lower() in self.enabled_keywords for k in event.keywords)

    async def _read_complete_lines(self, position: int) -> Tuple[List[bytes], int]:
        """Read every newline-terminated line after ``position``"""
        lines = []
        async with aiofiles.open(self.path, "rb") as f:
            await f.seek(position)
            while True:
                line = await f.readline()
                # Partial lines are re-read on the next poll
                if not line.endswith(b"\n"):
                    break
                lines.append(line)
                position += len(line)
        return lines, position

    async def __aiter__(self) -> AsyncIterator[Event]:
        file_path = Path(self.path)
        # A missing file at startup is fatal
        stat = file_path.stat()
        position = 0 if self.from_beginning else stat.st_size
        last_inode = stat.st_ino

        while self._running:
            try:
                stat = file_path.stat()
                if stat.st_ino != last_inode or stat.st_size < position:
                    self.logger.info(f"Trace file rotated: {self.path}")
                    position = 0
                    last_inode = stat.st_ino
                lines, position = await self._read_complete_lines(position)
            except FileNotFoundError:
                # Between rename and re-create during a rotation
                self.logger.debug(f"Trace file missing, waiting: {self.path}")
                await asyncio.sleep(self.poll_interval)
                continue

            for line in lines:
                if not self._running:
                    break
                event = self._decode(line)
                if event is not None and self.is_enabled(event):
                    yield event

            await asyncio.sleep(self.poll_interval)


# Factory function

def create_source(source_type: str, **kwargs) -> EventSource:
    """
    Create a source instance

    Args:
        source_type: Type of source (memory, capture, live)
        **kwargs: Source-specific configuration

    Returns:
        EventSource instance
    """
    if source_type == "memory":
        return MemorySource(**kwargs)
    elif source_type == "capture":
        return CaptureFileSource(**kwargs)
    elif source_type == "live":
        return LiveSource(**kwargs)
    else:
        raise ValueError(f"Unknown source type: {source_type}")
