"""
Dispatcher that drives a trace run

Pulls events from the source, runs them through the filter engine, hands
matches to the active processor and owns the end-of-run shutdown.
"""

import asyncio
import functools
import signal
import sys
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional, TextIO

from ..events import Event
from ..filtering import FilterEngine
from ..logger import get_logger, log_with_context
from .sinks import MatchedEventProcessor
from .sources import EventSource


@dataclass
class RunCounters:
    """Per-run event counters, only ever incremented"""

    processed: int = 0
    displayed: int = 0
    errors: int = 0


@dataclass
class RunSummary:
    """End-of-run report"""

    end_time: datetime
    duration: timedelta
    processed: int
    displayed: int
    events_lost: int
    shutdown_reason: str
    shutdown_errors: List[str] = field(default_factory=list)

    def render(self) -> str:
        rows = [
            ("Processing end time:", self.end_time),
            ("Processing duration:", self.duration),
            ("Processed events:", self.processed),
            ("Displayed events:", self.displayed),
            ("Events lost:", self.events_lost),
        ]
        lines = [""] + [f"{label:<30} {value}" for label, value in rows]
        if self.shutdown_errors:
            lines.append("Shutdown errors:")
            lines.extend(f"  {error}" for error in self.shutdown_errors)
        return "\n".join(lines) + "\n"


class ShutdownCoordinator:
    """
    Run a shutdown sequence exactly once

    Any number of triggers may race; the first to claim the guard runs the
    sequence and every later call returns False without side effects.
    """

    def __init__(self, sequence: Callable[[str], None]):
        self._sequence = sequence
        self._guard = threading.Lock()
        self.reason: Optional[str] = None

    @property
    def closed(self) -> bool:
        return self._guard.locked()

    def trigger(self, reason: str) -> bool:
        # Never released: a non-blocking acquire is the compare-and-set
        if not self._guard.acquire(blocking=False):
            return False
        self.reason = reason
        self._sequence(reason)
        return True


class EventDispatcher:
    """Single-path event pipeline for one run"""

    def __init__(
        self,
        source: EventSource,
        engine: FilterEngine,
        processor: MatchedEventProcessor,
        stream: Optional[TextIO] = None,
    ):
        self.source = source
        self.engine = engine
        self.processor = processor
        self.stream = stream or sys.stdout
        self.logger = get_logger("streaming.dispatcher")

        self.counters = RunCounters()
        self.summary: Optional[RunSummary] = None
        self._coordinator = ShutdownCoordinator(self._shutdown_sequence)
        self._started = time.monotonic()
        self._pump_task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def closed(self) -> bool:
        return self._coordinator.closed

    def process_event(self, event: Event) -> None:
        """Filter one event and forward it to the processor on a match"""
        if self.closed:
            return

        self.counters.processed += 1
        try:
            result = self.engine.evaluate(event)
            if not result.should_forward:
                return
            self.processor.consume(event, result.raw_text)
            self.counters.displayed += 1
        except Exception as e:
            self.counters.errors += 1
            log_with_context(
                self.logger,
                "error",
                f"Failed to handle event: {e}",
                event=event.name,
                pid=event.process_id,
                tid=event.thread_id,
            )

    async def run(
        self,
        duration_seconds: float = 0,
        handle_signals: bool = True,
    ) -> RunSummary:
        """Process the source until it ends, the duration expires or a signal arrives"""
        self._loop = asyncio.get_running_loop()
        self._started = time.monotonic()
        self.stream.write(f"Processing start time: {datetime.now()}\n")

        await self.source.start()
        self._pump_task = asyncio.ensure_future(self._pump())

        timer = None
        if duration_seconds > 0:
            timer = self._loop.call_later(duration_seconds, self.shutdown, "timeout")
        restore_signals = self._install_signal_handlers() if handle_signals else []

        try:
            await asyncio.wait([self._pump_task])
        finally:
            if timer is not None:
                timer.cancel()
            for restore in restore_signals:
                restore()

        error = None if self._pump_task.cancelled() else self._pump_task.exception()
        if error is not None:
            self.logger.error(f"Event source failed: {error}")
            self.shutdown("source_error")
            raise error

        self.shutdown("end_of_stream")
        return self.summary

    async def _pump(self) -> None:
        async for event in self.source:
            if self.closed:
                break
            self.process_event(event)

    def _install_signal_handlers(self) -> List[Callable[[], None]]:
        """Route SIGINT/SIGTERM to shutdown; returns the callables that undo it"""
        restore: List[Callable[[], None]] = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                self._loop.add_signal_handler(sig, self.shutdown, "interrupt")
                restore.append(functools.partial(self._loop.remove_signal_handler, sig))
            except (NotImplementedError, RuntimeError):
                # No loop signal support (e.g. Windows), fall back to signal.signal
                try:
                    previous = signal.signal(
                        sig,
                        lambda *_: self._loop.call_soon_threadsafe(self.shutdown, "interrupt"),
                    )
                except ValueError:
                    self.logger.warning(f"Cannot handle {signal.Signals(sig).name} outside the main thread")
                    continue
                # None means the previous handler was not installed from Python
                if previous is None:
                    previous = signal.SIG_DFL
                restore.append(functools.partial(signal.signal, sig, previous))
        return restore

    def shutdown(self, reason: str = "requested") -> bool:
        """Finalize, stop the source and print the summary, once"""
        return self._coordinator.trigger(reason)

    def _shutdown_sequence(self, reason: str) -> None:
        errors: List[str] = []
        self.logger.debug(f"Shutting down: {reason}")

        try:
            self.processor.finalize()
        except Exception as e:
            errors.append(f"finalize failed: {e}")
            self.logger.error(f"Processor finalize failed: {e}")

        events_lost = 0
        try:
            self.source.stop()
            events_lost = self.source.events_lost
        except Exception as e:
            errors.append(f"closing source failed: {e}")
            self.logger.error(f"Closing event source failed: {e}")

        if self._pump_task is not None and not self._pump_task.done():
            self._pump_task.cancel()

        log_with_context(self.logger, "debug", "Filter metrics", **self.engine.get_metrics())

        self.summary = RunSummary(
            end_time=datetime.now(),
            duration=timedelta(seconds=time.monotonic() - self._started),
            processed=self.counters.processed,
            displayed=self.counters.displayed,
            events_lost=events_lost,
            shutdown_reason=reason,
            shutdown_errors=errors,
        )
        self.stream.write(self.summary.render())
        self.stream.flush()
