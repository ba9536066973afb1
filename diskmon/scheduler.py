"""
Run loop that drives every check manager on a fixed interval.

The first sweep starts immediately. Between sweeps the loop waits on a
threading.Event, so SIGINT/SIGTERM (or stop()) end a pending wait at once
instead of after the remaining interval. A sweep that has started always
runs to the end.
"""

import logging
import signal
import threading
from collections.abc import Sequence
from enum import Enum
from types import FrameType
from typing import Any

from diskmon.events import CheckEvent, EventSink, LoggingEventSink
from diskmon.exceptions import CheckError
from diskmon.manager import CheckManager

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SchedulerState(Enum):
    AWAITING_FIRST_TICK = "awaiting_first_tick"
    TICKING = "ticking"
    TERMINATING = "terminating"


class Scheduler:
    """Sweeps a fixed, ordered set of check managers until told to stop."""

    def __init__(
        self,
        managers: Sequence[CheckManager],
        interval: float,
        sink: EventSink | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            managers: Check managers, swept in this order on every tick.
            interval: Seconds to wait between the end of one sweep and the
                      start of the next.
            sink: Receives an event for every failed check.
        """
        if interval < 0:
            raise ValueError(f"interval must not be negative, got {interval}")
        self.managers = tuple(managers)
        self.interval = interval
        self.sink = sink or LoggingEventSink()
        self.state = SchedulerState.AWAITING_FIRST_TICK
        self.sweeps = 0
        self._stop_event = threading.Event()
        self._signal: int | None = None

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Ask the loop to exit at the next wait. Safe from signal handlers."""
        self._stop_event.set()

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        # No logging here: handlers may take locks the interrupted frame holds.
        self._signal = signum
        self.stop()

    def _install_signal_handlers(self) -> dict[int, Any]:
        previous = {}
        for signum in SHUTDOWN_SIGNALS:
            previous[signum] = signal.signal(signum, self._handle_signal)
        return previous

    def _wait_for_tick(self) -> bool:
        """Wait for the next tick. Returns False if shutdown was requested."""
        if self.state is SchedulerState.AWAITING_FIRST_TICK:
            return not self.stopping
        if self._stop_event.wait(self.interval):
            return False
        logger.debug("next tick")
        return True

    def sweep(self) -> list[CheckEvent]:
        """
        Check every manager once, in configured order.

        Failures are reported to the sink one by one and never abort the
        sweep.

        Returns:
            One event per manager, in the same order
        """
        events = []
        for manager in self.managers:
            try:
                event = manager.check()
            except CheckError as e:
                event = CheckEvent.from_error(e)
                self.sink.emit(event)
            events.append(event)
        self.sweeps += 1
        return events

    def run(self, install_signal_handlers: bool = True) -> None:
        """
        Sweep on every tick until SIGINT, SIGTERM or stop().

        Args:
            install_signal_handlers: Route SIGINT/SIGTERM to stop(). Only
                                     possible from the main thread.
        """
        previous = self._install_signal_handlers() if install_signal_handlers else {}
        logger.debug(
            "Starting run loop: %d target(s), interval %ss", len(self.managers), self.interval
        )
        try:
            while self._wait_for_tick():
                self.sweep()
                self.state = SchedulerState.TICKING
            if self._signal is not None:
                logger.info("%s detected", signal.Signals(self._signal).name.lower())
        finally:
            self.state = SchedulerState.TERMINATING
            for signum, handler in previous.items():
                if handler is not None:
                    signal.signal(signum, handler)
        logger.debug("Run loop stopped after %d sweep(s)", self.sweeps)
