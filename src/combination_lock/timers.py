"""
Headless timer scheduling.

The lock components only need one timer primitive: schedule a callback
once after a delay and be able to cancel it. The contract is the one of
kivy.clock.Clock, so the GUI passes Clock itself:

    event = scheduler.schedule_once(callback, timeout)   # callback(dt)
    event.cancel()

PollingScheduler implements the same contract without an event loop, for
the text front end and the tests. Due events fire when tick() is called.
"""

import time
from typing import Callable


class ScheduledEvent:
    """Handle for a callback scheduled on a PollingScheduler."""

    def __init__(self, callback: Callable, created: float, due: float):
        self.callback = callback
        self.created = created
        self.due = due
        self.cancelled = False
        self.fired = False

    @property
    def is_triggered(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        state = 'cancelled' if self.cancelled else 'fired' if self.fired else 'pending'
        return f"ScheduledEvent(due={self.due:.3f}, {state})"


class PollingScheduler:
    """One-shot timers driven by explicit tick() calls."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._events: list[ScheduledEvent] = []

    def schedule_once(self, callback: Callable, timeout: float = 0) -> ScheduledEvent:
        now = self._clock()
        event = ScheduledEvent(callback, now, now + max(0, timeout))
        self._events.append(event)
        return event

    @property
    def pending(self) -> list[ScheduledEvent]:
        return [e for e in self._events if e.is_triggered]

    def tick(self) -> int:
        """Fire all due events in due order. Returns the number fired.

        Events scheduled by a callback fire in the same tick if they are
        already due.
        """
        fired = 0
        while True:
            now = self._clock()
            due = [e for e in self._events if e.is_triggered and e.due <= now]
            if not due:
                break
            event = min(due, key=lambda e: e.due)
            event.fired = True
            fired += 1
            event.callback(now - event.created)

        self._events = [e for e in self._events if e.is_triggered]
        return fired
