"""
Pending event set (future event list) for the eventsim executive.

The set is a binary heap keyed on ``(timestamp, sequence)``. The sequence
number grows with every insertion, so events sharing a timestamp leave
the set in the order they were scheduled (FIFO). This makes runs
reproducible without asking events to compare anything but time.

Handlers receive the set so they can schedule follow-up events and read
the current logical time through ``now()``. They never pop from it.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections.abc import Iterator
from typing import Any

from eventsim.engine.clock import SimulationClock
from eventsim.engine.event import Event, Handler

logger = logging.getLogger(__name__)


class PendingEventSet:
    """
    Priority structure holding events not yet handled.

    Extraction always yields the event with the smallest timestamp among
    those currently held.
    """

    def __init__(self, clock: SimulationClock | None = None) -> None:
        self._heap: list[tuple[Any, int, Event]] = []
        self._sequence = itertools.count()
        self.clock = clock

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def schedule(self, event: Event) -> None:
        """
        Insert an event.

        Timestamps earlier than the current clock time are accepted here;
        scheduling into the past is a modelling error left to the client.
        The run fails with ``ValueError`` from the clock when such an event
        is reached, since logical time never moves backwards.
        """
        if not isinstance(event, Event):
            raise TypeError(f"Can only schedule Event instances, got {type(event).__name__}")

        if self.clock is not None and event.timestamp < self.clock.now():
            logger.debug(
                "Event %s scheduled before current time %s", event, self.clock.now()
            )

        heapq.heappush(self._heap, (event.timestamp, next(self._sequence), event))

    def schedule_at(self, timestamp: Any, handler: Handler, label: str = "") -> Event:
        """
        Build an event for ``timestamp`` and schedule it.
        """
        event = Event(timestamp, handler, label)
        self.schedule(event)
        return event

    def schedule_in(self, delay: Any, handler: Handler, label: str = "") -> Event:
        """
        Schedule ``handler`` to run ``delay`` time units from now.
        """
        return self.schedule_at(self.now() + delay, handler, label)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def pop_earliest(self) -> Event | None:
        """
        Remove and return the earliest event, or None if the set is empty.
        """
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Event | None:
        """
        Return the earliest event without removing it.
        """
        return self._heap[0][2] if self._heap else None

    def __iter__(self) -> Iterator[Event]:
        """
        Drain the set in timestamp order.

        Events scheduled while iterating are picked up. Each event is
        yielded exactly once; a drained set yields nothing further.
        """
        while self._heap:
            yield heapq.heappop(self._heap)[2]

    # ------------------------------------------------------------------
    # Clock access
    # ------------------------------------------------------------------

    def now(self) -> Any:
        """
        Return the logical time of the run this set belongs to.
        """
        if self.clock is None:
            raise RuntimeError("Pending event set is not bound to a clock")
        return self.clock.now()

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._heap

    def clear(self) -> None:
        """
        Remove all events from the set.
        """
        self._heap.clear()

    def timestamps(self) -> list[Any]:
        """
        Return the pending timestamps in the order they would be handled.
        """
        return [entry[0] for entry in sorted(self._heap)]

    def dump(self) -> str:
        """
        Render the pending events, one per line, for debugging.
        """
        if not self._heap:
            return "<no pending events>"
        return "\n".join(f"t={entry[0]} {entry[2].label}" for entry in sorted(self._heap))

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"PendingEventSet(timestamps={self.timestamps()!r})"


def schedule(event: Event, pending_set: PendingEventSet) -> None:
    """
    Insert ``event`` into ``pending_set``.
    """
    pending_set.schedule(event)
