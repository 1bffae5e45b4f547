"""
Simulation engine (executive) for eventsim.

The engine repeatedly pulls the earliest pending event, advances the
clock to its timestamp and hands the current state to the event's
handler. Whatever the handler returns becomes the new state. Handlers
may schedule more events on the pending set they are given, which is
how a model drives itself forward.

The loop is single-threaded and cooperative. A handler runs to
completion before the next event is considered. A run ends when the
pending set is empty or when an optional stop condition says so.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from eventsim.engine.clock import SimulationClock
from eventsim.engine.event import Event, Handler, State
from eventsim.engine.pending_set import PendingEventSet
from eventsim.engine.trace_bus import TraceBus, TraceRecord

logger = logging.getLogger(__name__)

TraceSink = Callable[[TraceRecord], None]


@dataclass(frozen=True)
class StopCondition:
    """
    Optional limits evaluated once per loop iteration.

    Attributes:
        until: Events later than this timestamp are left pending
        max_events: Maximum number of handler invocations
        predicate: Called as ``predicate(state, now)``; True stops the run
    """

    until: Any = None
    max_events: int | None = None
    predicate: Callable[[State, Any], bool] | None = None

    def should_stop(
        self,
        state: State,
        pending_set: PendingEventSet,
        clock: SimulationClock,
        processed: int,
    ) -> bool:
        if self.max_events is not None and processed >= self.max_events:
            return True

        if self.until is not None:
            upcoming = pending_set.peek()
            if upcoming is not None and self.until < upcoming.timestamp:
                return True

        if self.predicate is not None and self.predicate(state, clock.now()):
            return True

        return False


def _resolve_clock(
    pending_set: PendingEventSet, clock: SimulationClock | None
) -> SimulationClock:
    """Bind the pending set to the clock the run will use."""
    if clock is None:
        clock = pending_set.clock or SimulationClock()
    pending_set.clock = clock
    return clock


def _drive(
    initial_state: State,
    pending_set: PendingEventSet,
    clock: SimulationClock,
    stop: StopCondition | None,
    trace: TraceSink | None,
) -> tuple[State, int]:
    state = initial_state
    processed = 0

    while True:
        if stop is not None and stop.should_stop(state, pending_set, clock, processed):
            logger.info(
                "Stop condition met at t=%s after %d events (%d still pending)",
                clock.now(),
                processed,
                len(pending_set),
            )
            break

        event = pending_set.pop_earliest()
        if event is None:
            break

        clock.advance_to(event.timestamp)
        logger.debug("t=%s dispatching %s", clock.now(), event.label)

        try:
            state = event.handler(state, pending_set)
        except Exception:
            logger.error("Handler %s failed at t=%s", event.label, clock.now())
            raise

        processed += 1

        if trace is not None:
            trace(TraceRecord(processed, event.timestamp, event.label, state))

    return state, processed


def simulate(
    initial_state: State,
    pending_set: PendingEventSet,
    *,
    clock: SimulationClock | None = None,
    stop: StopCondition | None = None,
    trace: TraceSink | None = None,
) -> State:
    """
    Drain ``pending_set`` and return the final state.

    Args:
        initial_state: Opaque client state threaded through every handler
        pending_set: Seeded pending event set; handlers may add to it
        clock: Clock to advance; defaults to the set's clock or a new one
        stop: Optional stop condition checked before each event
        trace: Optional callable receiving a TraceRecord per handled event

    Returns:
        The state returned by the last handler, or ``initial_state`` if
        no event was handled.
    """
    clock = _resolve_clock(pending_set, clock)
    state, _ = _drive(initial_state, pending_set, clock, stop, trace)
    return state


class Simulation:
    """
    One simulation run: a clock and the pending set bound to it.

    Lifecycle: create, seed events, ``run``, discard. A Simulation is not
    meant to be shared between concurrently running models.
    """

    def __init__(self, start: Any = 0, trace_bus: TraceBus | None = None) -> None:
        self.clock = SimulationClock(start)
        self.pending = PendingEventSet(self.clock)
        self.trace_bus = trace_bus
        self.events_processed = 0

    def now(self) -> Any:
        return self.clock.now()

    def schedule(self, event: Event) -> None:
        self.pending.schedule(event)

    def schedule_at(self, timestamp: Any, handler: Handler, label: str = "") -> Event:
        return self.pending.schedule_at(timestamp, handler, label)

    def run(self, initial_state: State, stop: StopCondition | None = None) -> State:
        """
        Reset the clock and drain the pending set.
        """
        self.clock.reset()
        trace = self.trace_bus.publish if self.trace_bus is not None else None

        logger.info(
            "Simulation starting at t=%s with %d pending events",
            self.clock.now(),
            len(self.pending),
        )
        state, self.events_processed = _drive(
            initial_state, self.pending, self.clock, stop, trace
        )
        logger.info(
            "Simulation finished at t=%s after %d events",
            self.clock.now(),
            self.events_processed,
        )
        return state
