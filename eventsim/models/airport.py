"""
Single-runway airport model.

A sample client of the engine. Aircraft arrive, queue in the air while
the runway is busy, land one at a time (each landing occupies the runway
for ``runway_time``), wait on the ground for ``ground_time`` and depart.

Three event kinds drive the model:

- arrived: an aircraft enters the approach queue
- landed: an aircraft has touched down and cleared the runway
- departed: an aircraft leaves the ground
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, replace
from typing import Any

from eventsim.engine.pending_set import PendingEventSet


class RunwayStateError(AssertionError):
    """
    Raised when the model reaches a state its own rules forbid.
    """


@dataclass(frozen=True)
class AirportState:
    in_air: int = 0
    on_ground: int = 0
    runway_free: bool = True

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class Airport:
    """
    Event handlers for the airport, parameterised by their durations.

    Args:
        runway_time: Time an aircraft occupies the runway while landing
        ground_time: Time an aircraft stays on the ground before departing
    """

    def __init__(self, runway_time: int = 3, ground_time: int = 4) -> None:
        if runway_time <= 0 or ground_time <= 0:
            raise ValueError("runway_time and ground_time must be positive")

        self.runway_time = runway_time
        self.ground_time = ground_time

    def arrived(self, state: AirportState, pending: PendingEventSet) -> AirportState:
        state = replace(state, in_air=state.in_air + 1)

        if state.runway_free:
            state = replace(state, runway_free=False)
            pending.schedule_in(self.runway_time, self.landed)

        return state

    def landed(self, state: AirportState, pending: PendingEventSet) -> AirportState:
        if state.runway_free:
            raise RunwayStateError(
                f"Aircraft landed at t={pending.now()} while the runway was free"
            )
        if state.in_air <= 0:
            raise RunwayStateError(
                f"Aircraft landed at t={pending.now()} with nothing in the air"
            )

        state = replace(state, in_air=state.in_air - 1, on_ground=state.on_ground + 1)
        pending.schedule_in(self.ground_time, self.departed)

        if state.in_air > 0:
            pending.schedule_in(self.runway_time, self.landed)
        else:
            state = replace(state, runway_free=True)

        return state

    def departed(self, state: AirportState, pending: PendingEventSet) -> AirportState:
        if state.on_ground <= 0:
            raise RunwayStateError(
                f"Aircraft departed at t={pending.now()} with nothing on the ground"
            )

        return replace(state, on_ground=state.on_ground - 1)

    def seed(self, pending: PendingEventSet, arrival_times: Iterable[Any]) -> int:
        """
        Schedule an ``arrived`` event for each arrival time.

        Returns:
            Number of arrivals scheduled
        """
        count = 0
        for timestamp in arrival_times:
            pending.schedule_at(timestamp, self.arrived)
            count += 1
        return count
