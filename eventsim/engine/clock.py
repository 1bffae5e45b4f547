"""
Logical clock for the eventsim discrete-event executive.

The clock exists to decouple simulated time from wall-clock time. A run
advances deterministically, regardless of how fast or slow the host
system happens to be.

The clock does not sleep. It does not wait. It only records the
timestamp of the event currently being handled. The engine is the only
component that moves it; handlers read it through the pending event set.
"""

from __future__ import annotations

from typing import Any


class SimulationClock:
    """
    A minimal logical clock.

    Time is any totally ordered scalar (integers in the airport model).
    No assumptions are made about real-world timestamps.
    """

    def __init__(self, start: Any = 0) -> None:
        self._start = start
        self._current_time = start

    def now(self) -> Any:
        """
        Return the current logical time.
        """
        return self._current_time

    def advance_to(self, target_time: Any) -> None:
        """
        Advance the clock to the specified time.

        The clock may only move forwards. Attempting to move backwards is
        a caller error and leaves the clock untouched.
        """
        if target_time < self._current_time:
            raise ValueError(
                f"Cannot move clock backwards from {self._current_time} to {target_time}"
            )

        self._current_time = target_time

    def reset(self, start: Any = None) -> None:
        """
        Reset the clock to ``start``, or to its construction value.
        """
        if start is not None:
            self._start = start
        self._current_time = self._start

    def __repr__(self) -> str:
        return f"SimulationClock(now={self._current_time!r})"
