"""
Events for the eventsim executive.

An event is a timestamp plus the handler to invoke when the clock
reaches it. Events are ordered by timestamp alone; the handler plays no
part in ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from eventsim.engine.pending_set import PendingEventSet

State = Any
Handler = Callable[[State, "PendingEventSet"], State]


@dataclass(frozen=True)
class Event:
    """
    Immutable unit of scheduled work.

    ``label`` is used for diagnostics only and defaults to the handler's
    name.
    """

    timestamp: Any
    handler: Handler
    label: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.timestamp is None:
            raise TypeError("Event timestamp must not be None")

        try:
            self.timestamp < self.timestamp
        except TypeError:
            raise TypeError(
                f"Event timestamp {self.timestamp!r} is not an ordered value"
            ) from None

        if not callable(self.handler):
            raise TypeError(f"Event handler {self.handler!r} is not callable")

        if not self.label:
            name = getattr(self.handler, "__name__", None) or type(self.handler).__name__
            object.__setattr__(self, "label", name)

    def same_time_as(self, other: Event) -> bool:
        """
        Return True when both events fall on the same timestamp.
        """
        return not (self.timestamp < other.timestamp or other.timestamp < self.timestamp)

    def __lt__(self, other: Event) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.timestamp < other.timestamp

    def __le__(self, other: Event) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return not other.timestamp < self.timestamp

    def __gt__(self, other: Event) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return other.timestamp < self.timestamp

    def __ge__(self, other: Event) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return not self.timestamp < other.timestamp

    def __str__(self) -> str:
        return f"Event({self.label} at {self.timestamp})"
