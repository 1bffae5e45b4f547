"""
Trace side channel for the eventsim executive.

After every handler call the engine can hand a TraceRecord (sequence
number, event time, event label, resulting state) to a trace sink. The
TraceBus fans those records out to observers such as the CLI printer or
a TraceRecorder in tests. Records are read-only snapshots; observers
cannot feed anything back into the run.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NamedTuple


class TraceRecord(NamedTuple):
    """
    Snapshot emitted after each handler invocation.
    """

    index: int
    timestamp: Any
    label: str
    state: Any


Subscriber = Callable[[TraceRecord], None]


class TraceBus:
    """
    Fans trace records out to observers of a run.

    Observers are invoked synchronously, one after another, in
    subscription order, while the engine waits. An observer that raises
    aborts delivery of that record and the error reaches whoever called
    publish, which is normally the engine loop.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._closed: bool = False

    def subscribe(self, observer: Subscriber) -> None:
        """
        Add an observer for future records.
        """
        if self._closed:
            raise RuntimeError("Cannot subscribe to a closed trace bus")

        self._subscribers.append(observer)

    def publish(self, record: TraceRecord) -> None:
        """
        Deliver one record to every observer.
        """
        if self._closed:
            raise RuntimeError("Cannot publish to a closed trace bus")

        for observer in self._subscribers:
            observer(record)

    def close(self) -> None:
        """
        Stop accepting observers and records.

        Used by ScenarioRunner.run(close_bus=True) to mark the end of a
        session.
        """
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed


class TraceRecorder:
    """
    Subscriber that keeps every record it receives.
    """

    def __init__(self) -> None:
        self.records: list[TraceRecord] = []

    def __call__(self, record: TraceRecord) -> None:
        self.records.append(record)

    def timestamps(self) -> list[Any]:
        return [record.timestamp for record in self.records]

    def labels(self) -> list[str]:
        return [record.label for record in self.records]
