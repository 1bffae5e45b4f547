"""
Unit tests for eventsim/engine/pending_set.py
"""

import random

import pytest

from eventsim.engine.clock import SimulationClock
from eventsim.engine.event import Event
from eventsim.engine.pending_set import PendingEventSet, schedule


def handler(state, pending):
    return state


def named(label):
    def _handler(state, pending):
        return state

    _handler.__name__ = label
    return _handler


class TestScheduleAndPop:
    """Insertion and extraction-of-minimum."""

    def test_pop_from_empty_returns_none(self):
        assert PendingEventSet().pop_earliest() is None

    def test_pop_returns_minimum(self):
        pending = PendingEventSet()
        for t in (5, 1, 3):
            pending.schedule(Event(t, handler))

        assert pending.pop_earliest().timestamp == 1
        assert pending.pop_earliest().timestamp == 3
        assert pending.pop_earliest().timestamp == 5
        assert pending.pop_earliest() is None

    def test_pops_are_non_decreasing(self):
        """Successive pops return events in non-decreasing timestamp order."""
        rng = random.Random(1234)
        pending = PendingEventSet()
        for _ in range(200):
            pending.schedule(Event(rng.randint(0, 50), handler))

        popped = []
        while (event := pending.pop_earliest()) is not None:
            popped.append(event.timestamp)

        assert len(popped) == 200
        assert popped == sorted(popped)

    def test_equal_timestamps_leave_in_insertion_order(self):
        pending = PendingEventSet()
        labels = ["first", "second", "third"]
        for label in labels:
            pending.schedule(Event(7, handler, label))

        assert [pending.pop_earliest().label for _ in labels] == labels

    def test_tie_break_survives_interleaved_inserts(self):
        pending = PendingEventSet()
        pending.schedule(Event(2, handler, "a"))
        pending.schedule(Event(1, handler, "early"))
        pending.schedule(Event(2, handler, "b"))
        assert pending.pop_earliest().label == "early"
        pending.schedule(Event(2, handler, "c"))

        assert [e.label for e in pending] == ["a", "b", "c"]

    def test_schedule_rejects_non_events(self):
        with pytest.raises(TypeError, match="Can only schedule Event"):
            PendingEventSet().schedule((1, handler))

    def test_schedule_into_the_past_is_accepted(self):
        clock = SimulationClock()
        clock.advance_to(10)
        pending = PendingEventSet(clock)

        pending.schedule(Event(3, handler))

        assert pending.timestamps() == [3]

    def test_module_level_schedule(self):
        pending = PendingEventSet()
        event = Event(4, handler)

        schedule(event, pending)

        assert pending.peek() is event


class TestConvenienceScheduling:
    def test_schedule_at_returns_event(self):
        pending = PendingEventSet()
        event = pending.schedule_at(9, handler, "tick")

        assert event.timestamp == 9
        assert event.label == "tick"
        assert len(pending) == 1

    def test_schedule_in_is_relative_to_clock(self):
        clock = SimulationClock()
        clock.advance_to(4)
        pending = PendingEventSet(clock)

        event = pending.schedule_in(3, handler)

        assert event.timestamp == 7

    def test_schedule_in_requires_clock(self):
        with pytest.raises(RuntimeError, match="not bound to a clock"):
            PendingEventSet().schedule_in(3, handler)


class TestIteration:
    """The set drains lazily when iterated."""

    def test_iteration_is_ordered_and_destructive(self):
        pending = PendingEventSet()
        for t in (3, 1, 2):
            pending.schedule(Event(t, handler))

        assert [e.timestamp for e in pending] == [1, 2, 3]
        assert pending.is_empty()
        assert list(pending) == []

    def test_iteration_sees_events_added_while_draining(self):
        pending = PendingEventSet()
        pending.schedule(Event(1, handler))

        seen = []
        for event in pending:
            seen.append(event.timestamp)
            if event.timestamp < 4:
                pending.schedule(Event(event.timestamp + 1, handler))

        assert seen == [1, 2, 3, 4]

    def test_iteration_is_lazy(self):
        pending = PendingEventSet()
        for t in (1, 2, 3):
            pending.schedule(Event(t, handler))

        iterator = iter(pending)
        assert len(pending) == 3
        next(iterator)
        assert len(pending) == 2


class TestInspection:
    """Diagnostics never mutate the set."""

    def test_peek_does_not_remove(self):
        pending = PendingEventSet()
        pending.schedule(Event(2, handler))

        assert pending.peek().timestamp == 2
        assert len(pending) == 1

    def test_peek_on_empty(self):
        assert PendingEventSet().peek() is None

    def test_len_and_bool(self):
        pending = PendingEventSet()
        assert len(pending) == 0
        assert not pending

        pending.schedule(Event(1, handler))
        assert len(pending) == 1
        assert pending

    def test_timestamps_sorted_without_draining(self):
        pending = PendingEventSet()
        for t in (8, 4, 11, 7):
            pending.schedule(Event(t, handler))

        assert pending.timestamps() == [4, 7, 8, 11]
        assert len(pending) == 4

    def test_dump(self):
        pending = PendingEventSet()
        pending.schedule(Event(8, named("departed")))
        pending.schedule(Event(7, named("landed")))

        assert pending.dump() == "t=7 landed\nt=8 departed"
        assert len(pending) == 2

    def test_dump_empty(self):
        assert PendingEventSet().dump() == "<no pending events>"

    def test_repr(self):
        pending = PendingEventSet()
        pending.schedule(Event(2, handler))
        pending.schedule(Event(1, handler))
        assert repr(pending) == "PendingEventSet(timestamps=[1, 2])"

    def test_clear(self):
        pending = PendingEventSet()
        pending.schedule(Event(1, handler))
        pending.clear()
        assert pending.is_empty()

    def test_now_reads_bound_clock(self):
        clock = SimulationClock()
        pending = PendingEventSet(clock)
        clock.advance_to(12)
        assert pending.now() == 12
