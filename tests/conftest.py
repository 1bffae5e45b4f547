"""Test configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from eventsim.engine.clock import SimulationClock  # noqa: E402
from eventsim.engine.pending_set import PendingEventSet  # noqa: E402
from eventsim.engine.trace_bus import TraceBus, TraceRecorder  # noqa: E402
from eventsim.models.airport import Airport  # noqa: E402


@pytest.fixture
def clock() -> SimulationClock:
    """Fresh clock at time zero."""
    return SimulationClock()


@pytest.fixture
def pending(clock) -> PendingEventSet:
    """Empty pending event set bound to the clock fixture."""
    return PendingEventSet(clock)


@pytest.fixture
def airport() -> Airport:
    """Airport with the reference durations R=3, G=4."""
    return Airport(runway_time=3, ground_time=4)


@pytest.fixture
def recorder() -> TraceRecorder:
    """Collecting trace subscriber."""
    return TraceRecorder()


@pytest.fixture
def trace_bus(recorder) -> TraceBus:
    """Trace bus with a recorder already subscribed."""
    bus = TraceBus()
    bus.subscribe(recorder)
    return bus


@pytest.fixture
def mock_trace_bus(monkeypatch):
    """Mock TraceBus for CLI tests."""
    mock_bus = Mock()
    monkeypatch.setattr("eventsim.cli.TraceBus", lambda: mock_bus)
    return mock_bus


@pytest.fixture
def mock_scenario_runner(monkeypatch):
    """Mock ScenarioRunner with default configuration."""
    mock_runner = Mock()
    mock_runner.scenario = {"id": "test_scenario"}
    mock_runner.simulation = None
    monkeypatch.setattr(
        "eventsim.cli.ScenarioRunner", lambda scenario_path, trace_bus: mock_runner
    )
    return mock_runner


@pytest.fixture
def reference_scenario(tmp_path) -> Path:
    """Scenario file for the two-arrival reference run."""
    scenario = tmp_path / "two_arrivals.yaml"
    scenario.write_text(
        "id: two-arrivals\n"
        "runway_time: 3\n"
        "ground_time: 4\n"
        "arrivals: [1, 3]\n"
    )
    return scenario
