"""
Scenario runner for the airport model.

Responsibilities:

- Load a scenario definition from YAML
- Seed a fresh simulation with the scenario's arrivals
- Run it to completion (or to the configured stop condition)
- Hand trace records to the TraceBus
"""

from __future__ import annotations

import logging
from numbers import Real
from pathlib import Path
from typing import Any, Dict, List

import yaml

from eventsim.engine.simulation_engine import Simulation, StopCondition
from eventsim.engine.trace_bus import TraceBus
from eventsim.feeds.arrival_feed import FixedArrivalFeed, RandomArrivalFeed
from eventsim.models.airport import Airport, AirportState

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class ScenarioRunner:
    """
    Executes a single airport scenario in logical time.
    """

    def __init__(self, scenario_path: Path, trace_bus: TraceBus) -> None:
        self.scenario_path = scenario_path
        self.trace_bus = trace_bus
        self.scenario: Dict[str, Any] = {}
        self.simulation: Simulation | None = None

    def load(self) -> None:
        """
        Load the scenario YAML from disk and validate structure.
        """
        with self.scenario_path.open("r", encoding="utf-8") as fh:
            self.scenario = yaml.safe_load(fh)

        if not isinstance(self.scenario, dict):
            raise ValueError("Scenario file must be a YAML mapping (dict)")

        for key in ("runway_time", "ground_time"):
            if key not in self.scenario:
                raise ValueError(f"Scenario is missing '{key}'")
            value = self.scenario[key]
            if not _is_number(value) or value <= 0:
                raise ValueError(f"'{key}' must be a positive number")

        if "arrivals" not in self.scenario and "random_arrivals" not in self.scenario:
            raise ValueError("Scenario needs 'arrivals' or 'random_arrivals'")

        arrivals = self.scenario.get("arrivals", [])
        if not isinstance(arrivals, list) or not all(_is_number(t) for t in arrivals):
            raise ValueError("'arrivals' must be a list of numbers")

        generator = self.scenario.get("random_arrivals")
        if generator is not None:
            if not isinstance(generator, dict):
                raise ValueError("'random_arrivals' must be a mapping")
            duration = generator.get("duration")
            if not _is_number(duration) or duration < 0:
                raise ValueError("'random_arrivals' needs a numeric 'duration'")
            rate = generator.get("rate", 0.1)
            if not _is_number(rate) or rate < 0:
                raise ValueError("'random_arrivals.rate' must be a non-negative number")
            seed = generator.get("seed", 42)
            if not isinstance(seed, int) or isinstance(seed, bool):
                raise ValueError("'random_arrivals.seed' must be an integer")

        stop = self.scenario.get("stop") or {}
        if not isinstance(stop, dict):
            raise ValueError("'stop' must be a mapping")

        until = stop.get("until")
        if until is not None and not _is_number(until):
            raise ValueError("'stop.until' must be a number")

        max_events = stop.get("max_events")
        if max_events is not None and (
            not isinstance(max_events, int) or isinstance(max_events, bool) or max_events < 0
        ):
            raise ValueError("'stop.max_events' must be a non-negative integer")

        logger.info("Loaded scenario %s from %s", self.scenario.get("id"), self.scenario_path)

    def arrival_times(self) -> List[Any]:
        """
        Collect arrival times from every configured source.
        """
        times: List[Any] = FixedArrivalFeed(self.scenario.get("arrivals", [])).generate_arrivals()

        generator = self.scenario.get("random_arrivals")
        if generator is not None:
            feed = RandomArrivalFeed(
                rate=generator.get("rate", 0.1),
                seed=generator.get("seed", 42),
            )
            times.extend(feed.generate_arrivals(int(generator["duration"])))

        return sorted(times)

    def stop_condition(self, until: Any = None, max_events: int | None = None) -> StopCondition | None:
        """
        Build the stop condition, letting explicit arguments override the file.
        """
        stop = self.scenario.get("stop") or {}
        until = until if until is not None else stop.get("until")
        max_events = max_events if max_events is not None else stop.get("max_events")

        if until is None and max_events is None:
            return None
        return StopCondition(until=until, max_events=max_events)

    def prepare(self) -> Simulation:
        """
        Build a fresh simulation seeded with the scenario's arrivals.
        """
        airport = Airport(
            runway_time=self.scenario["runway_time"],
            ground_time=self.scenario["ground_time"],
        )
        self.simulation = Simulation(trace_bus=self.trace_bus)
        airport.seed(self.simulation.pending, self.arrival_times())
        return self.simulation

    def run(
        self,
        until: Any = None,
        max_events: int | None = None,
        close_bus: bool = False,
    ) -> AirportState:
        """
        Run the scenario from start to finish.

        Args:
            until: Optional latest timestamp to handle
            max_events: Optional cap on handled events
            close_bus: whether to close the TraceBus after execution
                       (use False if running multiple scenarios in one session)
        """
        simulation = self.prepare()
        final_state = simulation.run(
            AirportState(), stop=self.stop_condition(until, max_events)
        )

        if close_bus:
            self.trace_bus.close()

        return final_state

    def reset(self) -> None:
        """
        Discard the current simulation.
        """
        self.simulation = None
        # Do not automatically clear the trace bus; let caller decide
