"""
Arrival feeds for the airport model.

A feed produces the arrival times used to seed a run. Feeds are
deterministic: the same configuration always yields the same arrivals.
"""

import random


class ArrivalFeed:
    """
    An arrival feed generates aircraft arrival times for a run.
    """

    def generate_arrivals(self, duration: int) -> list[int]:
        """
        Generate all arrival times within the run duration.

        Args:
            duration: Latest allowed arrival time

        Returns:
            Sorted list of arrival times
        """
        raise NotImplementedError("Subclasses must implement generate_arrivals()")


class FixedArrivalFeed(ArrivalFeed):
    """
    Replays an explicit list of arrival times.
    """

    def __init__(self, times: list[int]):
        self.times = list(times)

    def generate_arrivals(self, duration: int | None = None) -> list[int]:
        if duration is None:
            return sorted(self.times)
        return sorted(t for t in self.times if t <= duration)


class RandomArrivalFeed(ArrivalFeed):
    """
    Produces uniformly scattered arrivals from a seeded generator.
    """

    def __init__(self, rate: float = 0.1, seed: int = 42):
        """
        Args:
            rate: Average arrivals per time unit
            seed: Random seed for determinism
        """
        if rate < 0:
            raise ValueError("rate must not be negative")

        self.rate = rate
        self.seed = seed

    def generate_arrivals(self, duration: int) -> list[int]:
        rng = random.Random(self.seed)

        total_arrivals = int(duration * self.rate)

        return sorted(rng.randint(0, duration) for _ in range(total_arrivals))
