# eventsim/output/base.py
from __future__ import annotations
from typing import Iterable

from eventsim.engine.trace_bus import TraceRecord


class Adapter:
    """Base adapter for transforming trace records into log lines."""

    def transform(self, record: TraceRecord) -> Iterable[str]:
        """Override in subclasses."""
        return []
