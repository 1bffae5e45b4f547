# eventsim/output/trace_adapter.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from eventsim.engine.trace_bus import TraceRecord
from .base import Adapter


def state_fields(state: Any) -> dict[str, Any] | None:
    """Return the state as a plain dict, or None if it has no fields."""
    if hasattr(state, "as_dict"):
        return dict(state.as_dict())
    if isinstance(state, Mapping):
        return dict(state)
    return None


class TraceAdapter(Adapter):
    """Renders trace records as single key=value lines."""

    def transform(self, record: TraceRecord) -> Iterable[str]:
        fields = state_fields(record.state)
        if fields is None:
            rendered = f"state={record.state!r}"
        else:
            rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return [f"t={record.timestamp} {record.label} {rendered}"]

    def to_json(self, record: TraceRecord) -> dict[str, Any]:
        fields = state_fields(record.state)
        return {
            "index": record.index,
            "timestamp": record.timestamp,
            "event": record.label,
            "state": fields if fields is not None else repr(record.state),
        }
