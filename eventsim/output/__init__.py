# eventsim/output/__init__.py
from .base import Adapter
from .trace_adapter import TraceAdapter

__all__ = [
    "Adapter",
    "TraceAdapter",
]
