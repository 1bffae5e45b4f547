"""
eventsim discrete-event simulation core package.

The engine provides:
- SimulationClock
- Event
- PendingEventSet / schedule
- simulate / Simulation

The airport model is a sample client used to exercise the engine.
"""

from eventsim.engine.clock import SimulationClock
from eventsim.engine.event import Event
from eventsim.engine.pending_set import PendingEventSet, schedule

# Expose core engine components
from eventsim.engine.simulation_engine import Simulation, StopCondition, simulate
from eventsim.engine.trace_bus import TraceBus, TraceRecord
