"""Simulation models package."""

from .aircraft import (
    Aircraft,
    AircraftBase,
    InRingAircraft,
    DescendingAircraft,
    LandedAircraft,
    AscendingAircraft,
    InPipelineAircraft,
    AIRCRAFT_STATUSES,
)
from .gate import Gate, GateStatus
from .pipeline import Pipeline
from .event import EventLogItem, Severity
from .scenario import ScenarioConfig
from .world import World, WorldSnapshot, TrafficStatistics, StatisticsSnapshot

__all__ = [
    "Aircraft",
    "AircraftBase",
    "InRingAircraft",
    "DescendingAircraft",
    "LandedAircraft",
    "AscendingAircraft",
    "InPipelineAircraft",
    "AIRCRAFT_STATUSES",
    "Gate",
    "GateStatus",
    "Pipeline",
    "EventLogItem",
    "Severity",
    "ScenarioConfig",
    "World",
    "WorldSnapshot",
    "TrafficStatistics",
    "StatisticsSnapshot",
]
