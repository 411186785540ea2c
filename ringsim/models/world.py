"""World state models."""

from datetime import datetime
from typing import Dict, List
from pydantic import BaseModel, Field

from .aircraft import Aircraft
from .gate import Gate
from .pipeline import Pipeline
from .event import EventLogItem
from .scenario import ScenarioConfig


class TrafficStatistics(BaseModel):
    """Running traffic counters since the last reset."""

    landings: Dict[str, int] = Field(default_factory=dict)  # per city
    departures: Dict[str, int] = Field(default_factory=dict)  # per city
    pipeline_transfers: int = 0
    reroutings: int = 0
    arrivals: int = 0

    def record_landing(self, city: str) -> None:
        self.landings[city] = self.landings.get(city, 0) + 1

    def record_departure(self, city: str) -> None:
        self.departures[city] = self.departures.get(city, 0) + 1


class StatisticsSnapshot(BaseModel):
    """Point-in-time copy of the counters plus resource utilization."""

    timestamp: datetime
    tick: int
    landings: Dict[str, int]
    departures: Dict[str, int]
    pipeline_transfers: int
    reroutings: int
    arrivals: int
    avg_gate_utilization: float
    avg_pipeline_utilization: float


class World(BaseModel):
    """The aggregate owned by the tick driver.

    Collections are replaced wholesale at the end of a tick, never patched
    in place, so an observer sees either the previous or the next world.
    """

    scenario: ScenarioConfig
    selected_scenario: str  # name requested by the UI, may be unknown
    simulation_time: datetime
    is_playing: bool = False
    speed: float = Field(1.0, gt=0)
    aircraft: List[Aircraft] = Field(default_factory=list)
    gates: List[Gate] = Field(default_factory=list)
    pipelines: List[Pipeline] = Field(default_factory=list)
    events: List[EventLogItem] = Field(default_factory=list)  # newest first
    statistics: TrafficStatistics = Field(default_factory=TrafficStatistics)
    statistics_history: List[StatisticsSnapshot] = Field(default_factory=list)
    tick_count: int = 0
    event_sequence: int = 0


class WorldSnapshot(BaseModel):
    """Read-only view handed to the rendering and UI collaborators."""

    simulation_time: datetime
    is_playing: bool
    speed: float
    scenario: str
    tick: int
    aircraft: List[Aircraft]
    gates: List[Gate]
    pipelines: List[Pipeline]
    events: List[EventLogItem]
    statistics: TrafficStatistics
