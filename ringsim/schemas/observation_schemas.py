"""Schemas for observation endpoints."""

from pydantic import BaseModel
from typing import Dict, List

from ..models.aircraft import Aircraft
from ..models.gate import Gate
from ..models.pipeline import Pipeline
from ..models.event import EventLogItem
from ..models.world import TrafficStatistics, StatisticsSnapshot


class AircraftListResponse(BaseModel):
    """Response model for the aircraft population."""

    aircraft: List[Aircraft]
    count: int
    by_status: Dict[str, int]


class GatesResponse(BaseModel):
    """Response model for gate status."""

    gates: List[Gate]
    count: int


class PipelinesResponse(BaseModel):
    """Response model for pipeline occupancy."""

    pipelines: List[Pipeline]


class EventsResponse(BaseModel):
    """Response model for the event log (newest first)."""

    events: List[EventLogItem]


class StatisticsResponse(BaseModel):
    """Response model for traffic statistics."""

    statistics: TrafficStatistics
    avg_gate_utilization: float
    avg_pipeline_utilization: float
    history: List[StatisticsSnapshot]


class AircraftResponse(BaseModel):
    """Response model for a single aircraft."""

    aircraft: Aircraft
