"""API schemas for request/response models."""

from .control_schemas import (
    SpeedRequest,
    ScenarioRequest,
    TickRequest,
    RunRequest,
    ControlResponse,
    TickResponse,
    RunResponse,
)
from .observation_schemas import (
    AircraftListResponse,
    AircraftResponse,
    GatesResponse,
    PipelinesResponse,
    EventsResponse,
    StatisticsResponse,
)

__all__ = [
    "SpeedRequest",
    "ScenarioRequest",
    "TickRequest",
    "RunRequest",
    "ControlResponse",
    "TickResponse",
    "RunResponse",
    "AircraftListResponse",
    "AircraftResponse",
    "GatesResponse",
    "PipelinesResponse",
    "EventsResponse",
    "StatisticsResponse",
]
