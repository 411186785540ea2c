"""Schemas for control endpoints."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ..models.event import EventLogItem


class SpeedRequest(BaseModel):
    """Request model for changing the speed multiplier."""

    speed: float = Field(..., gt=0, allow_inf_nan=False, description="Global speed multiplier")


class ScenarioRequest(BaseModel):
    """Request model for selecting a scenario."""

    scenario: str = Field(..., description="Scenario preset name")


class TickRequest(BaseModel):
    """Request model for advancing one tick."""

    delta_time: float = Field(
        1.0, allow_inf_nan=False, description="Elapsed time before the speed multiplier"
    )


class RunRequest(BaseModel):
    """Request model for a headless batch run."""

    ticks: int = Field(..., ge=0, le=10000)
    delta_time: float = Field(1.0, gt=0, allow_inf_nan=False)
    log_ticks: bool = Field(False, description="Append every tick to the JSON tick log")
    write_report: bool = Field(False, description="Write the final JSON and text report")


class ControlResponse(BaseModel):
    """Response model for control commands."""

    message: str
    status: str
    tick: int
    simulation_time: datetime
    speed: float
    scenario: str


class TickResponse(BaseModel):
    """Response model for a single tick."""

    tick: int
    simulation_time: datetime
    events: List[EventLogItem]


class RunResponse(BaseModel):
    """Response model for a headless batch run."""

    ticks_run: int
    tick: int
    simulation_time: datetime
    summary: Dict[str, Any]
    report_path: Optional[str] = None
