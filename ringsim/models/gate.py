"""Gate model."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class GateStatus(str, Enum):
    """Traffic-light status of a gate (derived every tick)."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class Gate(BaseModel):
    """A single-occupancy landing position at a city.

    ``status``, ``assigned_aircraft`` and ``queue_count`` are projections
    recomputed from the aircraft population after every tick.
    """

    id: str
    city: str
    quadrant: str
    index: int
    angle: float = Field(..., ge=0, lt=360)
    distance: float = Field(..., ge=0)
    disabled: bool = False  # offline for maintenance
    status: GateStatus = GateStatus.GREEN
    assigned_aircraft: Optional[str] = None
    queue_count: int = 0

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "San Diego-NQ-01",
                "city": "San Diego",
                "quadrant": "North",
                "index": 0,
                "angle": 0.0,
                "distance": 6.0,
                "disabled": False,
                "status": "GREEN",
                "assigned_aircraft": None,
                "queue_count": 1,
            }
        },
    }
