"""Aircraft models.

An aircraft is one of five variants discriminated by ``status``. Each variant
carries exactly the fields that are meaningful in that state: only descending
and landed aircraft hold a gate, only in-pipeline aircraft reference a
corridor and have no city.
"""

from datetime import datetime
from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field

from ..config import GROUND_ALTITUDE, MAX_ALTITUDE


AIRCRAFT_STATUSES = ("in_ring", "descending", "landed", "ascending", "in_pipeline")


class AircraftBase(BaseModel):
    """Fields shared by every aircraft state."""

    id: str
    speed: float = Field(..., gt=0)  # multiplier on all rates
    home_city: str
    operator: str = "AR"
    angle_on_ring: float = Field(0.0, ge=0, lt=360)
    distance_from_center: float = Field(0.0, ge=0)
    altitude: float = Field(MAX_ALTITUDE, ge=GROUND_ALTITUDE, le=MAX_ALTITUDE)

    model_config = {"frozen": True}


class InRingAircraft(AircraftBase):
    """Circling in the holding ring of a city."""

    status: Literal["in_ring"] = "in_ring"
    city: str

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "AC-001",
                "status": "in_ring",
                "speed": 0.65,
                "home_city": "San Diego",
                "operator": "AR",
                "city": "San Diego",
                "angle_on_ring": 132.5,
                "distance_from_center": 6.0,
                "altitude": 1250.0,
            }
        },
    }


class DescendingAircraft(AircraftBase):
    """Converging on a reserved gate."""

    status: Literal["descending"] = "descending"
    city: str
    target_gate: str
    descent_started_at: datetime


class LandedAircraft(AircraftBase):
    """Occupying a gate on the ground."""

    status: Literal["landed"] = "landed"
    city: str
    target_gate: str


class AscendingAircraft(AircraftBase):
    """Climbing back to the ring after leaving a gate."""

    status: Literal["ascending"] = "ascending"
    city: str


class InPipelineAircraft(AircraftBase):
    """Travelling along an inter-city corridor."""

    status: Literal["in_pipeline"] = "in_pipeline"
    pipeline_id: str
    origin_city: str
    pipeline_progress: float = Field(0.0, ge=0, le=1)


Aircraft = Annotated[
    Union[
        InRingAircraft,
        DescendingAircraft,
        LandedAircraft,
        AscendingAircraft,
        InPipelineAircraft,
    ],
    Field(discriminator="status"),
]


def gate_of(aircraft: AircraftBase):
    """Return the gate held by an aircraft, or None."""
    return getattr(aircraft, "target_gate", None)
