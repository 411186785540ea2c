"""Pipeline (inter-city corridor) model."""

from pydantic import BaseModel, Field


class Pipeline(BaseModel):
    """A directional, capacity-bounded corridor between two cities."""

    id: str
    from_city: str
    to_city: str
    from_quadrant: str
    to_quadrant: str
    capacity: int = Field(..., gt=0)
    transit_time: float  # informational only
    altitude: float
    current_count: int = 0  # derived every tick

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "id": "N-S",
                "from_city": "San Diego",
                "to_city": "Los Angeles",
                "from_quadrant": "North",
                "to_quadrant": "South",
                "capacity": 30,
                "transit_time": 70.0,
                "altitude": 500.0,
                "current_count": 10,
            }
        },
    }

    @property
    def utilization(self) -> float:
        """Derived occupancy as a fraction of capacity."""
        return self.current_count / self.capacity
