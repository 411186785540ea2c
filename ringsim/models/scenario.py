"""Scenario model."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from ..config import SCENARIO_PRESETS, DEFAULT_SCENARIO, CITY_LAYOUT


class ScenarioConfig(BaseModel):
    """Population, rates and capacities a simulation is built from."""

    key: str
    name: str
    description: str = ""
    cities: List[str] = Field(default_factory=lambda: list(CITY_LAYOUT))
    city_aircraft: Dict[str, int]
    pipeline_aircraft: int
    descent_probability: float
    pipeline_transfer_probability: float
    departure_probability: float
    pipeline_capacity: int
    disabled_gates: List[str] = Field(default_factory=list)
    alert_message: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "key": "normal",
                "name": "Normal Operations",
                "description": "Standard traffic flow between cities",
                "cities": ["San Diego", "Los Angeles"],
                "city_aircraft": {"San Diego": 50, "Los Angeles": 40},
                "pipeline_aircraft": 20,
                "descent_probability": 0.015,
                "pipeline_transfer_probability": 0.005,
                "departure_probability": 0.03,
                "pipeline_capacity": 30,
                "disabled_gates": [],
                "alert_message": None,
            }
        }
    }

    @classmethod
    def preset(cls, key: str) -> "ScenarioConfig":
        """Build a scenario from a named preset, falling back to the default."""
        data = SCENARIO_PRESETS.get(key, SCENARIO_PRESETS[DEFAULT_SCENARIO])
        return cls(key=key if key in SCENARIO_PRESETS else DEFAULT_SCENARIO, **data)
