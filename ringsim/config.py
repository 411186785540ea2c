"""Configuration module for constants, scenario presets, and settings."""

from typing import Dict, List, Optional
from pydantic_settings import BaseSettings


# Ring geometry
RING_RADIUS = 6.0
GATES_PER_QUADRANT = 28
QUADRANT_OFFSETS = {"North": 0.0, "East": 90.0, "South": 180.0, "West": 270.0}

# Altitude envelope (feet)
MAX_ALTITUDE = 1250.0
GROUND_ALTITUDE = 50.0


# Per-state rates, per unit of scaled delta
RING_ANGULAR_RATE = 25.0  # degrees, multiplied by aircraft speed
DESCENT_ANGULAR_RATE = 15.0  # degrees
DESCENT_RADIAL_RATE = 2.0
DESCENT_RATE = 200.0  # feet
CLIMB_RATE = 150.0  # feet
CLIMB_RADIAL_RATE = 1.0
PIPELINE_PROGRESS_RATE = 0.08  # multiplied by aircraft speed

# Snap tolerances
ANGLE_SNAP_TOLERANCE = 1.0  # degrees
DISTANCE_SNAP_TOLERANCE = 0.1

# Gate congestion: more than CONGESTION_THRESHOLD circling aircraft
# within CONGESTION_WINDOW degrees turns a free gate YELLOW
CONGESTION_WINDOW = 15.0
CONGESTION_THRESHOLD = 2

# Pipeline rerouting thresholds (utilization fractions)
REROUTE_CONGESTED_UTILIZATION = 0.8
REROUTE_RELIEF_UTILIZATION = 0.5

# Clock: one simulated minute per unit of scaled delta
CLOCK_MS_PER_UNIT = 60000

EVENT_LOG_LIMIT = 100
STATISTICS_HISTORY_LIMIT = 500

# Initial speed ranges (min, max)
RING_SPEED_RANGE = (0.5, 0.8)
PIPELINE_SPEED_RANGE = (0.3, 0.5)

# Demand-driven spawning
SPAWN_CHECK_RATE = 0.05
SPAWN_PAIR_PROBABILITY = 0.1
MAX_AIRCRAFT = 200


# Fleet operators
OPERATOR_CODES = ["AR", "JB", "WK", "BT", "LL", "VL"]

# City and corridor layout of the reference scenario
CITY_LAYOUT: List[str] = ["San Diego", "Los Angeles"]

# Format: id -> (from_city, to_city, from_quadrant, to_quadrant, altitude_ft)
# Directional altitude separation: northbound 500ft, southbound 600ft
PIPELINE_LAYOUT: Dict[str, tuple] = {
    "N-S": ("San Diego", "Los Angeles", "North", "South", 500.0),
    "S-N": ("Los Angeles", "San Diego", "South", "North", 600.0),
}
PIPELINE_TRANSIT_TIME = 70.0


def _maintenance_gates() -> List[str]:
    gates = []
    for city, quadrants in (("San Diego", "NE"), ("Los Angeles", "SW")):
        for quadrant in quadrants:
            for index in range(1, 5):
                gates.append(f"{city}-{quadrant}Q-{index:02d}")
    return gates


# Scenario presets. "normal" is the reference scenario.
SCENARIO_PRESETS: Dict[str, Dict] = {
    "normal": {
        "name": "Normal Operations",
        "description": "Standard traffic flow between cities",
        "city_aircraft": {"San Diego": 50, "Los Angeles": 40},
        "pipeline_aircraft": 20,
        "descent_probability": 0.015,
        "pipeline_transfer_probability": 0.005,
        "departure_probability": 0.03,
        "pipeline_capacity": 30,
        "disabled_gates": [],
        "alert_message": None,
    },
    "rush_hour": {
        "name": "Rush Hour",
        "description": "Peak traffic with high volume between cities",
        "city_aircraft": {"San Diego": 80, "Los Angeles": 70},
        "pipeline_aircraft": 40,
        "descent_probability": 0.025,
        "pipeline_transfer_probability": 0.008,
        "departure_probability": 0.04,
        "pipeline_capacity": 40,
        "disabled_gates": [],
        "alert_message": "RUSH HOUR: High traffic volume active",
    },
    "maintenance": {
        "name": "Scheduled Maintenance",
        "description": "Reduced capacity due to gate maintenance",
        "city_aircraft": {"San Diego": 30, "Los Angeles": 25},
        "pipeline_aircraft": 10,
        "descent_probability": 0.01,
        "pipeline_transfer_probability": 0.003,
        "departure_probability": 0.02,
        "pipeline_capacity": 20,
        "disabled_gates": _maintenance_gates(),
        "alert_message": "MAINTENANCE: 16 gates offline for scheduled maintenance",
    },
    "emergency": {
        "name": "Emergency Response",
        "description": "Emergency scenario with priority routing",
        "city_aircraft": {"San Diego": 60, "Los Angeles": 60},
        "pipeline_aircraft": 30,
        "descent_probability": 0.035,
        "pipeline_transfer_probability": 0.012,
        "departure_probability": 0.05,
        "pipeline_capacity": 50,
        "disabled_gates": [],
        "alert_message": "EMERGENCY: Priority routing active - all gates on standby",
    },
}
DEFAULT_SCENARIO = "normal"


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "simulation.log"
    TICK_LOG_FILE: str = "ticks.jsonl"
    REPORT_FILE: str = "reports/final_report"

    # Engine
    RANDOM_SEED: Optional[int] = None
    DEFAULT_SCENARIO: str = DEFAULT_SCENARIO
    EVENT_LOG_LIMIT: int = EVENT_LOG_LIMIT
    STATISTICS_HISTORY_LIMIT: int = STATISTICS_HISTORY_LIMIT
    MAX_AIRCRAFT: int = MAX_AIRCRAFT

    # Demand forecasting (not wired unless enabled)
    DEMAND_ENABLED: bool = False
    DEMAND_BASELINE_FLIGHTS_PER_HOUR: float = 60.0
    DEMAND_PROFILE_CSV: Optional[str] = None

    # API server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }
