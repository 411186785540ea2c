"""Demand forecasting collaborator.

Supplies, per simulated hour of day (0-23) and day of week (0=Monday ..
6=Sunday), a spawn-rate multiplier and an origin-destination breakdown of
expected flights. The engine only consumes these numbers; it never computes
demand itself.
"""

import logging
from typing import Dict, List, Optional
from pydantic import BaseModel
from .rng import RandomSource, SeededRandom
from .validator import ConfigurationError

logger = logging.getLogger(__name__)


# Peak hours: 17:00 = 4.10x, 09:00 = 3.20x. Trough: 04:00 = 0.01x
DEFAULT_HOURLY_MULTIPLIERS: Dict[int, float] = {
    0: 0.05, 1: 0.04, 2: 0.03, 3: 0.02, 4: 0.01, 5: 0.02,
    6: 0.15, 7: 0.50, 8: 2.80, 9: 3.20, 10: 2.00, 11: 1.80,
    12: 1.50, 13: 1.40, 14: 1.20, 15: 1.50, 16: 2.50, 17: 4.10,
    18: 4.00, 19: 3.20, 20: 2.50, 21: 1.80, 22: 0.80, 23: 0.20,
}

# 0 = Monday .. 6 = Sunday
DEFAULT_DAY_MULTIPLIERS: Dict[int, float] = {
    0: 1.00, 1: 1.05, 2: 1.08, 3: 1.05, 4: 1.00, 5: 0.70, 6: 0.50,
}

INTER_CITY_SHARE = 0.65
INTRA_CITY_SHARE = 0.35
STOCHASTIC_VARIATION = 0.2  # total width, i.e. +/-10%


class DemandForecast(BaseModel):
    """Forecast for one simulated hour."""

    hour: int
    day: int
    spawn_rate_multiplier: float
    total_flights: int
    by_origin_destination: Dict[str, int]


def od_key(origin: str, destination: str) -> str:
    return f"{origin}-{destination}"


class DemandForecaster:
    """Time-of-day and day-of-week demand model over a set of cities."""

    def __init__(
        self,
        baseline_flights_per_hour: float = 60.0,
        cities: Optional[List[str]] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize forecaster.

        Args:
            baseline_flights_per_hour: Base demand per hour
            cities: City names
            rng: Random source for the stochastic variation

        Raises:
            ConfigurationError: If the baseline is not positive or no cities are given
        """
        if baseline_flights_per_hour <= 0:
            raise ConfigurationError("baseline_flights_per_hour must be > 0")
        if not cities:
            raise ConfigurationError("cities must not be empty")

        self.baseline_flights_per_hour = baseline_flights_per_hour
        self.cities = list(cities)
        self.rng = rng or SeededRandom()
        self.hourly_multipliers = dict(DEFAULT_HOURLY_MULTIPLIERS)
        self.day_multipliers = dict(DEFAULT_DAY_MULTIPLIERS)

    def with_hourly_multipliers(self, multipliers: Dict[int, float]) -> "DemandForecaster":
        """Replace the hourly multipliers (chainable)."""
        self.hourly_multipliers = dict(multipliers)
        return self

    def with_day_multipliers(self, multipliers: Dict[int, float]) -> "DemandForecaster":
        """Replace the day-of-week multipliers (chainable)."""
        self.day_multipliers = dict(multipliers)
        return self

    def hourly_multiplier(self, hour: int) -> float:
        return self.hourly_multipliers.get(hour, 1.0)

    def day_multiplier(self, day: int) -> float:
        return self.day_multipliers.get(day, 1.0)

    def spawn_rate_multiplier(self, hour: int, day: int) -> float:
        """Combined multiplier applied to the engine's base rates."""
        self._check_time(hour, day)
        return self.hourly_multiplier(hour) * self.day_multiplier(day)

    def od_matrix(self, hour: int, day: int) -> Dict[str, int]:
        """
        Expected flights per ordered city pair.

        Inter-city pairs share 65% of the baseline, intra-city pairs 35%,
        each value varied by up to +/-10%.

        Args:
            hour: Hour of day (0-23)
            day: Day of week (0=Monday, 6=Sunday)

        Returns:
            Mapping "origin-destination" -> non-negative flight count
        """
        combined = self.spawn_rate_multiplier(hour, day)
        city_count = len(self.cities)
        pair_count = city_count * (city_count - 1)

        matrix = {}
        for origin in self.cities:
            for destination in self.cities:
                if origin != destination:
                    base_flow = self.baseline_flights_per_hour * INTER_CITY_SHARE / pair_count
                else:
                    base_flow = self.baseline_flights_per_hour * INTRA_CITY_SHARE / city_count
                variation = 1 + (self.rng.random() - 0.5) * STOCHASTIC_VARIATION
                matrix[od_key(origin, destination)] = max(0, round(base_flow * combined * variation))
        return matrix

    def forecast(self, hour: int, day: int) -> DemandForecast:
        """Full forecast for one simulated hour."""
        matrix = self.od_matrix(hour, day)
        return DemandForecast(
            hour=hour,
            day=day,
            spawn_rate_multiplier=self.spawn_rate_multiplier(hour, day),
            total_flights=sum(matrix.values()),
            by_origin_destination=matrix,
        )

    @staticmethod
    def _check_time(hour: int, day: int) -> None:
        if not 0 <= hour <= 23:
            raise ConfigurationError(f"hour must be between 0-23 (got {hour})")
        if not 0 <= day <= 6:
            raise ConfigurationError(f"day must be between 0-6, 0=Monday (got {day})")
