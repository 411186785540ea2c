"""Tests for demand forecaster."""

import pytest
from ringsim.demand import DemandForecaster, od_key
from ringsim.validator import ConfigurationError

from .conftest import ScriptedRandom

CITIES = ["San Diego", "Los Angeles"]


@pytest.fixture
def forecaster():
    """Forecaster without stochastic variation (every draw is the midpoint)."""
    return DemandForecaster(60.0, CITIES, rng=ScriptedRandom(default=0.5))


def test_spawn_rate_multiplier(forecaster):
    assert forecaster.spawn_rate_multiplier(17, 0) == pytest.approx(4.10)
    assert forecaster.spawn_rate_multiplier(9, 2) == pytest.approx(3.20 * 1.08)
    assert forecaster.spawn_rate_multiplier(4, 6) == pytest.approx(0.01 * 0.50)


@pytest.mark.parametrize("hour,day", [(24, 0), (-1, 0), (12, 7), (12, -1)])
def test_out_of_range_time_raises(forecaster, hour, day):
    with pytest.raises(ConfigurationError):
        forecaster.spawn_rate_multiplier(hour, day)


def test_invalid_construction_raises():
    with pytest.raises(ConfigurationError):
        DemandForecaster(0, CITIES)
    with pytest.raises(ConfigurationError):
        DemandForecaster(60.0, [])


def test_od_matrix_splits_baseline(forecaster):
    # Monday noon, multiplier 1.5: inter-city 60*0.65/2*1.5 = 29.25, intra 60*0.35/2*1.5 = 15.75
    matrix = forecaster.od_matrix(12, 0)

    assert matrix == {
        od_key("San Diego", "San Diego"): 16,
        od_key("San Diego", "Los Angeles"): 29,
        od_key("Los Angeles", "San Diego"): 29,
        od_key("Los Angeles", "Los Angeles"): 16,
    }


def test_od_matrix_variation_stays_within_ten_percent():
    forecaster = DemandForecaster(600.0, CITIES, rng=ScriptedRandom([0.0, 0.999], default=0.5))
    matrix = forecaster.od_matrix(12, 0)

    low = matrix["San Diego-San Diego"]
    high = matrix["San Diego-Los Angeles"]
    assert low == round(600 * 0.35 / 2 * 1.5 * 0.9)
    assert high <= round(600 * 0.65 / 2 * 1.5 * 1.1)
    assert all(isinstance(v, int) and v >= 0 for v in matrix.values())


def test_forecast(forecaster):
    forecast = forecaster.forecast(12, 0)

    assert forecast.hour == 12
    assert forecast.day == 0
    assert forecast.spawn_rate_multiplier == pytest.approx(1.5)
    assert forecast.total_flights == 29 * 2 + 16 * 2


def test_custom_multipliers_are_chainable(forecaster):
    forecaster.with_hourly_multipliers({8: 2.0}).with_day_multipliers({0: 0.5})

    assert forecaster.spawn_rate_multiplier(8, 0) == pytest.approx(1.0)
    # Hours and days missing from a custom table default to 1.0
    assert forecaster.spawn_rate_multiplier(9, 3) == pytest.approx(1.0)
