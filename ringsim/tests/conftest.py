"""Shared fixtures for simulation tests."""

from datetime import datetime
from typing import List, Optional

import pytest
from ringsim.models.scenario import ScenarioConfig
from ringsim.models.world import World
from ringsim.registry import EntityRegistry
from ringsim.simulation import build_gates, build_pipelines


class ScriptedRandom:
    """Random source replaying a fixed list of draws.

    ``random()`` pops the next scripted value and falls back to ``default``
    once the script is exhausted; ``uniform`` returns the midpoint and
    ``choice`` the first element.
    """

    def __init__(self, draws=(), default: float = 0.99):
        self.draws = list(draws)
        self.default = default

    def random(self) -> float:
        if self.draws:
            return self.draws.pop(0)
        return self.default

    def uniform(self, a: float, b: float) -> float:
        return (a + b) / 2

    def choice(self, seq):
        return seq[0]


START_TIME = datetime(2025, 1, 6, 8, 0)  # a Monday


@pytest.fixture
def scenario():
    """Normal operations preset."""
    return ScenarioConfig.preset("normal")


@pytest.fixture
def empty_scenario(scenario):
    """Normal rates with no initial aircraft."""
    return scenario.model_copy(
        update={"city_aircraft": {"San Diego": 0, "Los Angeles": 0}, "pipeline_aircraft": 0}
    )


@pytest.fixture
def make_world(scenario):
    """Factory building a world over the standard gates and pipelines."""

    def _make(aircraft: Optional[List] = None, pipelines: Optional[List] = None) -> World:
        return World(
            scenario=scenario,
            selected_scenario=scenario.key,
            simulation_time=START_TIME,
            aircraft=aircraft or [],
            gates=build_gates(scenario),
            pipelines=pipelines if pipelines is not None else build_pipelines(scenario),
        )

    return _make


@pytest.fixture
def make_registry(make_world):
    def _make(aircraft: Optional[List] = None, pipelines: Optional[List] = None) -> EntityRegistry:
        return EntityRegistry(make_world(aircraft, pipelines))

    return _make
