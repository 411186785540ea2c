"""RINGS discrete-time air traffic simulation."""

from .simulation import Simulation
from .rng import RandomSource, SeededRandom
from .validator import ConfigurationError

__all__ = ["Simulation", "RandomSource", "SeededRandom", "ConfigurationError"]

__version__ = "1.0.0"
