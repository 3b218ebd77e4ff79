"""
Marble standings simulator.

Monte Carlo estimate of each competitor's final-rank probabilities from
current standings and a number of remaining events.
"""

from .types import Standing, Competitor, StandingsTable, SimulationResult
from .errors import ConfigurationError, DataError, SimulationCancelled
from .config import SimulationConfig, DEFAULT_SCORING, SCORING_PRESETS
from .simulation import simulate, simulate_rank_distribution

__version__ = "0.1.0"

__all__ = [
    "Standing",
    "Competitor",
    "StandingsTable",
    "SimulationResult",
    "ConfigurationError",
    "DataError",
    "SimulationCancelled",
    "SimulationConfig",
    "DEFAULT_SCORING",
    "SCORING_PRESETS",
    "simulate",
    "simulate_rank_distribution",
]
