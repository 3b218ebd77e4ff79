"""
Configuration management for the Marble standings simulator.

Scoring presets, simulation defaults, and JSON loading utilities.
"""

import json
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence

from .errors import ConfigurationError, DataError
from .types import Scoring


# =============================================================================
# Scoring Presets
# =============================================================================

DEFAULT_SCORING: Scoring = (25, 20, 15, 12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0)

SCORING_PRESETS: Dict[str, Scoring] = {
    # 16-team league table, last place scores nothing
    'default': DEFAULT_SCORING,
    # Top ten score, 16 teams
    'top_ten': (25, 18, 15, 12, 10, 8, 6, 4, 2, 1, 0, 0, 0, 0, 0, 0),
    # Linear countdown, 16 teams
    'linear': tuple(range(16, 0, -1)),
}

BACKENDS = ("thread", "process")


# =============================================================================
# Simulation Config
# =============================================================================

@dataclass
class SimulationConfig:
    """
    Simulation run parameters.

    Attributes:
        remaining_events: Events left in the season
        iterations: Total simulated seasons across all workers
        workers: Number of parallel workers
        seed: Base seed for the per-worker random streams (None = fresh entropy)
        backend: "thread" or "process"
        progress_interval: Log progress every N iterations per worker
        scoring_preset: Name in SCORING_PRESETS, used when scoring is None
        scoring: Explicit scoring table (overrides scoring_preset)
    """
    remaining_events: int = 1
    iterations: int = 1_000_000
    workers: int = 4
    seed: Optional[int] = None
    backend: str = "thread"
    progress_interval: int = 10_000
    scoring_preset: str = "default"
    scoring: Optional[List[int]] = None

    def __post_init__(self) -> None:
        for name in ('remaining_events', 'iterations', 'workers', 'progress_interval'):
            _require_int(name, getattr(self, name))
        if self.seed is not None:
            _require_int('seed', self.seed)
        for name in ('backend', 'scoring_preset'):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(
                    f"{name} must be a string, got {getattr(self, name)!r}"
                )
        if self.scoring is not None and not isinstance(self.scoring, (list, tuple)):
            raise ConfigurationError(f"scoring must be a list of integers, got {self.scoring!r}")

        if self.remaining_events < 0:
            raise ConfigurationError(
                f"remaining_events must be >= 0, got {self.remaining_events}"
            )
        if self.iterations < 1:
            raise ConfigurationError(f"iterations must be >= 1, got {self.iterations}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        if self.progress_interval < 1:
            raise ConfigurationError(
                f"progress_interval must be >= 1, got {self.progress_interval}"
            )
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend '{self.backend}'. Expected one of {', '.join(BACKENDS)}."
            )
        if self.scoring is None and self.scoring_preset not in SCORING_PRESETS:
            raise ConfigurationError(
                f"Unknown scoring preset '{self.scoring_preset}'. "
                f"Expected one of {', '.join(SCORING_PRESETS)}."
            )
        if self.scoring is not None:
            validate_scoring(self.scoring)

    def resolve_scoring(self) -> Scoring:
        """Explicit scoring table if set, otherwise the named preset."""
        if self.scoring is not None:
            return tuple(int(p) for p in self.scoring)
        return SCORING_PRESETS[self.scoring_preset]


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def validate_scoring(scoring: Sequence[int]) -> None:
    """Raise ConfigurationError for an empty table, non-integer or negative points."""
    if len(scoring) == 0:
        raise ConfigurationError("Scoring table is empty")
    for points in scoring:
        _require_int('scoring entry', points)
    negative = [p for p in scoring if p < 0]
    if negative:
        raise ConfigurationError(f"Scoring table has negative points: {negative}")


def parse_scoring(text: str) -> Scoring:
    """
    Parse a comma separated scoring table, e.g. "25, 20, 15, 0".

    Raises:
        ConfigurationError: If an entry is not an integer or is negative
    """
    try:
        scoring = tuple(int(part.strip()) for part in text.split(',') if part.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid scoring table '{text}': {e}") from e
    validate_scoring(scoring)
    return scoring


# =============================================================================
# JSON Loading Utilities
# =============================================================================

def _read_json(path: str):
    """Parse a JSON file, raising DataError on malformed content."""
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataError(f"{path}: invalid JSON ({e})") from e


def load_scoring_from_json(path: str) -> Scoring:
    """
    Load a scoring table from JSON file.

    Accepted formats:
        [25, 20, 15, 12, ...]
        {"scoring": [25, 20, 15, 12, ...]}
    """
    data = _read_json(path)

    if isinstance(data, dict):
        data = data.get('scoring')
    if not isinstance(data, list):
        raise DataError(f"{path}: expected a list of points or an object with 'scoring'")

    if any(isinstance(p, bool) or not isinstance(p, int) for p in data):
        raise DataError(f"{path}: scoring entries must be integers")
    scoring = tuple(data)
    validate_scoring(scoring)
    return scoring


def load_simulation_config_from_json(path: str) -> SimulationConfig:
    """
    Load simulation config from JSON file.

    Expected format (every key optional):
    {
        "remaining_events": 3,
        "iterations": 1000000,
        "workers": 4,
        "seed": 42,
        "backend": "thread",
        "progress_interval": 10000,
        "scoring_preset": "default",
        "scoring": [25, 20, 15, ...]
    }
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise DataError(f"{path}: expected a JSON object, got {type(data).__name__}")

    defaults = SimulationConfig()
    return SimulationConfig(
        remaining_events=data.get('remaining_events', defaults.remaining_events),
        iterations=data.get('iterations', defaults.iterations),
        workers=data.get('workers', defaults.workers),
        seed=data.get('seed', defaults.seed),
        backend=data.get('backend', defaults.backend),
        progress_interval=data.get('progress_interval', defaults.progress_interval),
        scoring_preset=data.get('scoring_preset', defaults.scoring_preset),
        scoring=data.get('scoring'),
    )


def save_simulation_config(config: SimulationConfig, path: str):
    """Save simulation config to JSON file."""
    with open(path, 'w') as f:
        json.dump(asdict(config), f, indent=2)
