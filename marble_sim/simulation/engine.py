"""
Monte Carlo simulation engine for season outcomes.

One simulated event is a uniformly random finish order. A season projection
applies the remaining events in sequence to an immutable standings set, and
the rank resolver turns the final standings into a finishing order.
"""

import numpy as np
from typing import List, Optional
import logging

from ..errors import ConfigurationError
from ..types import Standings, Scoring

logger = logging.getLogger(__name__)


def simulate_event(
    n_competitors: int,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Draw one event outcome.

    Every one of the n! finish orders is equally likely.

    Args:
        n_competitors: Number of competitors in the event
        rng: Worker-owned Generator. Never share one across threads.

    Returns:
        positions: [n_competitors] int, positions[i] = finish position (1-based)
            of competitor i
    """
    if rng is None:
        rng = np.random.default_rng()
    return rng.permutation(n_competitors) + 1


def apply_event(
    standings: Standings,
    positions: np.ndarray,
    scoring: Scoring
) -> Standings:
    """
    Return a new standings set with one event's result applied.

    Competitor i gains scoring[positions[i] - 1] points and a gold, silver
    or bronze for positions 1, 2 or 3. The input is not modified.
    """
    return tuple(
        standing.updated(int(position), scoring)
        for standing, position in zip(standings, positions)
    )


def project_season(
    standings: Standings,
    scoring: Scoring,
    remaining_events: int,
    rng: Optional[np.random.Generator] = None
) -> Standings:
    """
    Simulate the remaining events of a season.

    Events are applied strictly in order, each one starting from the
    previous event's standings. With remaining_events == 0 the input is
    returned unchanged.

    Args:
        standings: Starting standings set
        scoring: Points per finish position, len(scoring) == len(standings)
        remaining_events: Number of events still to run (>= 0)
        rng: Worker-owned Generator

    Returns:
        Final standings set
    """
    if rng is None:
        rng = np.random.default_rng()

    n_competitors = len(standings)
    for _ in range(remaining_events):
        positions = simulate_event(n_competitors, rng)
        standings = apply_event(standings, positions, scoring)
    return standings


def resolve_ranks(standings: Standings) -> List[int]:
    """
    Order competitors best to worst.

    Higher score first, then higher medal total. Anything still tied keeps
    input index order, so the result is deterministic for a given standings
    set.

    Returns:
        order: order[r] = index of the competitor finishing at rank r (0 = 1st)
    """
    return sorted(
        range(len(standings)),
        key=lambda i: (-standings[i].score, -standings[i].medal_total)
    )


def check_scoring(standings: Standings, scoring: Scoring) -> None:
    """Raise ConfigurationError unless there is one scoring slot per competitor."""
    if len(standings) < 1:
        raise ConfigurationError("At least one competitor is required")
    if len(scoring) != len(standings):
        raise ConfigurationError(
            f"Scoring table has {len(scoring)} positions but there are "
            f"{len(standings)} competitors"
        )
