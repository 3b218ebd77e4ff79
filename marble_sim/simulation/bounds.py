"""
Guaranteed score and rank bounds.

Computes, without simulating, the range of final scores each competitor can
still reach and the ranks that are already locked in by those ranges.
"""

import numpy as np
from typing import List, Tuple

from ..types import Standings, Scoring


def compute_score_bounds(
    standings: Standings,
    scoring: Scoring,
    remaining_events: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the lowest and highest final score each competitor can reach.

    Every competitor can finish last (or first) in every remaining event,
    so the bounds are independent of each other.

    Args:
        standings: Current standings set
        scoring: Points per finish position
        remaining_events: Events still to run

    Returns:
        (min_scores, max_scores) tuple of [n_competitors] int64 arrays
    """
    scores = np.array([s.score for s in standings], dtype=np.int64)
    if len(scoring) == 0 or remaining_events <= 0:
        return scores.copy(), scores.copy()

    min_gain = min(scoring) * remaining_events
    max_gain = max(scoring) * remaining_events
    return scores + min_gain, scores + max_gain


def compute_rank_bounds(
    standings: Standings,
    scoring: Scoring,
    remaining_events: int
) -> List[Tuple[int, int]]:
    """
    Best and worst reachable rank (0 = 1st) for each competitor.

    Competitor j is certainly ahead of i when j's lowest final score beats
    i's highest; score ties are left open because medals decide them.
    """
    min_scores, max_scores = compute_score_bounds(standings, scoring, remaining_events)
    n = len(standings)

    bounds = []
    for i in range(n):
        surely_ahead = int(np.sum(min_scores > max_scores[i]))
        surely_behind = int(np.sum(max_scores < min_scores[i]))
        bounds.append((surely_ahead, n - 1 - surely_behind))
    return bounds


def clinched_competitors(
    standings: Standings,
    scoring: Scoring,
    remaining_events: int
) -> List[int]:
    """Indices of competitors guaranteed to finish first."""
    return [
        i for i, (best, worst) in enumerate(
            compute_rank_bounds(standings, scoring, remaining_events)
        )
        if worst == 0
    ]
