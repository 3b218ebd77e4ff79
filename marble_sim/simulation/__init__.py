"""Monte Carlo simulation engine."""

from .engine import simulate_event, apply_event, project_season, resolve_ranks
from .parallel import simulate, simulate_rank_distribution, split_iterations
from .bounds import compute_score_bounds, compute_rank_bounds, clinched_competitors

__all__ = [
    "simulate_event",
    "apply_event",
    "project_season",
    "resolve_ranks",
    "simulate",
    "simulate_rank_distribution",
    "split_iterations",
    "compute_score_bounds",
    "compute_rank_bounds",
    "clinched_competitors",
]
