"""
Parallel rank-probability aggregation.

Fans a fixed number of workers out over the iteration budget. Each worker
owns its random stream and its tally; tallies are summed single-threaded
once every worker has finished, then normalized into per-competitor rank
distributions.
"""

import threading
import numpy as np
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, Future
from typing import Callable, List, Optional, Sequence, Literal
import logging

from ..errors import ConfigurationError, SimulationCancelled
from ..types import Standing, Standings, Scoring, SimulationResult
from .engine import project_season, resolve_ranks, check_scoring

logger = logging.getLogger(__name__)


Backend = Literal["thread", "process"]

# progress_callback(worker_index, iterations_done, iterations_assigned)
ProgressCallback = Callable[[int, int, int], None]

DEFAULT_PROGRESS_INTERVAL = 10_000


def split_iterations(total_iterations: int, worker_count: int) -> List[int]:
    """
    Split the iteration budget across workers.

    Every worker gets total // workers; worker 0 also takes the remainder,
    so the shares always sum to total_iterations.
    """
    if worker_count < 1:
        raise ConfigurationError(f"worker_count must be >= 1, got {worker_count}")
    if total_iterations < 0:
        raise ConfigurationError(f"total_iterations must be >= 0, got {total_iterations}")

    per_worker = total_iterations // worker_count
    first = total_iterations - (worker_count - 1) * per_worker
    return [first] + [per_worker] * (worker_count - 1)


def run_worker(
    worker_index: int,
    standings: Standings,
    scoring: Scoring,
    remaining_events: int,
    iterations: int,
    seed_seq: np.random.SeedSequence,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """
    Run one worker's share of simulated seasons.

    Module level so the process backend can pickle it.

    Returns:
        tally: [n_competitors, n_ranks] int64, tally[i, r] = seasons in which
            competitor i finished at rank r
    """
    rng = np.random.default_rng(seed_seq)
    n = len(standings)
    tally = np.zeros((n, n), dtype=np.int64)
    ranks = np.arange(n)

    for i in range(1, iterations + 1):
        # Checked before the iteration starts; a partial season is never counted
        if cancel_event is not None and cancel_event.is_set():
            raise SimulationCancelled(
                f"Worker {worker_index + 1} cancelled after {i - 1}/{iterations} iterations"
            )

        final = project_season(standings, scoring, remaining_events, rng)
        order = resolve_ranks(final)
        tally[order, ranks] += 1

        if i % progress_interval == 0:
            logger.info("Worker %d: iteration %d/%d", worker_index + 1, i, iterations)
            if progress_callback is not None:
                progress_callback(worker_index, i, iterations)

    return tally


def merge_tallies(tallies: Sequence[np.ndarray]) -> np.ndarray:
    """Element-wise sum of per-worker tallies."""
    if not tallies:
        raise ConfigurationError("No tallies to merge")

    shape = tallies[0].shape
    for tally in tallies:
        if tally.shape != shape:
            raise ValueError(f"Tally shape {tally.shape} does not match {shape}")
        if not np.issubdtype(tally.dtype, np.integer):
            raise ValueError(f"Tally dtype {tally.dtype} is not an integer type")

    combined = np.zeros(shape, dtype=np.int64)
    for tally in tallies:
        combined += tally
    return combined


def normalize_tally(counts: np.ndarray, total_iterations: int) -> np.ndarray:
    """counts[i, r] / total_iterations as float64."""
    if total_iterations < 1:
        raise ConfigurationError(f"total_iterations must be >= 1, got {total_iterations}")
    return counts.astype(np.float64) / total_iterations


def simulate_rank_distribution(
    standings: Sequence[Standing],
    scoring: Sequence[int],
    remaining_events: int,
    total_iterations: int,
    worker_count: int,
    seed: Optional[int] = None,
    backend: Backend = "thread",
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> SimulationResult:
    """
    Estimate each competitor's final-rank distribution.

    Args:
        standings: Current standings, one per competitor
        scoring: Points per finish position, one per competitor
        remaining_events: Events left in the season (>= 0)
        total_iterations: Seasons to simulate across all workers (>= 1)
        worker_count: Number of parallel workers (>= 1)
        seed: Base seed. Worker streams are spawned from
              SeedSequence(seed), so a fixed seed and worker count reproduce
              the same counts. None draws fresh entropy.
        backend: "thread" (ThreadPoolExecutor) or "process"
                 (ProcessPoolExecutor, runs workers outside the GIL)
        progress_interval: Log progress every N iterations per worker
        cancel_event: Thread backend only. When set, workers stop at the
                      next iteration boundary and SimulationCancelled is raised.
        progress_callback: Thread backend only. Called at each progress step.

    Returns:
        SimulationResult with merged counts and probabilities

    Raises:
        ConfigurationError: Before any work, on invalid parameters
        SimulationCancelled: If cancel_event was set
    """
    standings = tuple(standings)
    scoring = tuple(int(p) for p in scoring)

    check_scoring(standings, scoring)
    if total_iterations < 1:
        raise ConfigurationError(f"total_iterations must be >= 1, got {total_iterations}")
    if worker_count < 1:
        raise ConfigurationError(f"worker_count must be >= 1, got {worker_count}")
    if remaining_events < 0:
        raise ConfigurationError(f"remaining_events must be >= 0, got {remaining_events}")
    if progress_interval < 1:
        raise ConfigurationError(f"progress_interval must be >= 1, got {progress_interval}")
    if backend not in ("thread", "process"):
        raise ConfigurationError(f"Unknown backend '{backend}'")
    if backend == "process" and (cancel_event is not None or progress_callback is not None):
        raise ConfigurationError(
            "cancel_event and progress_callback require the thread backend"
        )

    worker_iterations = split_iterations(total_iterations, worker_count)
    seed_seqs = np.random.SeedSequence(seed).spawn(worker_count)

    logger.info(
        "Simulating %d seasons (%d remaining events, %d competitors) on %d %s workers",
        total_iterations, remaining_events, len(standings), worker_count, backend
    )

    executor_cls = ThreadPoolExecutor if backend == "thread" else ProcessPoolExecutor
    with executor_cls(max_workers=worker_count) as executor:
        futures: List[Future] = []
        for worker_index, iterations in enumerate(worker_iterations):
            if iterations == 0:
                continue
            futures.append(executor.submit(
                run_worker,
                worker_index,
                standings,
                scoring,
                remaining_events,
                iterations,
                seed_seqs[worker_index],
                progress_interval,
                cancel_event,
                progress_callback,
            ))

        # One result slot per worker; result() re-raises worker failures
        tallies = [future.result() for future in futures]

    logger.info("Approximation done!")

    counts = merge_tallies(tallies)
    return SimulationResult(
        counts=counts,
        probabilities=normalize_tally(counts, total_iterations),
        total_iterations=total_iterations,
        worker_iterations=worker_iterations,
        seed=seed,
    )


def simulate(
    standings: Sequence[Standing],
    scoring: Sequence[int],
    remaining_events: int,
    total_iterations: int,
    worker_count: int,
    **kwargs,
) -> List[np.ndarray]:
    """
    Per-competitor rank distributions (index 0 = 1st place).

    Thin wrapper over simulate_rank_distribution; keyword arguments are
    passed through.
    """
    result = simulate_rank_distribution(
        standings, scoring, remaining_events, total_iterations, worker_count, **kwargs
    )
    return result.distributions
