"""
Full pipeline orchestration for rank projection.

Wires loading, validation, simulation and reporting together for
end-to-end execution.
"""

import logging
import threading
from typing import Dict, Optional

from .config import SimulationConfig
from .data.loader import load_standings
from .errors import ConfigurationError
from .report import format_distribution_lines, write_results
from .simulation.bounds import clinched_competitors, compute_rank_bounds
from .simulation.engine import check_scoring
from .simulation.parallel import simulate_rank_distribution, ProgressCallback
from .types import StandingsTable

logger = logging.getLogger(__name__)


def run_projection(
    standings_path: str,
    config: Optional[SimulationConfig] = None,
    out_dir: Optional[str] = None,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Dict:
    """
    Full projection pipeline.

    Steps:
    1. Load standings from file
    2. Resolve and check the scoring table
    3. Log guaranteed rank bounds
    4. Run the parallel simulation
    5. Format and optionally write results

    Args:
        standings_path: Path to standings file
        config: Simulation parameters (defaults to SimulationConfig())
        out_dir: If given, write CSV and JSON results here
        cancel_event: Passed through to the aggregator (thread backend)
        progress_callback: Passed through to the aggregator (thread backend)

    Returns:
        Dict with table, result, lines, clinched, outputs and metadata

    Raises:
        DataError: Malformed standings file
        ConfigurationError: Scoring/competitor mismatch or invalid parameters
    """
    config = config or SimulationConfig()

    # === LOAD DATA ===
    logger.info("Loading standings from %s...", standings_path)
    table = load_standings(standings_path)

    return run_projection_for_table(
        table, config, out_dir=out_dir,
        cancel_event=cancel_event, progress_callback=progress_callback,
        source=standings_path,
    )


def run_projection_for_table(
    table: StandingsTable,
    config: SimulationConfig,
    out_dir: Optional[str] = None,
    cancel_event: Optional[threading.Event] = None,
    progress_callback: Optional[ProgressCallback] = None,
    source: Optional[str] = None,
) -> Dict:
    """Run the pipeline on an already loaded standings table."""
    # === VALIDATE ===
    scoring = config.resolve_scoring()
    try:
        check_scoring(table.standings, scoring)
    except ConfigurationError as e:
        raise ConfigurationError(
            f"{e}. Pass a scoring table with one entry per competitor."
        ) from e

    # === BOUNDS ===
    clinched = clinched_competitors(table.standings, scoring, config.remaining_events)
    for idx in clinched:
        logger.info("%s has clinched first place", table.competitors[idx].name)
    rank_bounds = compute_rank_bounds(table.standings, scoring, config.remaining_events)
    for comp, (best, worst) in zip(table.competitors, rank_bounds):
        logger.debug("%s: reachable ranks %d-%d", comp.name, best + 1, worst + 1)

    # === SIMULATE ===
    result = simulate_rank_distribution(
        table.standings,
        scoring,
        remaining_events=config.remaining_events,
        total_iterations=config.iterations,
        worker_count=config.workers,
        seed=config.seed,
        backend=config.backend,
        progress_interval=config.progress_interval,
        cancel_event=cancel_event,
        progress_callback=progress_callback,
    )

    names = table.names
    metadata = {
        'source': source,
        'remaining_events': config.remaining_events,
        'iterations': config.iterations,
        'workers': config.workers,
        'backend': config.backend,
        'seed': config.seed,
        'scoring': list(scoring),
        'colors': {c.name: c.color for c in table.competitors if c.color},
    }

    # === EXPORT ===
    outputs = {}
    if out_dir is not None:
        outputs = write_results(out_dir, names, result, metadata)

    return {
        'table': table,
        'result': result,
        'lines': format_distribution_lines(names, result),
        'clinched': [names[i] for i in clinched],
        'rank_bounds': {name: bounds for name, bounds in zip(names, rank_bounds)},
        'outputs': outputs,
        'metadata': metadata,
    }
