"""
Result formatting and export.

Turns a SimulationResult into console lines, a pandas table and files on
disk. Competitor names come from the loaded standings table; the engine
itself only knows indices.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from .types import SimulationResult

logger = logging.getLogger(__name__)


CSV_FILENAME = "rank_probabilities.csv"
JSON_FILENAME = "rank_probabilities.json"


def format_distribution_lines(names: Sequence[str], result: SimulationResult) -> List[str]:
    """One line per competitor: 'Name:p1%, p2%, ...' with six decimals."""
    lines = []
    for name, probabilities in zip(names, result.distributions):
        cells = ", ".join(f"{100 * p:.6f}%" for p in probabilities)
        lines.append(f"{name}:{cells}")
    return lines


def to_dataframe(names: Sequence[str], result: SimulationResult) -> pd.DataFrame:
    """
    Rank probability table.

    Rows are competitors in standings order, columns rank_1 .. rank_N.
    """
    n_ranks = result.probabilities.shape[1]
    return pd.DataFrame(
        result.probabilities,
        index=pd.Index(list(names), name='competitor'),
        columns=[f"rank_{r + 1}" for r in range(n_ranks)],
    )


def expected_ranks(result: SimulationResult) -> np.ndarray:
    """Mean final rank (1-based) per competitor."""
    ranks = np.arange(1, result.probabilities.shape[1] + 1)
    return result.probabilities @ ranks


def format_summary(names: Sequence[str], result: SimulationResult) -> str:
    """Readable summary: most likely rank, P(1st) and mean rank per competitor."""
    lines = []
    lines.append("RANK PROBABILITIES")
    lines.append("=" * 60)
    lines.append(f"  Iterations: {result.total_iterations}")
    lines.append(f"  Per worker: {', '.join(str(n) for n in result.worker_iterations)}")
    lines.append("")

    means = expected_ranks(result)
    for i, name in enumerate(names):
        dist = result.probabilities[i]
        mode = int(np.argmax(dist))
        lines.append(
            f"  {name:<25} P(1st) {dist[0]:7.2%} | "
            f"most likely {mode + 1} ({dist[mode]:.1%}) | mean {means[i]:.2f}"
        )
    return "\n".join(lines)


def write_results(
    out_dir: str,
    names: Sequence[str],
    result: SimulationResult,
    metadata: Optional[Dict] = None,
) -> Dict[str, str]:
    """
    Write the CSV table and JSON summary into out_dir.

    Returns:
        Dict with 'csv' and 'json' output paths
    """
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    csv_path = out_path / CSV_FILENAME
    to_dataframe(names, result).to_csv(csv_path)

    json_path = out_path / JSON_FILENAME
    output_data = {
        'competitors': list(names),
        'result': result.to_dict(),
        'metadata': metadata or {},
    }
    with open(json_path, 'w') as f:
        json.dump(output_data, f, indent=2, default=str)

    logger.info("Wrote %s and %s", csv_path, json_path)
    return {'csv': str(csv_path), 'json': str(json_path)}
