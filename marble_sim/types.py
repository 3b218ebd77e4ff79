"""
Core data structures for the Marble standings simulator.

Competitors are identified positionally: index i in a standings set,
a scoring table slot, a tally row and a result distribution all refer
to the same competitor.
"""

from dataclasses import dataclass, field, replace
from typing import List, Tuple, Optional
import numpy as np


# Finish positions that award a medal
GOLD_POSITION = 1
SILVER_POSITION = 2
BRONZE_POSITION = 3


@dataclass(frozen=True)
class Standing:
    """
    A competitor's cumulative score and medal counts.

    Attributes:
        score: Points accumulated so far
        golds: Number of first places
        silvers: Number of second places
        bronzes: Number of third places
    """
    score: int
    golds: int = 0
    silvers: int = 0
    bronzes: int = 0

    @property
    def medal_total(self) -> int:
        return self.golds + self.silvers + self.bronzes

    def updated(self, position: int, scoring: 'Scoring') -> 'Standing':
        """Return the standing after finishing an event at `position` (1-based)."""
        return replace(
            self,
            score=self.score + scoring[position - 1],
            golds=self.golds + (1 if position == GOLD_POSITION else 0),
            silvers=self.silvers + (1 if position == SILVER_POSITION else 0),
            bronzes=self.bronzes + (1 if position == BRONZE_POSITION else 0),
        )


# Immutable standings set, one entry per competitor index
Standings = Tuple[Standing, ...]

# scoring[i] = points for finishing at position i + 1
Scoring = Tuple[int, ...]


@dataclass(frozen=True)
class Competitor:
    """Identity metadata carried alongside a standing; unused by the engine."""
    name: str
    color: Optional[str] = None


@dataclass
class StandingsTable:
    """
    Loaded standings file: competitors and standings share index order.
    """
    competitors: List[Competitor]
    standings: Standings

    def __len__(self) -> int:
        return len(self.standings)

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.competitors]


@dataclass
class SimulationResult:
    """
    Merged output of the parallel aggregator.

    Attributes:
        counts: [n_competitors, n_ranks] int64 combined tally
        probabilities: [n_competitors, n_ranks] counts / total_iterations
        total_iterations: Number of simulated seasons
        worker_iterations: Iterations run by each worker, summing to the total
        seed: Base seed used for the worker streams (None if fresh entropy)
    """
    counts: np.ndarray
    probabilities: np.ndarray
    total_iterations: int
    worker_iterations: List[int] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def n_competitors(self) -> int:
        return self.counts.shape[0]

    @property
    def distributions(self) -> List[np.ndarray]:
        """Per-competitor rank distributions (index 0 = 1st place)."""
        return [self.probabilities[i] for i in range(self.n_competitors)]

    def to_dict(self) -> dict:
        """Convert to serializable dict."""
        return {
            'total_iterations': self.total_iterations,
            'worker_iterations': list(self.worker_iterations),
            'seed': self.seed,
            'counts': self.counts.tolist(),
            'probabilities': self.probabilities.tolist(),
        }
