"""Shared fixtures for the simulator test suite."""

import pytest

from marble_sim.types import Standing


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def two_even():
    """Two competitors with nothing scored yet."""
    return (Standing(score=0), Standing(score=0))


@pytest.fixture
def runaway_leader():
    """Leader at 100 points; the others can gain at most 3 per event."""
    return (
        Standing(score=100, golds=4),
        Standing(score=10, silvers=2),
        Standing(score=5, bronzes=1),
    )


@pytest.fixture
def standings_file(tmp_path):
    path = tmp_path / "standings.txt"
    path.write_text(
        "# name, golds, silvers, bronzes, points\n"
        "Savage Speeders, 2, 1, 0, 70\n"
        "O'rangers, 1, 1, 1, 62, orange\n"
        "\n"
        "  # inline comment line\n"
        "Raspberry Racers, 0, 1, 2, 55\n"
    )
    return path
