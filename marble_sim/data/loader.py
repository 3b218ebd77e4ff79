"""
Standings file loader.

Parses a current-standings file into a StandingsTable. One competitor per
line: name, golds, silvers, bronzes, points and an optional display color.
Lines whose first non-blank character is '#' are comments.
"""

import io
import logging
import pandas as pd
from typing import List, Tuple

logger = logging.getLogger(__name__)

from ..errors import DataError
from ..types import Standing, Competitor, StandingsTable


STANDINGS_COLUMNS = ['name', 'golds', 'silvers', 'bronzes', 'points', 'color']
REQUIRED_COLUMNS = STANDINGS_COLUMNS[:5]
COUNT_COLUMNS = ['golds', 'silvers', 'bronzes', 'points']


def load_standings(path: str) -> StandingsTable:
    """
    Load current standings from a comma separated text file.

    Args:
        path: Path to the standings file

    Returns:
        StandingsTable with competitors and standings in file order

    Raises:
        DataError: On an empty file, wrong field count, missing fields,
            non-integer or negative counts, or duplicate competitor names
    """
    records = _read_records(path)
    if not records:
        raise DataError(f"{path}: no standings found")

    line_numbers = [line_no for line_no, _ in records]
    _check_field_counts(records, path)

    df = pd.read_csv(
        io.StringIO("\n".join(text for _, text in records)),
        header=None,
        names=STANDINGS_COLUMNS,
        index_col=False,
        skipinitialspace=True,
        skip_blank_lines=False,
        keep_default_na=False,
        na_filter=False,
        dtype=str,
    )
    df.index = line_numbers

    df = _strip_fields(df)
    _check_required_fields(df, path)
    counts = _parse_counts(df, path)
    _check_unique_names(df, path)

    competitors = [
        Competitor(name=row.name, color=row.color if row.color else None)
        for row in df.itertuples(index=False)
    ]
    standings = tuple(
        Standing(
            score=int(row.points),
            golds=int(row.golds),
            silvers=int(row.silvers),
            bronzes=int(row.bronzes),
        )
        for row in counts.itertuples(index=False)
    )

    logger.info("Loaded %d competitors from %s", len(standings), path)
    return StandingsTable(competitors=competitors, standings=standings)


def _read_records(path: str) -> List[Tuple[int, str]]:
    """Non-blank, non-comment lines with their 1-based line numbers."""
    with open(path, 'r', encoding='utf-8') as f:
        lines = f.read().splitlines()
    return [
        (line_no, line)
        for line_no, line in enumerate(lines, start=1)
        if line.strip() and not line.lstrip().startswith('#')
    ]


def _check_field_counts(records: List[Tuple[int, str]], path: str) -> None:
    for line_no, text in records:
        n_fields = len(text.split(','))
        if n_fields < len(REQUIRED_COLUMNS) or n_fields > len(STANDINGS_COLUMNS):
            raise DataError(
                f"{path}: line {line_no} has {n_fields} fields, expected "
                f"{len(REQUIRED_COLUMNS)} or {len(STANDINGS_COLUMNS)}"
            )


def _strip_fields(df: pd.DataFrame) -> pd.DataFrame:
    """Trim whitespace and turn missing fields into empty strings."""
    return df.fillna('').apply(lambda col: col.astype(str).str.strip())


def _check_required_fields(df: pd.DataFrame, path: str) -> None:
    for line_no, row in df.iterrows():
        missing = [col for col in REQUIRED_COLUMNS if row[col] == '']
        if missing:
            raise DataError(
                f"{path}: line {line_no} ({row['name'] or '?'}) is missing "
                + ", ".join(missing)
            )


def _parse_counts(df: pd.DataFrame, path: str) -> pd.DataFrame:
    """Convert medal and point columns to non-negative integers."""
    counts = pd.DataFrame(index=df.index)
    for col in COUNT_COLUMNS:
        bad = ~df[col].str.fullmatch(r'-?[0-9]+')
        if bad.any():
            line_no = bad[bad].index[0]
            raise DataError(
                f"{path}: line {line_no} ({df.at[line_no, 'name']}) has non-integer "
                f"{col} '{df.at[line_no, col]}'"
            )
        parsed = df[col].astype('int64')
        if (parsed < 0).any():
            line_no = parsed[parsed < 0].index[0]
            raise DataError(
                f"{path}: line {line_no} ({df.at[line_no, 'name']}) has negative {col}"
            )
        counts[col] = parsed
    return counts


def _check_unique_names(df: pd.DataFrame, path: str) -> None:
    duplicated: List[str] = df.loc[df['name'].duplicated(), 'name'].tolist()
    if duplicated:
        raise DataError(f"{path}: duplicate competitor names: {', '.join(duplicated)}")
