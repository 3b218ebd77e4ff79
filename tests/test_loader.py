"""Tests for the standings file loader."""

import pytest

from marble_sim.data.loader import load_standings
from marble_sim.errors import DataError
from marble_sim.types import Standing


def _write(tmp_path, text):
    path = tmp_path / "standings.txt"
    path.write_text(text)
    return str(path)


class TestLoadStandings:
    def test_parses_records_in_order(self, standings_file):
        table = load_standings(str(standings_file))
        assert table.names == ["Savage Speeders", "O'rangers", "Raspberry Racers"]
        assert table.standings[0] == Standing(score=70, golds=2, silvers=1, bronzes=0)
        assert table.standings[2] == Standing(score=55, golds=0, silvers=1, bronzes=2)
        assert len(table) == 3

    def test_optional_color(self, standings_file):
        table = load_standings(str(standings_file))
        assert table.competitors[0].color is None
        assert table.competitors[1].color == "orange"

    def test_empty_file(self, tmp_path):
        with pytest.raises(DataError, match="no standings"):
            load_standings(_write(tmp_path, ""))

    def test_only_comments(self, tmp_path):
        with pytest.raises(DataError):
            load_standings(_write(tmp_path, "# header\n# nothing else\n"))

    def test_too_few_fields(self, tmp_path):
        with pytest.raises(DataError, match="line 2 has 4 fields"):
            load_standings(_write(tmp_path, "Team A, 1, 0, 0, 10\nTeam B, 1, 0, 0\n"))

    def test_empty_field(self, tmp_path):
        with pytest.raises(DataError, match="missing points"):
            load_standings(_write(tmp_path, "Team A, 1, 0, 0, 10\nTeam B, 1, 0, 0, \n"))

    def test_error_names_line_number(self, tmp_path):
        text = "# comment\nTeam A, 0, 0, 0, 1\n\nTeam B, 0, 0, 0, oops\n"
        with pytest.raises(DataError, match="line 4"):
            load_standings(_write(tmp_path, text))

    def test_non_integer(self, tmp_path):
        with pytest.raises(DataError, match="non-integer golds"):
            load_standings(_write(tmp_path, "Team A, x, 0, 0, 10\n"))

    def test_fractional_points(self, tmp_path):
        with pytest.raises(DataError, match="non-integer points"):
            load_standings(_write(tmp_path, "Team A, 0, 0, 0, 10.5\n"))

    def test_negative(self, tmp_path):
        with pytest.raises(DataError, match="negative bronzes"):
            load_standings(_write(tmp_path, "Team A, 0, 0, -1, 10\n"))

    def test_duplicate_names(self, tmp_path):
        with pytest.raises(DataError, match="duplicate"):
            load_standings(_write(tmp_path, "Team A, 0, 0, 0, 1\nTeam A, 0, 0, 0, 2\n"))

    def test_too_many_fields(self, tmp_path):
        with pytest.raises(DataError, match="7 fields"):
            load_standings(_write(tmp_path, "Team A, 0, 0, 0, 1, red, extra\n"))

    def test_names_that_look_like_missing_values(self, tmp_path):
        text = "NA, 0, 0, 0, 5\nNone, 0, 0, 0, 3\nnull, 0, 0, 0, 2\nN/A, 0, 0, 0, 1\nnan, 0, 0, 0, 0\n"
        table = load_standings(_write(tmp_path, text))
        assert table.names == ["NA", "None", "null", "N/A", "nan"]
        assert [s.score for s in table.standings] == [5, 3, 2, 1, 0]

    def test_color_that_looks_like_missing_value(self, tmp_path):
        table = load_standings(_write(tmp_path, "Team A, 0, 0, 0, 1, NA\n"))
        assert table.competitors[0].color == "NA"

    def test_decimal_count_rejected(self, tmp_path):
        with pytest.raises(DataError, match="non-integer golds '1.0'"):
            load_standings(_write(tmp_path, "Team A, 1.0, 0, 0, 1\n"))

    def test_exponent_count_rejected(self, tmp_path):
        with pytest.raises(DataError, match="non-integer points '1e1'"):
            load_standings(_write(tmp_path, "Team A, 1, 0, 0, 1e1\n"))
