"""Tests for the score filter/sort pipeline."""

import pytest

from scoreboard.services.scores import (
    FilterMode,
    Score,
    ScoreRow,
    SortColumn,
    build_rows,
    filter_scores,
    format_time_ns,
)


def _score(name: str, time_ns: int, language: str = "rust", command: str = "bin") -> Score:
    return Score(name=name, language=language, time_ns=time_ns, command=command)


def _summary(scores: list[Score]) -> list[tuple[str, int]]:
    return [(s.name, s.time_ns) for s in scores]


class TestSorting:
    """Tests for ordering by the selected column."""

    def test_sort_is_stable(self) -> None:
        """Equal times keep their fetched order."""
        scores = [_score("b", 5), _score("a", 5), _score("c", 3)]

        result = filter_scores(scores, FilterMode.ALL, SortColumn.TIME)

        assert _summary(result) == [("c", 3), ("b", 5), ("a", 5)]

    @pytest.mark.parametrize(
        ("column", "expected"),
        [
            pytest.param(SortColumn.NAME, ["ann", "bea", "cid"], id="name"),
            pytest.param(SortColumn.LANGUAGE, ["bea", "cid", "ann"], id="language"),
            pytest.param(SortColumn.COMMAND, ["cid", "ann", "bea"], id="command"),
        ],
    )
    def test_sort_by_other_columns(self, column: SortColumn, expected: list[str]) -> None:
        scores = [
            Score(name="cid", language="go", time_ns=1, command="a"),
            Score(name="ann", language="zig", time_ns=2, command="b"),
            Score(name="bea", language="c", time_ns=3, command="c"),
        ]

        result = filter_scores(scores, FilterMode.ALL, column)

        assert [s.name for s in result] == expected

    def test_input_is_not_modified(self) -> None:
        scores = [_score("b", 5), _score("a", 1)]

        filter_scores(scores, FilterMode.UNIQUE_PLAYERS, SortColumn.TIME)

        assert _summary(scores) == [("b", 5), ("a", 1)]


class TestUniqueFilters:
    """Tests for the unique-players and unique-language filters."""

    def test_unique_players_keeps_best_time(self) -> None:
        scores = [_score("a", 5), _score("a", 2), _score("b", 9)]

        result = filter_scores(scores, FilterMode.UNIQUE_PLAYERS, SortColumn.TIME)

        assert _summary(result) == [("a", 2), ("b", 9)]

    def test_unique_language_dedups_by_language(self) -> None:
        scores = [
            _score("a", 5, language="rust"),
            _score("b", 2, language="rust"),
            _score("a", 7, language="python"),
        ]

        result = filter_scores(scores, FilterMode.UNIQUE_LANGUAGE, SortColumn.TIME)

        assert [(s.name, s.language) for s in result] == [("b", "rust"), ("a", "python")]

    def test_no_filter_keeps_duplicates(self) -> None:
        scores = [_score("a", 5), _score("a", 2)]

        result = filter_scores(scores, FilterMode.ALL, SortColumn.TIME)

        assert len(result) == 2


class TestFormatTime:
    """Tests for nanosecond formatting."""

    @pytest.mark.parametrize(
        ("time_ns", "expected"),
        [
            pytest.param(0, "0 ns", id="zero"),
            pytest.param(999, "999 ns", id="nanoseconds"),
            pytest.param(1_500, "1.50 µs", id="microseconds"),
            pytest.param(1_500_000, "1.50 ms", id="milliseconds"),
            pytest.param(2_000_000_000, "2.00 s", id="seconds"),
        ],
    )
    def test_units(self, time_ns: int, expected: str) -> None:
        assert format_time_ns(time_ns) == expected


class TestBuildRows:
    """Tests for display row construction."""

    def test_rows_are_zero_ranked(self, sample_scores: list[Score]) -> None:
        rows = build_rows(sample_scores, FilterMode.UNIQUE_PLAYERS, SortColumn.TIME)

        assert rows == [
            ScoreRow(rank=0, time="900.00 µs", name="alice", language="rust", binary="fast.out"),
            ScoreRow(rank=1, time="3.05 ms", name="bob", language="python", binary="main.py"),
        ]

    def test_empty_input(self) -> None:
        assert build_rows([], FilterMode.ALL, SortColumn.TIME) == []
