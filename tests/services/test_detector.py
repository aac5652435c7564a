"""Tests for the parameter change detector."""

from scoreboard.services.scores import Challenge, FilterMode, QueryParameters, SortColumn
from scoreboard.services.sync import ParameterChangeDetector


class TestParameterChangeDetector:
    """Tests for deciding when a refetch is owed."""

    def test_first_check_is_stale(self) -> None:
        detector = ParameterChangeDetector()

        assert detector.check(QueryParameters()) is True
        assert detector.active == QueryParameters()

    def test_unchanged_parameters_are_not_stale(self) -> None:
        detector = ParameterChangeDetector()
        detector.check(QueryParameters())

        assert detector.check(QueryParameters()) is False
        assert detector.check(QueryParameters()) is False

    def test_any_field_change_is_stale(self) -> None:
        detector = ParameterChangeDetector(QueryParameters())

        assert detector.check(QueryParameters(challenge=Challenge.FIZZ_BUZZ)) is True
        assert detector.check(
            QueryParameters(challenge=Challenge.FIZZ_BUZZ, filter_mode=FilterMode.UNIQUE_PLAYERS)
        ) is True
        assert detector.check(
            QueryParameters(
                challenge=Challenge.FIZZ_BUZZ,
                filter_mode=FilterMode.UNIQUE_PLAYERS,
                sort_column=SortColumn.NAME,
            )
        ) is True

    def test_change_is_adopted(self) -> None:
        detector = ParameterChangeDetector(QueryParameters())
        selected = QueryParameters(challenge=Challenge.MANDELBROT)

        detector.check(selected)

        assert detector.active == selected
        assert detector.check(selected) is False

    def test_force_stale_bypasses_comparison(self) -> None:
        detector = ParameterChangeDetector()
        detector.check(QueryParameters())

        detector.force_stale()

        assert detector.active is None
        assert detector.check(QueryParameters()) is True
