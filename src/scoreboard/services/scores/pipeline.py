"""Filter/sort pipeline turning fetched scores into display rows.

Pure functions; cheap enough to run on every render pass at leaderboard
sizes.
"""

from collections.abc import Callable, Iterable
from typing import NamedTuple

from scoreboard.services.scores.models import FilterMode, Score, SortColumn

_SORT_KEYS: dict[SortColumn, Callable[[Score], object]] = {
    SortColumn.TIME: lambda s: s.time_ns,
    SortColumn.NAME: lambda s: s.name,
    SortColumn.LANGUAGE: lambda s: s.language,
    SortColumn.COMMAND: lambda s: s.command,
}

_DEDUP_KEYS: dict[FilterMode, Callable[[Score], str]] = {
    FilterMode.UNIQUE_PLAYERS: lambda s: s.name,
    FilterMode.UNIQUE_LANGUAGE: lambda s: s.language,
}

_TIME_UNITS = (
    (1_000_000_000, "s"),
    (1_000_000, "ms"),
    (1_000, "µs"),
)


class ScoreRow(NamedTuple):
    """One table row: 0-indexed rank plus formatted cells."""

    rank: int
    time: str
    name: str
    language: str
    binary: str


def format_time_ns(time_ns: int) -> str:
    """Render nanoseconds in the largest unit that keeps the value >= 1.

    Examples:
        512            -> "512 ns"
        1_500_000      -> "1.50 ms"
        2_000_000_000  -> "2.00 s"
    """
    for factor, unit in _TIME_UNITS:
        if time_ns >= factor:
            return f"{time_ns / factor:.2f} {unit}"
    return f"{time_ns} ns"


def _first_by(scores: Iterable[Score], key: Callable[[Score], str]) -> list[Score]:
    seen: set[str] = set()
    kept: list[Score] = []
    for score in scores:
        marker = key(score)
        if marker in seen:
            continue
        seen.add(marker)
        kept.append(score)
    return kept


def filter_scores(
    scores: Iterable[Score],
    filter_mode: FilterMode,
    sort_column: SortColumn,
) -> list[Score]:
    """Sort ascending by ``sort_column``, then apply the filter.

    The sort is stable, so equal keys keep their fetched order. The unique
    filters keep the first entry per player (or language) after sorting,
    which for the time column is that player's best run.
    """
    ordered = sorted(scores, key=_SORT_KEYS[sort_column])
    dedup_key = _DEDUP_KEYS.get(filter_mode)
    if dedup_key is None:
        return ordered
    return _first_by(ordered, dedup_key)


def build_rows(
    scores: Iterable[Score],
    filter_mode: FilterMode,
    sort_column: SortColumn,
) -> list[ScoreRow]:
    return [
        ScoreRow(
            rank=rank,
            time=format_time_ns(score.time_ns),
            name=score.name,
            language=score.language,
            binary=score.command,
        )
        for rank, score in enumerate(filter_scores(scores, filter_mode, sort_column))
    ]
