"""Leaderboard scores: data types, wire codec and the filter/sort pipeline."""

from scoreboard.services.scores.models import (
    FILTER_LABELS,
    Challenge,
    FilterMode,
    QueryParameters,
    Score,
    SortColumn,
    decode_scores,
    encode_scores,
    parse_scores,
)
from scoreboard.services.scores.pipeline import (
    ScoreRow,
    build_rows,
    filter_scores,
    format_time_ns,
)

__all__ = [
    "FILTER_LABELS",
    "Challenge",
    "FilterMode",
    "QueryParameters",
    "Score",
    "ScoreRow",
    "SortColumn",
    "build_rows",
    "decode_scores",
    "encode_scores",
    "filter_scores",
    "format_time_ns",
    "parse_scores",
]
