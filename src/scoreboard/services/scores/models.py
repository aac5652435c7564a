"""Leaderboard data types and their JSON wire form."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

import httpx

from scoreboard.services.fetch import DecodeError, decode_json

MAX_TIME_NS = 2**64 - 1


class Challenge(Enum):
    """Known challenges. The value is the path segment the backend expects."""

    NONE = "None"
    HELLO_WORLD = "HelloWorld"
    FIZZ_BUZZ = "FizzBuzz"
    PRIME_SIEVE = "PrimeSieve"
    MANDELBROT = "Mandelbrot"

    def __str__(self) -> str:
        return self.value


class FilterMode(Enum):
    ALL = "all"
    UNIQUE_PLAYERS = "unique_players"
    UNIQUE_LANGUAGE = "unique_language"


FILTER_LABELS: dict[FilterMode, str] = {
    FilterMode.ALL: "All",
    FilterMode.UNIQUE_PLAYERS: "Unique Players",
    FilterMode.UNIQUE_LANGUAGE: "Unique Languages",
}


class SortColumn(Enum):
    """Columns a leaderboard can be ordered by. ``SortColumn("time")`` parses."""

    TIME = "time"
    NAME = "name"
    LANGUAGE = "language"
    COMMAND = "command"


@dataclass(frozen=True)
class QueryParameters:
    """What the panel asks the backend for and how it presents the answer."""

    challenge: Challenge = Challenge.NONE
    filter_mode: FilterMode = FilterMode.ALL
    sort_column: SortColumn = SortColumn.TIME


@dataclass(frozen=True)
class Score:
    """A single leaderboard entry."""

    name: str
    language: str
    time_ns: int
    command: str

    @classmethod
    def from_dict(cls, data: Any) -> "Score":
        if not isinstance(data, dict):
            raise DecodeError(f"Score must be an object, got {type(data).__name__}")
        try:
            name, language, time_ns, command = (
                data["name"],
                data["language"],
                data["time_ns"],
                data["command"],
            )
        except KeyError as exc:
            raise DecodeError(f"Score is missing field {exc.args[0]!r}") from exc

        for field_name, value in (("name", name), ("language", language), ("command", command)):
            if not isinstance(value, str):
                raise DecodeError(f"Score field {field_name!r} must be a string")
        # bool is an int subclass; reject it explicitly
        if isinstance(time_ns, bool) or not isinstance(time_ns, int):
            raise DecodeError("Score field 'time_ns' must be an integer")
        if not 0 <= time_ns <= MAX_TIME_NS:
            raise DecodeError(f"Score field 'time_ns' out of range: {time_ns}")

        return cls(name=name, language=language, time_ns=time_ns, command=command)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_scores(payload: Any) -> list[Score]:
    """Build scores from an already-parsed JSON array."""
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a list of scores, got {type(payload).__name__}")
    return [Score.from_dict(item) for item in payload]


def decode_scores(response: httpx.Response) -> list[Score]:
    return parse_scores(decode_json(response))


def encode_scores(scores: list[Score]) -> list[dict[str, Any]]:
    return [score.to_dict() for score in scores]
