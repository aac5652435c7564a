"""Panel state - the panels' selections and last results on disk."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from scoreboard.services.fetch import DecodeError
from scoreboard.services.scores import (
    Challenge,
    FilterMode,
    QueryParameters,
    Score,
    SortColumn,
    encode_scores,
    parse_scores,
)

_log = logging.getLogger(__name__)

DEFAULT_STATE_PATH = Path.home() / ".scoreboard" / "panel_state.json"
DEFAULT_INFO_STATE_PATH = Path.home() / ".scoreboard" / "challenge_info.json"

NO_INSTRUCTIONS = "None"

E = TypeVar("E", bound=Enum)


@dataclass
class PanelState:
    """Serializable fields of the scoreboard panel.

    Fetch handles, refresh state and the active parameters are never stored,
    so a restored panel always refetches when it opens.
    """

    selected: QueryParameters = field(default_factory=QueryParameters)
    scores: list[Score] | None = None


@dataclass
class ChallengeInfoState:
    """Serializable fields of the challenge info panel."""

    selected: Challenge = Challenge.NONE
    instructions: str = NO_INSTRUCTIONS


def _enum_or_default(enum_cls: type[E], raw: Any, default: E) -> E:
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _params_from_dict(data: Any) -> QueryParameters:
    if not isinstance(data, dict):
        return QueryParameters()
    defaults = QueryParameters()
    return QueryParameters(
        challenge=_enum_or_default(Challenge, data.get("challenge"), defaults.challenge),
        filter_mode=_enum_or_default(FilterMode, data.get("filter"), defaults.filter_mode),
        sort_column=_enum_or_default(SortColumn, data.get("sort_column"), defaults.sort_column),
    )


def _params_to_dict(params: QueryParameters) -> dict[str, str]:
    return {
        "challenge": params.challenge.value,
        "filter": params.filter_mode.value,
        "sort_column": params.sort_column.value,
    }


def _read_json_object(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        _log.warning("Ignoring unreadable panel state %s: %s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def _write_json_object(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")


class PanelStateManager:
    """Manages panel state persistence to a JSON file."""

    def __init__(self, state_path: Path = DEFAULT_STATE_PATH) -> None:
        self._path = state_path

    def load(self) -> PanelState:
        """Load state from disk. Returns defaults if the file is missing or bad."""
        data = _read_json_object(self._path)
        if data is None:
            return PanelState()

        scores = data.get("scores")
        if scores is not None:
            try:
                scores = parse_scores(scores)
            except DecodeError as exc:
                _log.warning("Dropping stored scores: %s", exc)
                scores = None

        return PanelState(selected=_params_from_dict(data.get("selected")), scores=scores)

    def save(self, state: PanelState) -> None:
        """Save state to disk."""
        _write_json_object(
            self._path,
            {
                "selected": _params_to_dict(state.selected),
                "scores": encode_scores(state.scores) if state.scores is not None else None,
            },
        )


class ChallengeInfoStateManager:
    """Manages challenge info panel persistence to a JSON file."""

    def __init__(self, state_path: Path = DEFAULT_INFO_STATE_PATH) -> None:
        self._path = state_path

    def load(self) -> ChallengeInfoState:
        """Load state from disk. Returns defaults if the file is missing or bad."""
        data = _read_json_object(self._path)
        if data is None:
            return ChallengeInfoState()

        instructions = data.get("instructions")
        if not isinstance(instructions, str):
            instructions = NO_INSTRUCTIONS
        return ChallengeInfoState(
            selected=_enum_or_default(Challenge, data.get("selected"), Challenge.NONE),
            instructions=instructions,
        )

    def save(self, state: ChallengeInfoState) -> None:
        """Save state to disk."""
        _write_json_object(
            self._path,
            {"selected": state.selected.value, "instructions": state.instructions},
        )
