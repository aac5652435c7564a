"""Refetch detection, session refresh and the scoreboard controller."""

from scoreboard.services.sync.auth_retry import (
    AuthRetryCoordinator,
    RefreshResponse,
    RefreshState,
    decode_refresh,
)
from scoreboard.services.sync.controller import ScoreboardController, ScoreboardView
from scoreboard.services.sync.detector import ParameterChangeDetector

__all__ = [
    "AuthRetryCoordinator",
    "ParameterChangeDetector",
    "RefreshResponse",
    "RefreshState",
    "ScoreboardController",
    "ScoreboardView",
    "decode_refresh",
]
