"""Config services for backend settings and panel state."""

from scoreboard.services.config.panel_state import (
    NO_INSTRUCTIONS,
    ChallengeInfoState,
    ChallengeInfoStateManager,
    PanelState,
    PanelStateManager,
)
from scoreboard.services.config.settings import ClientSettings, normalize_base_url

__all__ = [
    "NO_INSTRUCTIONS",
    "ChallengeInfoState",
    "ChallengeInfoStateManager",
    "ClientSettings",
    "PanelState",
    "PanelStateManager",
    "normalize_base_url",
]
