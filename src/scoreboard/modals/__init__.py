"""Modal screens for the scoreboard app."""

from scoreboard.modals.challenge_info_modal import ChallengeInfoModal
from scoreboard.modals.scoreboard_modal import ScoreboardModal

__all__ = ["ChallengeInfoModal", "ScoreboardModal"]
