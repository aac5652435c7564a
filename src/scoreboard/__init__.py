"""Scoreboard - terminal leaderboard panel."""

__version__ = "0.1.0"
