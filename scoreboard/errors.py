"""Error types raised by the match store.

Every rejected operation raises one of these synchronously and leaves the
store untouched, so callers can correct the input and try again.
"""
from __future__ import annotations

from typing import Any


class ScoreboardError(Exception):
    """Base class for all scoreboard errors."""


class InvalidTeams(ScoreboardError, ValueError):
    """Team names are empty, not text, or the same team twice."""


class TeamAlreadyPlaying(ScoreboardError):
    def __init__(self, team: str) -> None:
        super().__init__(f"{team} is already playing an ongoing match")
        self.team = team


class MatchNotFound(ScoreboardError, LookupError):
    def __init__(self, home_team: Any, away_team: Any) -> None:
        super().__init__(f"No ongoing match {home_team} - {away_team}")
        self.home_team = home_team
        self.away_team = away_team


class InvalidScore(ScoreboardError, ValueError):
    def __init__(self, score: Any, reason: str = "must be a non-negative integer") -> None:
        super().__init__(f"Invalid score {score!r}: {reason}")
        self.score = score
