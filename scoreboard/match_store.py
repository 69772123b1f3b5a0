"""In-memory store of ongoing matches for the live scoreboard.

A MatchStore owns every ongoing Match. Callers address a match by its
(home_team, away_team) pair, in the order it was started, and only ever get
back frozen MatchView snapshots.

Matches are kept sorted on write (total score descending, then most recently
started first) and the summary snapshot is rebuilt after every successful
mutation, so `get_summary` is a cheap copy for frequent pollers.
"""
from __future__ import annotations

import bisect
import itertools
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from scoreboard.config import Settings, configure_logging, load_settings
from scoreboard.errors import InvalidScore, InvalidTeams, MatchNotFound, TeamAlreadyPlaying

logger = logging.getLogger(__name__)

MatchId = Tuple[str, str]


@dataclass(frozen=True)
class MatchView:
    """Read-only snapshot of one ongoing match."""

    home_team: str
    away_team: str
    home_score: int
    away_score: int
    total_score: int
    started_at: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return f"{self.home_team} {self.home_score} - {self.away_team} {self.away_score}"


@dataclass
class Match:
    home_team: str
    away_team: str
    started_at: int
    home_score: int = 0
    away_score: int = 0

    @property
    def match_id(self) -> MatchId:
        return (self.home_team, self.away_team)

    @property
    def total_score(self) -> int:
        return self.home_score + self.away_score

    def view(self) -> MatchView:
        return MatchView(
            home_team=self.home_team,
            away_team=self.away_team,
            home_score=self.home_score,
            away_score=self.away_score,
            total_score=self.total_score,
            started_at=self.started_at,
        )


def _rank(match: Match) -> Tuple[int, int]:
    # started_at is unique, so no two matches share a rank
    return (-match.total_score, -match.started_at)


def _rejected(operation: str, exc: Exception) -> Exception:
    logger.info(f"Rejected {operation}: {exc}")
    return exc


class MatchStore:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        if settings is None:
            settings = load_settings()
            configure_logging(settings)
        self._settings = settings
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)
        self._matches: Dict[MatchId, Match] = {}
        self._teams: Dict[str, Match] = {}
        self._ordered: List[Match] = []
        self._summary: Tuple[MatchView, ...] = ()

    def __len__(self) -> int:
        with self._lock:
            return len(self._matches)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def start(self, home_team: str, away_team: str) -> MatchId:
        """Start a 0-0 match between two teams not already playing.

        Raises InvalidTeams for blank or identical names and
        TeamAlreadyPlaying if either team is in another ongoing match.
        """
        with self._lock:
            self._check_team_name(home_team, "start")
            self._check_team_name(away_team, "start")
            if home_team == away_team:
                raise _rejected("start", InvalidTeams(f"{home_team} cannot play with itself"))
            for team in (home_team, away_team):
                if team in self._teams:
                    raise _rejected("start", TeamAlreadyPlaying(team))

            match = Match(home_team=home_team, away_team=away_team, started_at=next(self._sequence))
            self._matches[match.match_id] = match
            self._teams[home_team] = match
            self._teams[away_team] = match
            bisect.insort(self._ordered, match, key=_rank)
            self._refresh_summary()

        logger.info(f"Started {home_team} - {away_team} (#{match.started_at})")
        return match.match_id

    def update_score(self, home_team: str, home_score: int, away_team: str, away_score: int) -> None:
        """Overwrite both scores with absolute values.

        The pair must be given in the order the match was started.
        """
        with self._lock:
            self._check_score(home_score)
            self._check_score(away_score)
            match = self._lookup(home_team, away_team, "update_score")

            del self._ordered[self._position(match)]
            match.home_score = home_score
            match.away_score = away_score
            bisect.insort(self._ordered, match, key=_rank)
            self._refresh_summary()

        logger.debug(f"Updated {home_team} {home_score} - {away_team} {away_score}")

    def finish(self, home_team: str, away_team: str) -> None:
        """Remove an ongoing match; both teams are free to play again."""
        with self._lock:
            match = self._lookup(home_team, away_team, "finish")

            del self._ordered[self._position(match)]
            del self._matches[match.match_id]
            del self._teams[home_team]
            del self._teams[away_team]
            self._refresh_summary()

        logger.info(f"Finished {home_team} {match.home_score} - {away_team} {match.away_score}")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_summary(self) -> List[MatchView]:
        """Ongoing matches by total score, most recently started first on ties."""
        with self._lock:
            return list(self._summary)

    def format_summary(self) -> List[str]:
        return [str(view) for view in self.get_summary()]

    def get(self, home_team: str, away_team: str) -> MatchView:
        with self._lock:
            return self._lookup(home_team, away_team, "get").view()

    def is_playing(self, team: str) -> bool:
        with self._lock:
            return team in self._teams

    # ------------------------------------------------------------------
    # Internals; callers hold self._lock
    # ------------------------------------------------------------------

    def _check_team_name(self, team: Any, operation: str) -> None:
        if not isinstance(team, str) or not team.strip():
            raise _rejected(operation, InvalidTeams(f"Team name must be non-empty text, got {team!r}"))

    def _check_score(self, score: Any) -> None:
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise _rejected("update_score", InvalidScore(score))
        max_score = self._settings.max_score
        if max_score is not None and score > max_score:
            raise _rejected("update_score", InvalidScore(score, f"exceeds maximum of {max_score}"))

    def _lookup(self, home_team: Any, away_team: Any, operation: str) -> Match:
        match = self._matches.get((home_team, away_team))
        if match is None:
            raise _rejected(operation, MatchNotFound(home_team, away_team))
        return match

    def _position(self, match: Match) -> int:
        return bisect.bisect_left(self._ordered, _rank(match), key=_rank)

    def _refresh_summary(self) -> None:
        self._summary = tuple(m.view() for m in self._ordered)
