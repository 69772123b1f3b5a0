import logging

import pytest

from scoreboard.config import Settings
from scoreboard.errors import InvalidScore, InvalidTeams, MatchNotFound, ScoreboardError, TeamAlreadyPlaying
from scoreboard.match_store import MatchStore


@pytest.fixture
def board():
    return MatchStore(Settings())


def test_team_cannot_play_itself(board):
    with pytest.raises(InvalidTeams) as exc:
        board.start("Georgia", "Georgia")
    assert str(exc.value) == "Georgia cannot play with itself"
    assert len(board) == 0


@pytest.mark.parametrize("home, away", [("", "B"), ("A", ""), ("   ", "B"), (None, "B"), ("A", 7)])
def test_blank_or_non_text_names_rejected(board, home, away):
    with pytest.raises(InvalidTeams):
        board.start(home, away)
    assert board.get_summary() == []


def test_team_already_playing_as_home_or_away(board):
    board.start("A", "B")

    with pytest.raises(TeamAlreadyPlaying) as exc:
        board.start("A", "C")
    assert exc.value.team == "A"

    with pytest.raises(TeamAlreadyPlaying) as exc:
        board.start("C", "B")
    assert exc.value.team == "B"

    with pytest.raises(TeamAlreadyPlaying):
        board.start("B", "A")

    assert len(board) == 1
    assert not board.is_playing("C")


def test_update_unknown_match(board):
    board.start("A", "B")
    with pytest.raises(MatchNotFound) as exc:
        board.update_score("A", 1, "C", 0)
    assert (exc.value.home_team, exc.value.away_team) == ("A", "C")


def test_swapped_order_is_not_found(board):
    board.start("A", "B")

    with pytest.raises(MatchNotFound):
        board.update_score("B", 1, "A", 0)
    with pytest.raises(MatchNotFound):
        board.finish("B", "A")
    with pytest.raises(MatchNotFound):
        board.get("B", "A")

    m = board.get("A", "B")
    assert (m.home_score, m.away_score) == (0, 0)
    assert len(board) == 1


def test_finish_twice(board):
    board.start("A", "B")
    board.finish("A", "B")
    with pytest.raises(MatchNotFound):
        board.finish("A", "B")


@pytest.mark.parametrize("home_score, away_score", [(-1, 0), (0, -3), (1.5, 0), ("2", 1), (True, 0)])
def test_invalid_scores_leave_match_untouched(board, home_score, away_score):
    board.start("A", "B")
    board.update_score("A", 1, "B", 1)

    with pytest.raises(InvalidScore):
        board.update_score("A", home_score, "B", away_score)

    m = board.get("A", "B")
    assert (m.home_score, m.away_score) == (1, 1)


def test_score_checked_before_lookup(board):
    with pytest.raises(InvalidScore) as exc:
        board.update_score("X", -1, "Y", 0)
    assert exc.value.score == -1


def test_max_score_from_settings():
    board = MatchStore(Settings(max_score=10))
    board.start("A", "B")
    board.update_score("A", 10, "B", 0)

    with pytest.raises(InvalidScore, match="exceeds maximum of 10"):
        board.update_score("A", 11, "B", 0)
    assert board.get("A", "B").home_score == 10


def test_errors_share_a_base(board):
    board.start("A", "B")
    for call in (
        lambda: board.start("A", "A"),
        lambda: board.start("A", "C"),
        lambda: board.finish("C", "D"),
        lambda: board.update_score("A", -1, "B", 0),
    ):
        with pytest.raises(ScoreboardError):
            call()


def test_value_and_lookup_error_compat(board):
    with pytest.raises(ValueError):
        board.start("", "B")
    with pytest.raises(LookupError):
        board.finish("A", "B")


def test_rejections_are_logged(board, caplog):
    caplog.set_level(logging.INFO, logger="scoreboard")
    board.start("A", "B")

    with pytest.raises(TeamAlreadyPlaying):
        board.start("A", "C")

    messages = [r.getMessage() for r in caplog.records]
    assert any("Started A - B" in m for m in messages)
    assert any(m.startswith("Rejected start") and "A is already playing" in m for m in messages)
