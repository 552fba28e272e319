import pytest

from minesweeper_agent import GameSession, Minesweeper
from minesweeper_agent.session import LOST, ONGOING, WON, format_agent_knowledge


def test_new_session_uses_defaults():
    session = GameSession(seed=1)
    assert (session.height, session.width, session.mines_count) == (8, 8, 8)
    assert len(session.game.mines) == 8
    assert session.status == ONGOING


def test_reveal_feeds_agent(corner_mine_session):
    assert corner_mine_session.reveal((0, 0)) == ONGOING
    assert corner_mine_session.revealed == {(0, 0)}
    assert corner_mine_session.ai.moves_made == {(0, 0)}
    assert corner_mine_session.ai.clue((0, 0)) == 0
    assert corner_mine_session.moves_sequence == [((0, 0), "human")]


def test_revealing_mine_loses(corner_mine_session):
    assert corner_mine_session.reveal((2, 2)) == LOST
    assert corner_mine_session.lost
    assert not corner_mine_session.won
    assert corner_mine_session.ai.moves_made == set()

    # Moves after a loss are ignored
    assert corner_mine_session.reveal((0, 0)) == LOST
    assert corner_mine_session.revealed == set()
    assert corner_mine_session.ai_move() is None


def test_repeat_reveal_is_ignored(corner_mine_session):
    corner_mine_session.reveal((0, 0))
    corner_mine_session.reveal((0, 0))
    assert len(corner_mine_session.moves_sequence) == 1


def test_flagging_mine_wins(corner_mine_session):
    assert corner_mine_session.flag((2, 2)) == WON
    assert corner_mine_session.flags == {(2, 2)}
    assert corner_mine_session.won


def test_flagging_safe_cell_loses(corner_mine_session):
    assert corner_mine_session.flag((0, 0)) == LOST
    assert corner_mine_session.lost


def test_flagged_cell_cannot_be_revealed():
    session = GameSession(game=Minesweeper(2, 3, 2, mines={(0, 0), (1, 2)}))
    session.flag((0, 0))
    assert session.reveal((0, 0)) == ONGOING
    assert session.revealed == set()


def test_ai_prefers_safe_moves(corner_mine_session):
    corner_mine_session.reveal((0, 0))
    assert corner_mine_session.ai_move() == (0, 1)
    assert corner_mine_session.moves_sequence[-1] == ((0, 1), "safe")


def test_ai_guesses_when_nothing_is_safe(corner_mine_session):
    move = corner_mine_session.ai_move()
    assert move is not None
    assert corner_mine_session.moves_sequence == [(move, "random")]


def test_play_to_end_flags_deduced_mines(corner_mine_session):
    corner_mine_session.reveal((0, 0))
    assert corner_mine_session.play_to_end() == WON
    assert corner_mine_session.flags == {(2, 2)}
    assert len(corner_mine_session.revealed) == 8
    kinds = {kind for _, kind in corner_mine_session.moves_sequence[1:]}
    assert kinds == {"safe"}


def test_play_to_end_respects_move_cap(corner_mine_session):
    corner_mine_session.reveal((0, 0))
    assert corner_mine_session.play_to_end(max_moves=2) == ONGOING
    assert len(corner_mine_session.moves_sequence) == 3


@pytest.mark.parametrize("seed", range(8))
def test_play_to_end_finishes(seed):
    session = GameSession(6, 6, 5, seed=seed)
    status = session.play_to_end()
    assert status in (WON, LOST)
    if status == WON:
        assert session.flags == session.game.mines
        assert len(session.revealed) == 36 - 5


def test_sessions_with_same_seed_play_identically():
    a = GameSession(8, 8, 10, seed=5)
    b = GameSession(8, 8, 10, seed=5)
    assert a.game.mines == b.game.mines
    a.play_to_end()
    b.play_to_end()
    assert a.moves_sequence == b.moves_sequence


def test_reset_starts_a_fresh_game():
    session = GameSession(4, 4, 3, seed=2)
    old_game = session.game
    session.play_to_end()
    session.reset()
    assert session.game is not old_game
    assert session.revealed == set()
    assert session.flags == set()
    assert session.moves_sequence == []
    assert not session.lost
    assert session.ai.moves_made == set()
    assert len(session.game.mines) == 3


def test_format_agent_knowledge(corner_mine_session):
    corner_mine_session.reveal((0, 0))
    corner_mine_session.play_to_end()
    text = format_agent_knowledge(corner_mine_session.ai, show_coords=False)
    assert text.splitlines() == [
        " 0  0  0",
        " 0  1  1",
        " 0  1  M",
    ]
    assert corner_mine_session.format_agent_knowledge() == format_agent_knowledge(
        corner_mine_session.ai
    )


def test_format_agent_knowledge_shows_unrevealed_safes():
    session = GameSession(game=Minesweeper(3, 3, 1, mines={(2, 2)}))
    session.reveal((0, 0))
    text = format_agent_knowledge(session.ai, show_coords=False)
    assert text.splitlines() == [
        " 0  S  .",
        " S  S  .",
        " .  .  .",
    ]
