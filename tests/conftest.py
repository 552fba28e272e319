import random

import matplotlib

matplotlib.use("Agg")

import pytest

from minesweeper_agent import GameSession, Minesweeper, MinesweeperAI


class LastChoice(random.Random):
    """Random generator whose choice() always returns the last candidate."""

    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def last_choice_rng():
    return LastChoice()


@pytest.fixture
def ai_3x3():
    return MinesweeperAI(height=3, width=3, seed=0)


@pytest.fixture
def corner_mine_game():
    """3x3 board with a single mine at (2, 2)."""
    return Minesweeper(3, 3, 1, mines={(2, 2)})


@pytest.fixture
def corner_mine_session(corner_mine_game):
    return GameSession(game=corner_mine_game, seed=0)


@pytest.fixture
def feed_safe_moves():
    """Reveal provably safe cells one by one until none is left; return the order."""

    def feed(ai, game):
        order = []
        while True:
            move = ai.make_safe_move()
            if move is None:
                return order
            assert not game.is_mine(move)
            ai.add_knowledge(move, game.nearby_mines(move))
            order.append(move)

    return feed
