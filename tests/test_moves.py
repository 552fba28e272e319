import random

import pytest

from minesweeper_agent import MinesweeperAI
from minesweeper_agent.utils import iter_cells


def test_no_safe_move_without_knowledge(ai_3x3):
    assert ai_3x3.make_safe_move() is None


def test_safe_move_is_first_in_row_major_order(ai_3x3):
    ai_3x3.add_knowledge((0, 0), 0)
    assert ai_3x3.make_safe_move() == (0, 1)


def test_safe_move_does_not_change_state(ai_3x3):
    ai_3x3.add_knowledge((0, 0), 0)
    before = (ai_3x3.moves_made, ai_3x3.known_safes, ai_3x3.get_stats())
    assert ai_3x3.make_safe_move() == ai_3x3.make_safe_move()
    assert (ai_3x3.moves_made, ai_3x3.known_safes, ai_3x3.get_stats()) == before


def test_safe_move_skips_revealed_cells(ai_3x3):
    ai_3x3.add_knowledge((0, 0), 0)
    ai_3x3.add_knowledge((0, 1), 0)
    move = ai_3x3.make_safe_move()
    assert move not in ai_3x3.moves_made
    assert move in ai_3x3.known_safes


def test_random_move_uses_injected_rng(last_choice_rng):
    ai = MinesweeperAI(3, 3, rng=last_choice_rng)
    assert ai.make_random_move() == (2, 2)
    ai.mark_mine((2, 2))
    assert ai.make_random_move() == (2, 1)


def test_random_move_is_reproducible_with_seed():
    a = MinesweeperAI(5, 5, seed=42)
    b = MinesweeperAI(5, 5, rng=random.Random(42))
    assert [a.make_random_move() for _ in range(10)] == [
        b.make_random_move() for _ in range(10)
    ]


def test_random_move_excludes_moves_and_known_mines():
    ai = MinesweeperAI(1, 3, seed=1)
    ai.add_knowledge((0, 0), 1)
    assert ai.known_mines == {(0, 1)}
    for _ in range(50):
        assert ai.make_random_move() == (0, 2)


@pytest.mark.parametrize("seed", range(5))
def test_random_move_never_returns_excluded_cell(seed):
    ai = MinesweeperAI(4, 4, seed=seed)
    ai.add_knowledge((0, 0), 1)
    ai.add_knowledge((3, 3), 0)
    ai.mark_mine((0, 3))
    excluded = ai.moves_made | ai.known_mines
    allowed = set(iter_cells(4, 4)) - excluded

    seen = {ai.make_random_move() for _ in range(200)}
    assert seen <= allowed
    assert seen.isdisjoint(excluded)


def test_no_moves_when_everything_is_resolved():
    ai = MinesweeperAI(1, 2, seed=0)
    ai.add_knowledge((0, 0), 1)
    assert ai.known_mines == {(0, 1)}
    assert ai.make_safe_move() is None
    assert ai.make_random_move() is None
