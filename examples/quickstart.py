"""
Quickstart example for the Minesweeper knowledge-based agent.

This script demonstrates basic usage of the agent.
"""

from minesweeper_agent import (
    GameSession,
    MinesweeperAI,
    run_agent_many_tests,
)


def main():
    print("=" * 60)
    print("Minesweeper Agent - Quickstart Example")
    print("=" * 60)

    # Example 1: Feed clues by hand
    print("\n1. Deducing a mine on a 3x3 board from clues alone...")
    print("-" * 60)

    ai = MinesweeperAI(height=3, width=3)
    ai.add_knowledge((0, 0), 0)
    ai.add_knowledge((1, 1), 1)
    ai.add_knowledge((0, 2), 0)
    ai.add_knowledge((2, 0), 0)
    print(f"Known mines: {sorted(ai.known_mines)}")
    print(f"Known safes: {sorted(ai.known_safes)}")
    print(f"Next safe move: {ai.make_safe_move()}")

    # Example 2: Let the agent play a whole game
    print("\n2. Playing a single 8x8 game with 8 mines...")
    print("-" * 60)

    session = GameSession(height=8, width=8, mines_count=8, seed=7)
    status = session.play_to_end()

    result = "WON" if status == 1 else "LOST"
    print(f"Result: {result}")
    print(f"Moves: {len(session.moves_sequence)}")
    print(f"Mines deduced: {len(session.ai.known_mines)}")
    print(session.format_board(reveal_all=True))
    print("\nAgent knowledge:")
    print(session.format_agent_knowledge())

    # Example 3: Run multiple games for statistics
    print("\n3. Running 50 games for win rate statistics...")
    print("-" * 60)

    results = run_agent_many_tests(height=8, width=8, mines_count=8, runs=50)

    print(f"Win rate: {results['win_rate']*100:.1f}%")
    print(f"Average moves per game: {results['avg_reveal_moves_count']:.1f}")
    print(f"Average random moves per game: {results['avg_random_moves_count']:.1f}")
    print(f"Guess failure rate: {results['guess_failure_rate']*100:.1f}%")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
