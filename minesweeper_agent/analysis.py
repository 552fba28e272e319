"""Analysis and benchmarking tools for the Minesweeper agent."""

from collections import defaultdict
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from .config import LEVELS
from .session import WON, LOST, GameSession, format_agent_knowledge


def run_agent_single_test(
    height: int,
    width: int,
    mines_count: int,
    *,
    seed: Optional[int] = None,
    show_boards: bool = False,
) -> Dict[str, object]:
    """
    Play one game end-to-end with the agent on a fresh board.

    Args:
        height: Board height.
        width: Board width.
        mines_count: Total number of mines on the board.
        seed: Seed for board generation and the agent's random moves.
        show_boards: If True, print the underlying board and the agent's final
            knowledge.

    Returns:
        The agent's counters plus "status" (-1 loss, 1 win, 0 stuck),
        "reveal_moves_count", "safe_moves_count", "random_moves_count" and
        "revealed_cells_count".
    """
    session = GameSession(height, width, mines_count, seed=seed)
    status = session.play_to_end()

    if show_boards:
        print("Underlying board (mines visible):")
        print(session.format_board(reveal_all=True))
        print()
        print("Agent knowledge (undetermined shown as '.'):")
        print(format_agent_knowledge(session.ai, show_coords=True))
        print()
        print(f"Finished with status {status}.")

    kinds = [kind for _, kind in session.moves_sequence]
    out: Dict[str, object] = dict(session.ai.get_stats())
    out.update(
        {
            "status": status,
            "reveal_moves_count": len(kinds),
            "safe_moves_count": kinds.count("safe"),
            "random_moves_count": kinds.count("random"),
            "revealed_cells_count": len(session.revealed),
        }
    )
    return out


def run_agent_many_tests(
    height: int,
    width: int,
    mines_count: int,
    runs: int,
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent games and return averaged metrics plus win rate.

    Args:
        height: Board height.
        width: Board width.
        mines_count: Total number of mines on the board.
        runs: Number of independent games to run, must be > 0.
        seed: Base seed; game i uses seed + i.

    Returns:
        Averages of every numeric metric of run_agent_single_test (prefixed
        with "avg_"), plus win_rate, loss_rate and guess_failure_rate.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    samples: Dict[str, List[float]] = defaultdict(list)
    statuses: List[int] = []

    for i in range(runs):
        run_seed = None if seed is None else seed + i
        payload = run_agent_single_test(height, width, mines_count, seed=run_seed)

        status = payload["status"]
        if status not in (LOST, 0, WON):
            raise RuntimeError(f"Unexpected session status: {status}")
        statuses.append(int(status))  # type: ignore[call-overload]

        for k, v in payload.items():
            if k == "status":
                continue
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                samples[f"avg_{k}"].append(float(v))

    out: Dict[str, float] = {k: float(np.mean(v)) for k, v in samples.items()}

    status_arr = np.asarray(statuses)
    out["win_rate"] = float(np.mean(status_arr == WON))
    out["loss_rate"] = float(np.mean(status_arr == LOST))

    total_guesses = float(np.sum(samples["avg_random_moves_count"]))
    losses = float(np.sum(status_arr == LOST))
    out["guess_failure_rate"] = losses / total_guesses if total_guesses > 0 else 0.0

    return out


def run_agent_level_analysis(
    runs: int,
    *,
    seed: Optional[int] = None,
    show_plots: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run aggregated tests on the standard difficulty levels and plot summaries.

    Args:
        runs: Number of independent games per level.
        seed: Base seed forwarded to run_agent_many_tests().
        show_plots: If False, skip plotting.

    Returns:
        Mapping from level name to the dict returned by run_agent_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, (h, w, m) in LEVELS.items():
        results[level] = run_agent_many_tests(h, w, m, runs, seed=seed)

    if not show_plots:
        return results

    level_names = list(LEVELS.keys())
    x = np.arange(len(level_names))
    bar_w = 0.25

    # 1) Moves by kind
    safe_moves = [results[n]["avg_safe_moves_count"] for n in level_names]
    random_moves = [results[n]["avg_random_moves_count"] for n in level_names]
    mines_found = [results[n]["avg_inferred_mine_count"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w, safe_moves, width=bar_w, label="safe moves")  # type: ignore[misc]
    plt.bar(x, random_moves, width=bar_w, label="random moves")  # type: ignore[misc]
    plt.bar(x + bar_w, mines_found, width=bar_w, label="mines deduced")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average count")  # type: ignore[misc]
    plt.title("Average moves and deductions (per game)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results
