"""
Minesweeper Knowledge-Based Agent

A Minesweeper player that deduces safe cells and mines from revealed clues:
- Sentences: "exactly N of these cells are mines"
- Trivial extraction: count 0 means all safe, count == size means all mines
- Subset difference: B inside A means A - B holds A.count - B.count mines
- Random fallback move when nothing is provably safe
"""

from .agent import MinesweeperAI
from .analysis import (
    run_agent_level_analysis,
    run_agent_many_tests,
    run_agent_single_test,
)
from .engine import Minesweeper
from .errors import (
    ContradictionError,
    InconsistentEvidenceError,
    MinesweeperAgentError,
)
from .sentence import Sentence
from .session import GameSession, format_agent_knowledge, play_cli

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Sentence",
    "MinesweeperAI",
    "Minesweeper",
    "GameSession",
    # Errors
    "MinesweeperAgentError",
    "InconsistentEvidenceError",
    "ContradictionError",
    # CLI
    "play_cli",
    # Analysis functions
    "format_agent_knowledge",
    "run_agent_single_test",
    "run_agent_many_tests",
    "run_agent_level_analysis",
]
