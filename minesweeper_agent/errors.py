"""Exceptions raised by the deduction agent."""


class MinesweeperAgentError(Exception):
    """Base class for errors raised by the agent's knowledge base."""


class InconsistentEvidenceError(MinesweeperAgentError, ValueError):
    """A reported clue cannot be reconciled with what is already known.

    Raised at the evidence boundary, e.g. a count that would go negative
    after subtracting known mines, a count larger than the number of
    undetermined neighbors, or a second reveal of a cell with a different
    count.
    """


class ContradictionError(MinesweeperAgentError, RuntimeError):
    """Deduction reached a state where a cell would be both safe and a mine."""
