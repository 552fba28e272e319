"""Logical sentences about a Minesweeper board."""

from typing import AbstractSet, Iterable, Optional, Set, Tuple

from .errors import ContradictionError, InconsistentEvidenceError
from .utils import Cell

SentenceKey = Tuple[Tuple[Cell, ...], int]


class Sentence:
    """
    Logical statement about a Minesweeper game.

    A sentence consists of a set of board cells and a count of how many of
    those cells are mines. The count always stays within [0, len(cells)].
    """

    __slots__ = ("cells", "count")

    def __init__(self, cells: Iterable[Cell], count: int) -> None:
        """
        Args:
            cells: Board cells the sentence talks about. Duplicates collapse.
            count: Exact number of mines among `cells`.

        Raises:
            InconsistentEvidenceError: If count is negative or exceeds the
                number of cells.
        """
        self.cells: Set[Cell] = set(cells)
        self.count: int = count
        if count < 0 or count > len(self.cells):
            raise InconsistentEvidenceError(
                f"Sentence count {count} is outside [0, {len(self.cells)}]."
            )

    def key(self) -> SentenceKey:
        """Normalized (sorted cells, count) pair used for equality and hashing."""
        return tuple(sorted(self.cells)), self.count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sentence):
            return NotImplemented
        return self.count == other.count and self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        cells = ", ".join(str(c) for c in sorted(self.cells))
        return f"{{{cells}}} = {self.count}"

    def __repr__(self) -> str:
        cells, count = self.key()
        return f"Sentence({list(cells)!r}, {count})"

    def __len__(self) -> int:
        return len(self.cells)

    def copy(self) -> "Sentence":
        return Sentence(self.cells, self.count)

    def is_subset_of(self, other: "Sentence") -> bool:
        """True if self.cells is a non-empty proper subset of other.cells."""
        return bool(self.cells) and self.cells < other.cells

    def known_mines(self) -> AbstractSet[Cell]:
        """Return the cells known to be mines: all of them when count == len(cells)."""
        if self.cells and self.count == len(self.cells):
            return set(self.cells)
        return set()

    def known_safes(self) -> AbstractSet[Cell]:
        """Return the cells known to be safe: all of them when count == 0."""
        if self.count == 0:
            return set(self.cells)
        return set()

    def mark_mine(self, cell: Cell) -> None:
        """
        Update the sentence given that `cell` is known to be a mine.

        Raises:
            ContradictionError: If the sentence had no mines left to account
                for the cell.
        """
        if cell not in self.cells:
            return
        if self.count == 0:
            raise ContradictionError(
                f"Cell {cell} marked as mine but {self} says all its cells are safe."
            )
        self.cells.remove(cell)
        self.count -= 1

    def mark_safe(self, cell: Cell) -> None:
        """
        Update the sentence given that `cell` is known to be safe.

        Raises:
            ContradictionError: If the remaining cells could no longer hold
                all of the sentence's mines.
        """
        if cell not in self.cells:
            return
        if self.count == len(self.cells):
            raise ContradictionError(
                f"Cell {cell} marked as safe but {self} says all its cells are mines."
            )
        self.cells.remove(cell)


def subset_difference(a: Sentence, b: Sentence) -> Optional[Sentence]:
    """
    Apply the subset rule: if b.cells is a proper subset of a.cells, then
    a.cells - b.cells holds exactly a.count - b.count mines.

    Returns:
        The derived sentence, or None if b is not a proper non-empty subset of a.

    Raises:
        ContradictionError: If the two sentences cannot both hold.
    """
    if not b.is_subset_of(a):
        return None
    cells = a.cells - b.cells
    count = a.count - b.count
    if count < 0 or count > len(cells):
        raise ContradictionError(f"Sentences {a} and {b} cannot both hold.")
    return Sentence(cells, count)
