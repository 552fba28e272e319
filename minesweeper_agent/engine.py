"""Minesweeper board: uniform mine placement and ground-truth queries."""

import random
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Set, Tuple

from .utils import Cell, check_cell, get_neighborhoods, iter_cells


class Minesweeper:
    """Minesweeper game representation with mines placed uniformly at random."""

    def __init__(
        self,
        height: int,
        width: int,
        mines_count: int,
        rng: Optional[random.Random] = None,
        mines: Optional[AbstractSet[Cell]] = None,
    ) -> None:
        """
        Initialize a Minesweeper board.

        Args:
            height: Board height (number of rows), must be > 0.
            width: Board width (number of columns), must be > 0.
            mines_count: Total number of mines to place, 0 <= mines_count <= height * width.
            rng: Random generator used for mine placement.
            mines: Explicit mine layout; when given, its size must equal
                mines_count and no random placement happens.

        Raises:
            ValueError: If dimensions, mine count or the explicit layout are invalid.
        """
        if height <= 0 or width <= 0:
            raise ValueError("Height and width must be positive.")
        if mines_count < 0:
            raise ValueError("mines_count must be non-negative.")
        if mines_count > height * width:
            raise ValueError("mines_count cannot exceed the number of cells.")

        self.height: int = height
        self.width: int = width
        self.mines_count: int = mines_count
        self.rng: random.Random = rng if rng is not None else random.Random()

        self._neighborhoods: Dict[Cell, Tuple[Cell, ...]] = get_neighborhoods(
            height, width
        )

        if mines is None:
            # Sample mines uniformly without replacement.
            layout = set(self.rng.sample(list(iter_cells(height, width)), mines_count))
        else:
            layout = {check_cell(c, height, width) for c in mines}
            if len(layout) != mines_count:
                raise ValueError("Explicit mine layout does not match mines_count.")

        self.mines: FrozenSet[Cell] = frozenset(layout)
        self.board: List[List[bool]] = [
            [(row, col) in self.mines for col in range(width)] for row in range(height)
        ]

        # Mines the player has flagged
        self.mines_found: Set[Cell] = set()

    def neighbors(self, cell: Cell) -> Tuple[Cell, ...]:
        """Return precomputed neighbor coordinates for a cell."""
        return self._neighborhoods[cell]

    def is_mine(self, cell: Cell) -> bool:
        row, col = check_cell(cell, self.height, self.width)
        return self.board[row][col]

    def nearby_mines(self, cell: Cell) -> int:
        """
        Count the mines within one row and column of a cell, not including the cell itself.

        Raises:
            ValueError: If the cell is off the board.
        """
        cell = check_cell(cell, self.height, self.width)
        return sum(1 for nr, nc in self.neighbors(cell) if self.board[nr][nc])

    def won(self) -> bool:
        """Check if all mines have been flagged."""
        return self.mines_found == self.mines

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def format_board(
        self,
        reveal_all: bool = False,
        revealed: AbstractSet[Cell] = frozenset(),
        flags: AbstractSet[Cell] = frozenset(),
        color: bool = True,
    ) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and every neighbor count.
            revealed: Cells whose neighbor count is visible.
            flags: Cells shown as flagged ("F").
            color: If False, omit ANSI color codes.

        Returns:
            A formatted multi-line string with coordinate labels and the board grid.
        """
        c = self._c if color else str
        m = self._m if color else str

        def cell_str(row: int, col: int) -> str:
            if reveal_all or (row, col) in revealed:
                if self.board[row][col]:
                    return m("M")
                return str(self.nearby_mines((row, col)))
            if (row, col) in flags:
                return "F"
            return "."

        # Header: column coordinates
        header_cells = " ".join(f"{col:2d}" for col in range(self.width))
        out = [c("   ") + c(header_cells)]
        out.append(c("   " + "-" * (3 * self.width - 1)))

        # Rows with row coordinate at left
        for row in range(self.height):
            row_cells = " ".join(f" {cell_str(row, col)}" for col in range(self.width))
            out.append(c(f"{row:2d} ") + c("|") + row_cells)

        return "\n".join(out)

    def print_board(self) -> None:
        """Print the fully revealed board to stdout (for debugging)."""
        print(self.format_board(reveal_all=True))
