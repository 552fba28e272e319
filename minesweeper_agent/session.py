"""Turn-based game session tying a Minesweeper board to a MinesweeperAI."""

import logging
import random
from typing import List, Optional, Set, Tuple

from .agent import MinesweeperAI
from .config import DEFAULT_HEIGHT, DEFAULT_MINES, DEFAULT_WIDTH
from .engine import Minesweeper
from .utils import Cell, check_cell

logger = logging.getLogger(__name__)

LOST = -1
ONGOING = 0
WON = 1


class GameSession:
    """
    One playthrough: a board, the agent watching it, and the player's view.

    Every safe reveal, whether chosen by a human or by the agent, is fed to
    the agent as evidence. The game is won when the flagged cells equal the
    board's mines and lost when a mine is revealed or a safe cell is flagged.
    """

    def __init__(
        self,
        height: int = DEFAULT_HEIGHT,
        width: int = DEFAULT_WIDTH,
        mines_count: int = DEFAULT_MINES,
        seed: Optional[int] = None,
        game: Optional[Minesweeper] = None,
    ) -> None:
        """
        Args:
            height: Board height.
            width: Board width.
            mines_count: Number of mines on the board.
            seed: Seed for board generation and the agent's random moves.
            game: Pre-built board to play on instead of generating one; its
                dimensions and mine count override the other arguments.
        """
        if game is not None:
            height, width, mines_count = game.height, game.width, game.mines_count

        self.height: int = height
        self.width: int = width
        self.mines_count: int = mines_count
        self.rng: random.Random = random.Random(seed)

        self.game: Minesweeper = (
            game if game is not None else self._new_game()
        )
        self.ai: MinesweeperAI = self._new_ai()
        self.revealed: Set[Cell] = set()
        self.flags: Set[Cell] = set()
        self.lost: bool = False

        # (cell, kind) with kind in {"human", "safe", "random"}
        self.moves_sequence: List[Tuple[Cell, str]] = []

    def _new_game(self) -> Minesweeper:
        return Minesweeper(
            self.height,
            self.width,
            self.mines_count,
            rng=random.Random(self.rng.getrandbits(64)),
        )

    def _new_ai(self) -> MinesweeperAI:
        return MinesweeperAI(
            self.height, self.width, rng=random.Random(self.rng.getrandbits(64))
        )

    # -------------------------------------------------------------------------
    # Game state
    # -------------------------------------------------------------------------

    @property
    def won(self) -> bool:
        return not self.lost and self.game.won()

    @property
    def status(self) -> int:
        """-1 if lost, 1 if won, 0 while the game is still going."""
        if self.lost:
            return LOST
        if self.won:
            return WON
        return ONGOING

    def reset(self) -> None:
        """Start over on a fresh board with the same settings."""
        self.game = self._new_game()
        self.ai = self._new_ai()
        self.revealed = set()
        self.flags = set()
        self.lost = False
        self.moves_sequence = []

    # -------------------------------------------------------------------------
    # Player actions
    # -------------------------------------------------------------------------

    def reveal(self, cell: Cell, kind: str = "human") -> int:
        """
        Reveal a cell and feed the clue to the agent.

        Revealing a mine loses the game. Revealed or flagged cells, and any
        move after a loss, are ignored.

        Returns:
            The session status after the move.
        """
        cell = check_cell(cell, self.height, self.width)
        if self.lost or cell in self.revealed or cell in self.flags:
            return self.status

        self.moves_sequence.append((cell, kind))
        if self.game.is_mine(cell):
            self.lost = True
            logger.info("Revealed mine at %s after %d moves.", cell, len(self.moves_sequence))
            return LOST

        self.revealed.add(cell)
        self.ai.add_knowledge(cell, self.game.nearby_mines(cell))
        return self.status

    def flag(self, cell: Cell) -> int:
        """
        Flag a cell as a mine.

        Flagging a cell that is not a mine loses the game.

        Returns:
            The session status after the move.
        """
        cell = check_cell(cell, self.height, self.width)
        if self.lost or cell in self.revealed:
            return self.status

        if self.game.is_mine(cell):
            self.flags.add(cell)
            self.game.mines_found.add(cell)
        else:
            self.lost = True
            logger.info("Flagged safe cell %s.", cell)
        return self.status

    def ai_move(self) -> Optional[Cell]:
        """
        Let the agent play one move: a provably safe cell if any, else a random one.

        When the agent has no move left, every known mine is flagged instead.

        Returns:
            The revealed cell, or None if no move was made.
        """
        if self.lost:
            return None

        move = self.ai.make_safe_move()
        kind = "safe"
        if move is None:
            move = self.ai.make_random_move()
            kind = "random"

        if move is None:
            self.flags = set(self.ai.known_mines)
            self.game.mines_found = set(self.flags)
            logger.info(
                "No moves left; flagged %d known mines (won=%s).", len(self.flags), self.won
            )
            return None

        logger.debug("AI %s move: %s", kind, move)
        self.reveal(move, kind=kind)
        return move

    def play_to_end(self, max_moves: Optional[int] = None) -> int:
        """
        Let the agent play until the game is lost or it runs out of moves.

        Args:
            max_moves: Optional cap on the number of AI moves.

        Returns:
            The final session status.
        """
        moves = 0
        while not self.lost:
            if max_moves is not None and moves >= max_moves:
                break
            if self.ai_move() is None:
                break
            moves += 1
        return self.status

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """Render the player's view of the board."""
        return self.game.format_board(
            reveal_all=reveal_all or self.lost,
            revealed=self.revealed,
            flags=self.flags,
            color=color,
        )

    def format_agent_knowledge(self, show_coords: bool = True) -> str:
        return format_agent_knowledge(self.ai, show_coords=show_coords)


def format_agent_knowledge(ai: MinesweeperAI, *, show_coords: bool = True) -> str:
    """
    Format the agent's current certainty as a text grid.

    Revealed cells show their clue, known mines "M", known safe but
    unrevealed cells "S", undetermined cells ".".
    """

    def cell_char(row: int, col: int) -> str:
        clue = ai.clue((row, col))
        if clue is not None:
            return str(clue)
        state = ai.cell_state((row, col))
        return state if state is not None else "."

    lines: List[str] = []
    if show_coords:
        header = " ".join(f"{col:2d}" for col in range(ai.width))
        lines.append("   " + header)
        lines.append("   " + "-" * (3 * ai.width - 1))

    for row in range(ai.height):
        cells = " ".join(f" {cell_char(row, col)}" for col in range(ai.width))
        lines.append(f"{row:2d} |" + cells if show_coords else cells)

    return "\n".join(lines)


def play_cli(session: GameSession) -> None:
    """
    Run a simple terminal UI for playing alongside the agent.

    Commands: "r row col" reveal, "f row col" flag, "a" AI move,
    "reset" new board, "q" quit.
    """
    print("Minesweeper CLI. Coordinates are 0-based (row col).")
    print("Commands: r ROW COL | f ROW COL | a | reset | q\n")
    print(session.format_board())

    while True:
        s = input("\nCommand: ").strip().lower()
        if s in {"q", "quit", "exit"}:
            print("Quit.")
            return

        if s == "reset":
            session.reset()
            print(session.format_board())
            continue

        if s in {"a", "ai"}:
            move = session.ai_move()
            if move is None:
                print("\nNo moves left to make. Flagged all known mines.")
            else:
                print(f"\nAI revealed {move}.")
        else:
            parts = s.replace(",", " ").split()
            if len(parts) != 3 or parts[0] not in {"r", "f"}:
                print("Invalid input. Example: r 3 5")
                continue
            try:
                cell = check_cell(
                    (int(parts[1]), int(parts[2])), session.height, session.width
                )
            except ValueError:
                print("Invalid input. Coordinates must be integers on the board.")
                continue

            if parts[0] == "r":
                session.reveal(cell)
            else:
                session.flag(cell)

        print()
        print(session.format_board())
        print("\nAgent knowledge:")
        print(session.format_agent_knowledge())

        if session.status == LOST:
            print("\nYou lost.")
            return
        if session.status == WON:
            print("\nAll mines flagged. You won!")
            return


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    play_cli(GameSession())
