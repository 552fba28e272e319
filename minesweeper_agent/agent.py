"""Knowledge-based Minesweeper agent: evidence intake, inference fixpoint, move selection."""

import logging
import random
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from .errors import ContradictionError, InconsistentEvidenceError
from .sentence import Sentence, SentenceKey, subset_difference
from .utils import Cell, check_cell, get_neighborhoods, iter_cells

logger = logging.getLogger(__name__)


class MinesweeperAI:
    """
    Minesweeper player that reasons with a knowledge base of sentences.

    The agent keeps four collections:
    - moves made: cells already revealed,
    - known safes: cells proven not to be mines,
    - known mines: cells proven to be mines,
    - knowledge: live sentences "exactly N of these cells are mines".

    Every call to add_knowledge() runs inference to a fixpoint before it
    returns, using two rules:
    1. Trivial extraction: a sentence with count 0 makes all its cells safe,
       a sentence with count == len(cells) makes all its cells mines.
    2. Subset difference: if B.cells is a proper subset of A.cells, then
       A.cells - B.cells holds exactly A.count - B.count mines.

    The agent is single-threaded; callers feed evidence one turn at a time.
    """

    def __init__(
        self,
        height: int,
        width: int,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize an agent for a height x width board.

        Args:
            height: Board height (number of rows), must be > 0.
            width: Board width (number of columns), must be > 0.
            rng: Random generator used by make_random_move(). Takes precedence
                over `seed`.
            seed: Seed for a private random generator when `rng` is not given.

        Raises:
            ValueError: If dimensions are invalid.
        """
        if height <= 0 or width <= 0:
            raise ValueError("Height and width must be positive.")

        self.height: int = height
        self.width: int = width
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

        self._neighborhoods: Dict[Cell, Tuple[Cell, ...]] = get_neighborhoods(
            height, width
        )

        self._moves_made: Set[Cell] = set()
        self._safes: Set[Cell] = set()
        self._mines: Set[Cell] = set()
        self._knowledge: List[Sentence] = []

        # Clue reported for each revealed cell, used to reject conflicting repeats
        self._clues: Dict[Cell, int] = {}

        # Metrics / counters (for analysis)
        self.inferred_safe_count: int = 0
        self.inferred_mine_count: int = 0
        self.derived_sentence_count: int = 0
        self.inference_pass_count: int = 0
        self.random_moves_count: int = 0

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def moves_made(self) -> FrozenSet[Cell]:
        return frozenset(self._moves_made)

    @property
    def known_safes(self) -> FrozenSet[Cell]:
        return frozenset(self._safes)

    @property
    def known_mines(self) -> FrozenSet[Cell]:
        return frozenset(self._mines)

    @property
    def knowledge(self) -> Tuple[Sentence, ...]:
        """Snapshot of the live sentences; mutating the copies has no effect."""
        return tuple(s.copy() for s in self._knowledge)

    def clue(self, cell: Cell) -> Optional[int]:
        """Return the count reported for a revealed cell, or None."""
        return self._clues.get(cell)

    def cell_state(self, cell: Cell) -> Optional[str]:
        """Return "M" for a known mine, "S" for a known safe cell, None if undetermined."""
        if cell in self._mines:
            return "M"
        if cell in self._safes:
            return "S"
        return None

    def neighbors(self, cell: Cell) -> Tuple[Cell, ...]:
        """Return precomputed neighbor coordinates for a cell."""
        return self._neighborhoods[cell]

    # -------------------------------------------------------------------------
    # Global mark operations
    # -------------------------------------------------------------------------

    def mark_mine(self, cell: Cell) -> None:
        """
        Mark a cell as a mine and update every sentence accordingly.

        Does not run inference on its own.

        Raises:
            ContradictionError: If the cell is already known to be safe.
        """
        if cell in self._safes:
            logger.error("Cell %s is known safe but was deduced to be a mine.", cell)
            raise ContradictionError(f"Cell {cell} is known safe, cannot mark as mine.")
        self._mines.add(cell)
        for sentence in self._knowledge:
            sentence.mark_mine(cell)

    def mark_safe(self, cell: Cell) -> None:
        """
        Mark a cell as safe and update every sentence accordingly.

        Does not run inference on its own.

        Raises:
            ContradictionError: If the cell is already known to be a mine.
        """
        if cell in self._mines:
            logger.error("Cell %s is a known mine but was deduced to be safe.", cell)
            raise ContradictionError(f"Cell {cell} is a known mine, cannot mark as safe.")
        self._safes.add(cell)
        for sentence in self._knowledge:
            sentence.mark_safe(cell)

    # -------------------------------------------------------------------------
    # Evidence intake
    # -------------------------------------------------------------------------

    def add_knowledge(self, cell: Cell, count: int) -> None:
        """
        Record that `cell` was revealed safe with `count` neighboring mines.

        Steps:
            1) mark the cell as a move that has been made
            2) mark the cell as safe
            3) build a sentence over the neighbors that are still undetermined,
               subtracting neighbors already known to be mines from the count
            4) add that sentence to the knowledge base if it is non-empty
            5) run inference until nothing new can be concluded

        Args:
            cell: The revealed cell (row, col).
            count: Number of mines among the cell's neighbors.

        Raises:
            ValueError: If the cell is off the board.
            InconsistentEvidenceError: If the count cannot be reconciled with
                the known mines, or the cell was already revealed with a
                different count.
            ContradictionError: If the cell is already known to be a mine.
        """
        cell = check_cell(cell, self.height, self.width)

        if cell in self._moves_made:
            previous = self._clues[cell]
            if previous != count:
                logger.error(
                    "Cell %s revealed again with count %d (was %d).", cell, count, previous
                )
                raise InconsistentEvidenceError(
                    f"Cell {cell} already revealed with count {previous}, got {count}."
                )
            return

        if cell in self._mines:
            logger.error("Cell %s was revealed but is a known mine.", cell)
            raise ContradictionError(f"Cell {cell} is a known mine, cannot be revealed safe.")

        # 3) Partition the neighbors before any state changes
        undetermined: Set[Cell] = set()
        adjusted_count = count
        for nbr in self.neighbors(cell):
            if nbr in self._mines:
                adjusted_count -= 1
            elif nbr in self._moves_made or nbr in self._safes:
                continue
            else:
                undetermined.add(nbr)

        if adjusted_count < 0 or adjusted_count > len(undetermined):
            logger.error(
                "Impossible clue %d at %s: %d undetermined neighbors, adjusted count %d.",
                count,
                cell,
                len(undetermined),
                adjusted_count,
            )
            raise InconsistentEvidenceError(
                f"Count {count} at {cell} is inconsistent with known mines "
                f"(adjusted count {adjusted_count}, {len(undetermined)} undetermined neighbors)."
            )

        # 1) + 2)
        self._moves_made.add(cell)
        self._clues[cell] = count
        self.mark_safe(cell)

        # 4)
        if undetermined:
            sentence = Sentence(undetermined, adjusted_count)
            if sentence not in self._knowledge:
                self._knowledge.append(sentence)
            logger.debug("Evidence %s=%d -> %s", cell, count, sentence)
        else:
            logger.debug("Evidence %s=%d fully explained by known cells.", cell, count)

        # 5)
        self.infer()

    # -------------------------------------------------------------------------
    # Inference fixpoint
    # -------------------------------------------------------------------------

    def infer(self) -> int:
        """
        Run inference passes until one of them changes nothing.

        Returns:
            The number of passes that produced a change. Calling infer() again
            without new evidence returns 0 and mutates nothing.
        """
        passes = 0
        while self._infer_pass():
            passes += 1

        self.inference_pass_count += passes
        logger.debug(
            "Fixpoint after %d passes: %d safes, %d mines, %d sentences.",
            passes,
            len(self._safes),
            len(self._mines),
            len(self._knowledge),
        )
        return passes

    def _infer_pass(self) -> bool:
        """Run one pass of extraction, propagation, pruning and derivation."""
        changed = False

        # 1) Trivial extraction into staging sets
        staged_safes: Set[Cell] = set()
        staged_mines: Set[Cell] = set()
        for sentence in self._knowledge:
            staged_safes |= sentence.known_safes()
            staged_mines |= sentence.known_mines()

        # 2) Global propagation of new facts only
        new_safes = staged_safes - self._safes
        new_mines = staged_mines - self._mines
        for cell in sorted(new_safes):
            self.mark_safe(cell)
        for cell in sorted(new_mines):
            self.mark_mine(cell)
        if new_safes or new_mines:
            self.inferred_safe_count += len(new_safes)
            self.inferred_mine_count += len(new_mines)
            changed = True

        # 3) Prune empty sentences and sentences that became duplicates
        seen: Set[SentenceKey] = set()
        live: List[Sentence] = []
        for sentence in self._knowledge:
            if not sentence.cells:
                continue
            key = sentence.key()
            if key in seen:
                continue
            seen.add(key)
            live.append(sentence)
        if len(live) != len(self._knowledge):
            changed = True
        self._knowledge = live

        # 4) Subset-difference derivation
        derived = self._derive_subset_differences(seen)
        if derived:
            self._knowledge.extend(derived)
            self.derived_sentence_count += len(derived)
            changed = True

        return changed

    def _derive_subset_differences(self, existing: Set[SentenceKey]) -> List[Sentence]:
        """
        Derive A - B for every ordered pair where B is a proper subset of A.

        `existing` holds the keys of the live sentences and is extended with
        the keys of the derived ones.
        """
        derived: List[Sentence] = []
        for a in self._knowledge:
            for b in self._knowledge:
                if a is b:
                    continue
                try:
                    new_sentence = subset_difference(a, b)
                except ContradictionError:
                    logger.error("Subset difference of %s and %s is impossible.", a, b)
                    raise
                if new_sentence is None:
                    continue

                key = new_sentence.key()
                if key in existing:
                    continue
                existing.add(key)
                derived.append(new_sentence)
        return derived

    # -------------------------------------------------------------------------
    # Move selection
    # -------------------------------------------------------------------------

    def make_safe_move(self) -> Optional[Cell]:
        """
        Return the first known-safe cell (row-major) that has not been revealed yet.

        Returns None if no such cell exists. Does not change agent state.
        """
        for cell in iter_cells(self.height, self.width):
            if cell in self._safes and cell not in self._moves_made:
                return cell
        return None

    def make_random_move(self) -> Optional[Cell]:
        """
        Return a cell chosen uniformly among cells neither revealed nor known mines.

        Returns None if every cell is revealed or known to be a mine.
        """
        candidates = [
            cell
            for cell in iter_cells(self.height, self.width)
            if cell not in self._moves_made and cell not in self._mines
        ]
        if not candidates:
            return None
        self.random_moves_count += 1
        return self.rng.choice(candidates)

    def get_stats(self) -> Dict[str, int]:
        """Return the agent's counters as a flat metrics dict."""
        return {
            "moves_made_count": len(self._moves_made),
            "known_safes_count": len(self._safes),
            "known_mines_count": len(self._mines),
            "sentences_count": len(self._knowledge),
            "inferred_safe_count": self.inferred_safe_count,
            "inferred_mine_count": self.inferred_mine_count,
            "derived_sentence_count": self.derived_sentence_count,
            "inference_pass_count": self.inference_pass_count,
            "random_moves_count": self.random_moves_count,
        }
