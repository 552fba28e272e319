"""Grid helpers shared by the board engine and the deduction agent."""

from typing import Dict, Iterator, List, Tuple

Cell = Tuple[int, int]

# Module-level cache: (height, width) -> {(row, col): ((nr, nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Dict[Cell, Tuple[Cell, ...]]] = {}


def get_neighborhoods(height: int, width: int) -> Dict[Cell, Tuple[Cell, ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every cell in a grid.

    Args:
        height: Grid height (number of rows). Must be positive.
        width: Grid width (number of columns). Must be positive.

    Returns:
        Mapping from each cell (row, col) to a tuple of valid neighboring
        coordinates under 8-connectivity, in row-major order.

    Raises:
        ValueError: If height or width is non-positive.
    """
    if height <= 0 or width <= 0:
        raise ValueError("height and width must be positive.")

    key = (height, width)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Cell, Tuple[Cell, ...]] = {}
    for row in range(height):
        for col in range(width):
            nbrs: List[Cell] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = row + dr, col + dc
                    if 0 <= nr < height and 0 <= nc < width:
                        nbrs.append((nr, nc))
            neighborhoods[(row, col)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def iter_cells(height: int, width: int) -> Iterator[Cell]:
    """Yield every cell of the grid in row-major order."""
    for row in range(height):
        for col in range(width):
            yield (row, col)


def check_cell(cell: Cell, height: int, width: int) -> Cell:
    """Return `cell` as a plain tuple, or raise ValueError if it is off the board."""
    row, col = cell
    if not (0 <= row < height and 0 <= col < width):
        raise ValueError(f"Cell {cell} is outside the {height}x{width} board.")
    return (row, col)
