"""Default board settings and standard difficulty presets."""

from typing import Dict, Tuple

DEFAULT_HEIGHT: int = 8
DEFAULT_WIDTH: int = 8
DEFAULT_MINES: int = 8

# level -> (height, width, mines)
LEVELS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 10),
    "intermediate": (16, 16, 40),
    "expert": (16, 30, 99),
}


def get_level(name: str) -> Tuple[int, int, int]:
    """
    Look up a difficulty preset by name.

    Raises:
        ValueError: If the level is not one of LEVELS.
    """
    try:
        return LEVELS[name]
    except KeyError:
        raise ValueError(
            f"Unknown level {name!r}; expected one of {sorted(LEVELS)}."
        ) from None
