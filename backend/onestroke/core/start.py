"""Start-cell placement heuristics."""
import math
from enum import IntEnum

from ..models.level import Point
from .rng import SeededRandom


class StartPlacement(IntEnum):
    """Start-cell heuristics, indexed by the start selector."""
    CORNER = 0
    HORIZONTAL_EDGE = 1
    VERTICAL_EDGE = 2
    CENTER_BIAS = 3
    DIAGONAL_OFFSET = 4
    ASYMMETRIC = 5
    WAVE = 6


# The placement drifts every DRIFT_SHORT levels and again every DRIFT_LONG.
DRIFT_SHORT = 10
DRIFT_LONG = 50
CENTER_WINDOW = 0.4  # fraction of the grid side the center-biased start may wander
WAVE_PERIOD = 7


def _clamp(value: int, size: int) -> int:
    return max(0, min(size - 1, value))


def select_placement(level_id: int, style: int) -> StartPlacement:
    """Heuristic used for this level: style plus slow id-derived drift."""
    index = (style + level_id // DRIFT_SHORT + level_id // DRIFT_LONG) % len(StartPlacement)
    return StartPlacement(index)


def select_start(grid_size: int, level_id: int, style: int, rng: SeededRandom) -> Point:
    """
    Pick the path's start cell.

    Placements that need randomness draw from rng, so the stream position
    after this call depends on which placement was chosen.

    Args:
        grid_size: Side length of the grid.
        level_id: Level identifier.
        style: Style selector from the difficulty curve.
        rng: The generation call's random stream.

    Returns:
        A Point inside the grid.
    """
    size = grid_size
    placement = select_placement(level_id, style)

    if placement == StartPlacement.CORNER:
        # Corner rotates with id parity
        x = 0 if level_id % 2 == 0 else size - 1
        y = 0 if (level_id // 2) % 2 == 0 else size - 1

    elif placement == StartPlacement.HORIZONTAL_EDGE:
        x = rng.randbelow(size)
        y = 0 if level_id % 2 == 0 else size - 1

    elif placement == StartPlacement.VERTICAL_EDGE:
        x = 0 if level_id % 2 == 0 else size - 1
        y = rng.randbelow(size)

    elif placement == StartPlacement.CENTER_BIAS:
        x = math.floor(size / 2 + (rng.random() - 0.5) * size * CENTER_WINDOW)
        y = math.floor(size / 2 + (rng.random() - 0.5) * size * CENTER_WINDOW)

    elif placement == StartPlacement.DIAGONAL_OFFSET:
        offset = level_id % size
        x = offset
        y = (offset + level_id // size) % size

    elif placement == StartPlacement.ASYMMETRIC:
        # Ternary pick per axis among low edge, high edge and middle
        axis_choices = (0, size - 1, size // 2)
        x = axis_choices[level_id % 3]
        y = axis_choices[(level_id // 3) % 3]

    else:
        # Wave: the start travels along one border as id grows
        wave = (level_id // WAVE_PERIOD) % size
        lane = level_id % 4
        if lane == 0:
            x = wave
        elif lane == 1:
            x = size - 1 - wave
        else:
            x = 0 if rng.random() < 0.5 else size - 1
        if lane == 2:
            y = wave
        elif lane == 3:
            y = size - 1 - wave
        else:
            y = 0 if rng.random() < 0.5 else size - 1

    return Point(_clamp(x, size), _clamp(y, size))
