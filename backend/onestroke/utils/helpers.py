"""Utility helper functions."""
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..models.level import LevelDescriptor, Point

MIN_LEVEL_NODES = 3


def in_bounds(x: int, y: int, grid_size: int) -> bool:
    return 0 <= x < grid_size and 0 <= y < grid_size


def grid_neighbors(point: Point, grid_size: int) -> List[Point]:
    """In-bounds 4-neighbors of point, in up, down, left, right order."""
    x, y = point.x, point.y
    candidates = ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y))
    return [Point(cx, cy) for cx, cy in candidates if in_bounds(cx, cy, grid_size)]


def sort_row_major(points: Iterable[Point]) -> List[Point]:
    """Points ordered by row, then column."""
    return sorted(points, key=lambda p: p.row_major_key())


def node_signature(level: LevelDescriptor) -> Tuple[int, FrozenSet[Point]]:
    """Key under which two levels count as duplicates: grid size plus node set."""
    return level.grid_size, frozenset(level.nodes)


def count_direction_changes(path: Sequence[Point]) -> int:
    """Number of turns along a path."""
    changes = 0
    prev_step = None
    for a, b in zip(path, path[1:]):
        step = (b.x - a.x, b.y - a.y)
        if prev_step is not None and step != prev_step:
            changes += 1
        prev_step = step
    return changes


def validate_level(level: LevelDescriptor) -> Tuple[bool, Optional[str]]:
    """
    Check the structural invariants of a generated level.

    Args:
        level: Level to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    solution = level.solution
    size = level.grid_size

    if size < 1:
        return False, f"grid size must be positive, got {size}"

    if len(level.nodes) < MIN_LEVEL_NODES:
        return False, f"level has {len(level.nodes)} nodes, need at least {MIN_LEVEL_NODES}"

    if not solution or solution[0] != level.start:
        return False, "solution does not begin at the start cell"

    if len(set(solution)) != len(solution):
        return False, "solution revisits a cell"

    if len(level.nodes) != len(solution) or set(level.nodes) != set(solution):
        return False, "nodes and solution cover different cells"

    for p in solution:
        if not in_bounds(p.x, p.y, size):
            return False, f"cell ({p.x}, {p.y}) is outside the {size}x{size} grid"

    for i, (a, b) in enumerate(zip(solution, solution[1:])):
        if a.manhattan(b) != 1:
            return False, (
                f"step {i} from ({a.x}, {a.y}) to ({b.x}, {b.y}) is not a unit move"
            )

    return True, None
