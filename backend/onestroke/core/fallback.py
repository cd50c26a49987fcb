"""Search-free traversal patterns used when path search gives up.

Each pattern first lays out an ordering of grid cells. The ordering is then
cleaned (out-of-grid and repeated cells dropped) and threaded into a walk:
starting at the first cell, the walk always steps to the unvisited
neighbor that comes earliest in the ordering, and stops when no unvisited
neighbor is left. Orderings that are already unit-step paths (snakes,
spirals, the random walk) come through unchanged; the others (diagonal
sweeps, radial, zig-zag) become staircase-like walks that follow the same
sweep. The result is always a simple path of unit steps.
"""
import logging
import math
from collections import deque
from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Set

from ..models.level import Point
from ..utils.helpers import grid_neighbors, in_bounds
from .rng import SeededRandom

logger = logging.getLogger(__name__)


class FallbackPattern(IntEnum):
    """Fallback traversals, selected by level_id % 9."""
    CORNER_SPIRAL = 0
    DIAGONAL_SWEEP = 1
    HORIZONTAL_SNAKE = 2
    RADIAL = 3
    RANDOM_WALK = 4
    VERTICAL_SNAKE = 5
    REVERSE_DIAGONAL_SWEEP = 6
    CENTER_SPIRAL = 7
    ZIGZAG = 8


# Seed for the random-walk pattern: independent of the search stream
WALK_SEED_MULTIPLIERS = (7919, 1321)


def select_pattern(level_id: int) -> FallbackPattern:
    return FallbackPattern(level_id % len(FallbackPattern))


def _all_cells(size: int) -> List[Point]:
    return [Point(x, y) for y in range(size) for x in range(size)]


# ===== Orderings =====

def corner_spiral(size: int, level_id: int = 0) -> List[Point]:
    """
    Sweep outward from the top-left corner in L-shaped shells.

    Shell k holds the cells with max(x, y) == k. Odd shells run down the
    right edge of the shell then back along its bottom; even shells run the
    other way, so each shell starts next to where the previous one ended.
    """
    order = [Point(0, 0)] if size > 0 else []
    for k in range(1, size):
        shell = [Point(k, y) for y in range(k + 1)] + [Point(x, k) for x in range(k - 1, -1, -1)]
        if k % 2 == 0:
            shell.reverse()
        order.extend(shell)
    return order


def diagonal_sweep(size: int, level_id: int = 0) -> List[Point]:
    """Anti-diagonals from the top-left corner toward the bottom-right."""
    return sorted(_all_cells(size), key=lambda p: (p.x + p.y, p.x))


def horizontal_snake(size: int, level_id: int = 0) -> List[Point]:
    order = []
    for y in range(size):
        xs = range(size) if y % 2 == 0 else range(size - 1, -1, -1)
        order.extend(Point(x, y) for x in xs)
    return order


def radial(size: int, level_id: int = 0) -> List[Point]:
    """Breadth-first rings around the grid center, each ring ordered by angle."""
    if size < 1:
        return []
    center = Point(size // 2, size // 2)
    depth: Dict[Point, int] = {center: 0}
    queue = deque([center])
    while queue:
        cell = queue.popleft()
        for nb in grid_neighbors(cell, size):
            if nb not in depth:
                depth[nb] = depth[cell] + 1
                queue.append(nb)

    def key(p: Point):
        return (depth[p], math.atan2(p.y - center.y, p.x - center.x))

    return sorted(depth, key=key)


def random_walk(size: int, level_id: int = 0) -> List[Point]:
    """Walk to a random unvisited neighbor until boxed in; at most size*size cells."""
    if size < 1:
        return []
    rng = SeededRandom(level_id * WALK_SEED_MULTIPLIERS[0] + level_id * WALK_SEED_MULTIPLIERS[1])
    current = Point(rng.randbelow(size), rng.randbelow(size))
    order = [current]
    visited = {current}

    for _ in range(size * size - 1):
        options = [p for p in grid_neighbors(current, size) if p not in visited]
        if not options:
            break
        current = rng.choice(options)
        visited.add(current)
        order.append(current)

    return order


def vertical_snake(size: int, level_id: int = 0) -> List[Point]:
    order = []
    for x in range(size):
        ys = range(size) if x % 2 == 0 else range(size - 1, -1, -1)
        order.extend(Point(x, y) for y in ys)
    return order


def reverse_diagonal_sweep(size: int, level_id: int = 0) -> List[Point]:
    """Anti-diagonals from the bottom-right corner toward the top-left."""
    return list(reversed(diagonal_sweep(size)))


def center_spiral(size: int, level_id: int = 0) -> List[Point]:
    """
    Counter-clockwise spiral from the center out to the top-left corner.

    Built as a clockwise inward spiral from (0, 0), then reversed.
    """
    order: List[Point] = []
    top, left, bottom, right = 0, 0, size - 1, size - 1
    while top <= bottom and left <= right:
        order.extend(Point(x, top) for x in range(left, right + 1))
        order.extend(Point(right, y) for y in range(top + 1, bottom + 1))
        if top < bottom:
            order.extend(Point(x, bottom) for x in range(right - 1, left - 1, -1))
        if left < right:
            order.extend(Point(left, y) for y in range(bottom - 1, top, -1))
        top, left, bottom, right = top + 1, left + 1, bottom - 1, right - 1
    order.reverse()
    return order


def zigzag(size: int, level_id: int = 0) -> List[Point]:
    """Anti-diagonals, flipping the column direction every second diagonal."""
    def key(p: Point):
        diagonal = p.x + p.y
        return (diagonal, p.x if (diagonal // 2) % 2 == 0 else -p.x)

    return sorted(_all_cells(size), key=key)


PATTERN_BUILDERS: Dict[FallbackPattern, Callable[[int, int], List[Point]]] = {
    FallbackPattern.CORNER_SPIRAL: corner_spiral,
    FallbackPattern.DIAGONAL_SWEEP: diagonal_sweep,
    FallbackPattern.HORIZONTAL_SNAKE: horizontal_snake,
    FallbackPattern.RADIAL: radial,
    FallbackPattern.RANDOM_WALK: random_walk,
    FallbackPattern.VERTICAL_SNAKE: vertical_snake,
    FallbackPattern.REVERSE_DIAGONAL_SWEEP: reverse_diagonal_sweep,
    FallbackPattern.CENTER_SPIRAL: center_spiral,
    FallbackPattern.ZIGZAG: zigzag,
}


# ===== Cleanup and threading =====

def dedupe(points: Iterable[Point], size: int) -> List[Point]:
    """Drop out-of-grid cells and any cell already seen earlier."""
    seen: Set[Point] = set()
    result = []
    for p in points:
        if p in seen or not in_bounds(p.x, p.y, size):
            continue
        seen.add(p)
        result.append(p)
    return result


def thread_path(order: List[Point], size: int) -> List[Point]:
    """Greedy unit-step walk through order, always taking the earliest unvisited neighbor."""
    if not order:
        return []
    rank = {p: i for i, p in enumerate(order)}
    current = order[0]
    path = [current]
    visited = {current}

    while True:
        options = [p for p in grid_neighbors(current, size) if p in rank and p not in visited]
        if not options:
            break
        current = min(options, key=rank.__getitem__)
        visited.add(current)
        path.append(current)

    return path


def build_pattern(pattern: FallbackPattern, size: int, level_id: int = 0) -> List[Point]:
    """Lay out one pattern on a size x size grid and return it as a simple path."""
    if size < 1:
        raise ValueError(f"grid size must be positive, got {size}")
    order = dedupe(PATTERN_BUILDERS[pattern](size, level_id), size)
    return thread_path(order, size)


def generate_fallback_path(level_id: int, size: int) -> List[Point]:
    """
    Deterministic path for a level whose search ran out of attempts.

    Args:
        level_id: Level identifier; selects the pattern and seeds the random walk.
        size: Grid side length.

    Returns:
        A simple unit-step path over the grid.
    """
    pattern = select_pattern(level_id)
    path = build_pattern(pattern, size, level_id)
    logger.debug("fallback pattern %s for level %d: %d cells", pattern.name, level_id, len(path))
    return path
