"""Backtracking path search over the 4-neighbor grid graph."""
import logging
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Set

from ..models.level import Point
from ..utils.helpers import grid_neighbors
from .rng import SeededRandom

logger = logging.getLogger(__name__)


class NeighborOrder(IntEnum):
    """Neighbor-ordering heuristics, picked per step by (style + path length) % 7."""
    SHUFFLE = 0
    MOMENTUM = 1
    HORIZONTAL = 2
    VERTICAL = 3
    OUTWARD = 4
    CHECKERBOARD = 5
    REVERSED_SHUFFLE = 6


def select_order(style: int, path_length: int) -> NeighborOrder:
    return NeighborOrder((style + path_length) % len(NeighborOrder))


@dataclass
class SearchContext:
    """Scratch state for one search attempt. Never shared between calls."""
    grid_size: int
    target_length: int
    style: int
    rng: SeededRandom
    max_expansions: int
    path: List[Point] = field(default_factory=list)
    visited: Set[Point] = field(default_factory=set)
    expansions: int = 0

    @property
    def exhausted(self) -> bool:
        return self.expansions >= self.max_expansions


class PathSearch:
    """
    Extends a path from a start cell until it holds target_length cells.

    The search only needs to reach the target length, not fill the grid.
    Each attempt is capped at max_expansions path extensions; a capped or
    exhausted attempt returns None and the caller decides whether to retry.
    The random stream is shared across attempts, so retries continue the
    sequence instead of replaying it.
    """

    def __init__(
        self,
        grid_size: int,
        target_length: int,
        style: int,
        rng: SeededRandom,
        max_expansions: int = 1000,
    ):
        if grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {grid_size}")
        self.grid_size = grid_size
        self.target_length = target_length
        self.style = style
        self.rng = rng
        self.max_expansions = max_expansions

        self._orderings: Dict[NeighborOrder, Callable[[SearchContext, Point, List[Point]], List[Point]]] = {
            NeighborOrder.SHUFFLE: self._order_shuffle,
            NeighborOrder.MOMENTUM: self._order_momentum,
            NeighborOrder.HORIZONTAL: self._order_horizontal,
            NeighborOrder.VERTICAL: self._order_vertical,
            NeighborOrder.OUTWARD: self._order_outward,
            NeighborOrder.CHECKERBOARD: self._order_checkerboard,
            NeighborOrder.REVERSED_SHUFFLE: self._order_reversed_shuffle,
        }

    def run(self, start: Point) -> Optional[List[Point]]:
        """
        Run one search attempt from start.

        Returns:
            The path (start first) on success, None if the attempt failed.
        """
        ctx = SearchContext(
            grid_size=self.grid_size,
            target_length=self.target_length,
            style=self.style,
            rng=self.rng,
            max_expansions=self.max_expansions,
            path=[start],
            visited={start},
        )
        found = self._extend(ctx, start)
        logger.debug(
            "search from (%d, %d): %s after %d expansions",
            start.x, start.y, "found" if found else "failed", ctx.expansions,
        )
        return list(ctx.path) if found else None

    def _extend(self, ctx: SearchContext, current: Point) -> bool:
        if len(ctx.path) >= ctx.target_length:
            return True
        if ctx.exhausted:
            return False
        ctx.expansions += 1

        # Cells cut off from the path head can never be reached again
        if self._reachable_count(ctx, current) < ctx.target_length - len(ctx.path):
            return False

        candidates = [p for p in grid_neighbors(current, ctx.grid_size) if p not in ctx.visited]
        order = select_order(ctx.style, len(ctx.path))
        candidates = self._orderings[order](ctx, current, candidates)

        for nxt in candidates:
            ctx.path.append(nxt)
            ctx.visited.add(nxt)

            if self._extend(ctx, nxt):
                return True

            ctx.visited.discard(nxt)
            ctx.path.pop()

        return False

    @staticmethod
    def _reachable_count(ctx: SearchContext, origin: Point) -> int:
        """Number of unvisited cells connected to origin."""
        seen: Set[Point] = set()
        stack = [origin]
        while stack:
            cell = stack.pop()
            for nb in grid_neighbors(cell, ctx.grid_size):
                if nb not in ctx.visited and nb not in seen:
                    seen.add(nb)
                    stack.append(nb)
        return len(seen)

    # ===== Neighbor orderings =====
    # Every random tie-break draws from ctx.rng, one draw per candidate in
    # candidate order, so the result is reproducible.

    def _order_shuffle(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        return ctx.rng.shuffle(candidates)

    def _order_momentum(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        """Prefer carrying on in the direction of the last step."""
        if len(ctx.path) < 2:
            return ctx.rng.shuffle(candidates)
        prev = ctx.path[-2]
        heading = (current.x - prev.x, current.y - prev.y)

        def key(p: Point):
            straight = (p.x - current.x, p.y - current.y) == heading
            return (0 if straight else 1, ctx.rng.random())

        return sorted(candidates, key=key)

    def _order_horizontal(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        def key(p: Point):
            score = abs(p.x - current.x) * 2 + abs(p.y - current.y)
            return (-score, ctx.rng.random())

        return sorted(candidates, key=key)

    def _order_vertical(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        def key(p: Point):
            score = abs(p.y - current.y) * 2 + abs(p.x - current.x)
            return (-score, ctx.rng.random())

        return sorted(candidates, key=key)

    def _order_outward(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        """Farther from the grid center first, which pulls the path into a spiral."""
        center = ctx.grid_size // 2

        def key(p: Point):
            return (-math.hypot(p.x - center, p.y - center), ctx.rng.random())

        return sorted(candidates, key=key)

    def _order_checkerboard(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        """Alternate between even-sum and odd-sum cells as the path length flips parity."""
        prefer_even = len(ctx.path) % 2 == 0

        def key(p: Point):
            matches = ((p.x + p.y) % 2 == 0) == prefer_even
            return (0 if matches else 1, ctx.rng.random())

        return sorted(candidates, key=key)

    def _order_reversed_shuffle(self, ctx: SearchContext, current: Point, candidates: List[Point]) -> List[Point]:
        candidates.reverse()
        return ctx.rng.shuffle(candidates)
