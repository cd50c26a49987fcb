"""Level generator: difficulty curve, path search with retries, fallback, assembly."""
import logging
import time
from typing import List, Optional, Sequence

from ..models.level import (
    DifficultyParams,
    GenerationResult,
    GenerationSource,
    LevelDescriptor,
    Point,
)
from ..utils.helpers import MIN_LEVEL_NODES, sort_row_major
from .difficulty import TOP_TIER_START, get_difficulty_params
from .fallback import generate_fallback_path
from .rng import SeededRandom
from .search import PathSearch
from .start import select_start

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when no usable path of at least three cells could be produced."""

    def __init__(self, level_id: int, message: str):
        super().__init__(f"Level {level_id}: {message}")
        self.level_id = level_id


def assemble_level(level_id: int, grid_size: int, path: Sequence[Point]) -> LevelDescriptor:
    """
    Build the level record from a chosen path.

    Raises:
        GenerationError: If the path has fewer than three cells.
    """
    if len(path) < MIN_LEVEL_NODES:
        raise GenerationError(
            level_id,
            f"path has {len(path)} cells, at least {MIN_LEVEL_NODES} are required",
        )
    solution = tuple(path)
    return LevelDescriptor(
        id=level_id,
        grid_size=grid_size,
        start=solution[0],
        nodes=tuple(sort_row_major(solution)),
        solution=solution,
    )


class LevelGenerator:
    """Generates levels deterministically from their id."""

    # Search stream seed: level_id * SEED_MULTIPLIER + SEED_OFFSET
    SEED_MULTIPLIER = 9973
    SEED_OFFSET = 12345

    # Higher coverage makes each attempt less likely to succeed, so the
    # top tier gets a larger budget.
    MAX_ATTEMPTS = 350
    MAX_ATTEMPTS_TOP_TIER = 500

    # Path extensions allowed per attempt
    MAX_EXPANSIONS = 1000

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        max_attempts_top_tier: Optional[int] = None,
        max_expansions: Optional[int] = None,
    ):
        self.max_attempts = self.MAX_ATTEMPTS if max_attempts is None else max_attempts
        self.max_attempts_top_tier = (
            self.MAX_ATTEMPTS_TOP_TIER if max_attempts_top_tier is None else max_attempts_top_tier
        )
        self.max_expansions = self.MAX_EXPANSIONS if max_expansions is None else max_expansions

    def attempt_budget(self, level_id: int) -> int:
        return self.max_attempts_top_tier if level_id > TOP_TIER_START else self.max_attempts

    def generate(self, level_id: int) -> GenerationResult:
        """
        Generate the level for level_id.

        Args:
            level_id: Positive level identifier. Range checks are the caller's job.

        Returns:
            GenerationResult with the level and how it was produced.

        Raises:
            GenerationError: If neither search nor fallback yields three cells.
            ValueError: If level_id is not positive.
        """
        start_time = time.time()

        params = get_difficulty_params(level_id)
        logger.debug(
            "level %d: grid %d, coverage %.3f, style %d, target %d",
            level_id, params.grid_size, params.coverage, params.style, params.target_node_count,
        )

        path, attempts = self._search(params)
        source = GenerationSource.SEARCH

        if path is None:
            logger.info(
                "level %d: search failed after %d attempts, using fallback pattern",
                level_id, attempts,
            )
            path = generate_fallback_path(level_id, params.grid_size)
            source = GenerationSource.FALLBACK

        level = assemble_level(level_id, params.grid_size, path)

        generation_time_ms = int((time.time() - start_time) * 1000)

        return GenerationResult(
            level=level,
            params=params,
            source=source,
            attempts=attempts,
            generation_time_ms=generation_time_ms,
        )

    def _search(self, params: DifficultyParams):
        """Run search attempts on one continuing random stream. Returns (path or None, attempts used)."""
        rng = SeededRandom(params.level_id * self.SEED_MULTIPLIER + self.SEED_OFFSET)
        search = PathSearch(
            grid_size=params.grid_size,
            target_length=params.target_node_count,
            style=params.style,
            rng=rng,
            max_expansions=self.max_expansions,
        )

        budget = self.attempt_budget(params.level_id)
        for attempt in range(1, budget + 1):
            start = select_start(params.grid_size, params.level_id, params.style, rng)
            path = search.run(start)
            if path is not None:
                logger.debug("level %d: search succeeded on attempt %d", params.level_id, attempt)
                return path, attempt

        return None, budget


# Singleton instance
_generator = None


def get_generator() -> LevelGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        _generator = LevelGenerator()
    return _generator


def generate_level(level_id: int) -> LevelDescriptor:
    """Generate the level record for level_id."""
    return get_generator().generate(level_id).level


def get_solution(level_id: int) -> List[Point]:
    """Hint accessor: the solution path for level_id."""
    return list(get_generator().generate(level_id).level.solution)
