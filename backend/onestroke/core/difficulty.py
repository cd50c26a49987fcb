"""Difficulty curve: level id -> grid size, coverage target and style."""
import math
from typing import Dict, List, Tuple

from ..models.level import DifficultyParams, DifficultyTier, TierConfig


# =========================================================
# Tuning tables
# =========================================================
# Changing any value here changes every level that depends on it.

# (last id of previous segment, last id of segment, base, increase)
# difficulty = base + ((id - prev) / (last - prev)) * increase
DIFFICULTY_SEGMENTS: List[Tuple[int, int, float, float]] = [
    (0, 4, 0.20, 0.15),      # 0.20 -> 0.35
    (4, 10, 0.35, 0.35),     # 0.35 -> 0.70
    (10, 20, 0.70, 0.20),    # 0.70 -> 0.90
    (20, 31, 0.90, 0.10),    # 0.90 -> 1.00
    (31, 100, 1.00, 0.0),    # plateau
    (100, 130, 1.00, 0.15),  # 1.00 -> 1.15
    (130, 170, 1.15, 0.20),  # 1.15 -> 1.35
    (170, 200, 1.35, 0.15),  # 1.35 -> 1.50, extrapolated past 200
]

# Grid side grows once id exceeds each threshold.
BASE_GRID_SIZE = 3
GRID_SIZE_STEPS: List[Tuple[int, int]] = [
    (4, 4),
    (10, 5),
    (16, 6),
    (31, 7),
    (60, 8),
]
MAX_GRID_SIZE = GRID_SIZE_STEPS[-1][1]

# Minimum coverage for the earliest levels: (last id, floor)
COVERAGE_FLOORS: List[Tuple[int, float]] = [
    (5, 0.65),
    (15, 0.75),
    (31, 0.85),
]
COVERAGE_BASE = 0.4
COVERAGE_SLOPE = 0.5
TOP_TIER_START = 100      # ids above this get the top-tier boost
TOP_TIER_BOOST = 1.1
MAX_COVERAGE = 0.98
MIN_NODE_COUNT = 3

# Style = (sum of (id * m) % STYLE_HASH_MOD over multipliers) % STYLE_COUNT
STYLE_MULTIPLIERS: Tuple[int, ...] = (7, 13, 19)
STYLE_HASH_MOD = 5
STYLE_COUNT = 7


TIER_CONFIGS: Dict[DifficultyTier, TierConfig] = {
    DifficultyTier.TUTORIAL: TierConfig(DifficultyTier.TUTORIAL, (1, 1), "Tutorial"),
    DifficultyTier.EASY_START: TierConfig(DifficultyTier.EASY_START, (2, 4), "Easy Start"),
    DifficultyTier.BEGINNER: TierConfig(DifficultyTier.BEGINNER, (5, 10), "Beginner"),
    DifficultyTier.INTERMEDIATE: TierConfig(DifficultyTier.INTERMEDIATE, (11, 16), "Intermediate"),
    DifficultyTier.ADVANCED: TierConfig(DifficultyTier.ADVANCED, (17, 31), "Advanced"),
    DifficultyTier.EXPERT: TierConfig(DifficultyTier.EXPERT, (32, 60), "Expert"),
    DifficultyTier.MASTER: TierConfig(DifficultyTier.MASTER, (61, 100), "Master"),
    DifficultyTier.EXTREME: TierConfig(DifficultyTier.EXTREME, (101, 130), "Extreme"),
    DifficultyTier.INSANE: TierConfig(DifficultyTier.INSANE, (131, 170), "Insane"),
    DifficultyTier.NIGHTMARE: TierConfig(DifficultyTier.NIGHTMARE, (171, 10**9), "Nightmare"),
}


# =========================================================
# Curve functions
# =========================================================

def _check_level_id(level_id: int) -> None:
    if level_id < 1:
        raise ValueError(f"level_id must be positive, got {level_id}")


def calculate_difficulty(level_id: int) -> float:
    """Piecewise-linear difficulty value (0.2 at the start, 1.5 at level 200)."""
    _check_level_id(level_id)
    segment = DIFFICULTY_SEGMENTS[-1]
    for candidate in DIFFICULTY_SEGMENTS:
        if level_id <= candidate[1]:
            segment = candidate
            break
    prev_end, end, base, increase = segment
    return base + ((level_id - prev_end) / (end - prev_end)) * increase


def calculate_grid_size(level_id: int) -> int:
    """Grid side length; non-decreasing in level_id."""
    _check_level_id(level_id)
    size = BASE_GRID_SIZE
    for threshold, step_size in GRID_SIZE_STEPS:
        if level_id > threshold:
            size = step_size
    return size


def calculate_coverage(level_id: int, difficulty: float) -> float:
    """Fraction of grid cells the node set should cover."""
    coverage = COVERAGE_BASE + difficulty * COVERAGE_SLOPE

    for last_id, floor in COVERAGE_FLOORS:
        if level_id <= last_id:
            coverage = max(floor, coverage)
            break

    if level_id > TOP_TIER_START:
        coverage = min(MAX_COVERAGE, coverage * TOP_TIER_BOOST)

    return coverage


def calculate_style(level_id: int) -> int:
    """
    Heuristic selector in [0, STYLE_COUNT).

    Summing several independent modular hashes keeps the style uncorrelated
    with the tier, so neighboring levels of the same difficulty look different.
    """
    total = sum((level_id * m) % STYLE_HASH_MOD for m in STYLE_MULTIPLIERS)
    return total % STYLE_COUNT


def target_node_count(grid_size: int, coverage: float) -> int:
    return max(MIN_NODE_COUNT, math.floor(grid_size * grid_size * coverage))


def get_difficulty_params(level_id: int) -> DifficultyParams:
    """
    Evaluate the difficulty curve for one level.

    Args:
        level_id: Level identifier (1-based).

    Returns:
        DifficultyParams with grid size, coverage, style and target node count.

    Raises:
        ValueError: If level_id is not positive.
    """
    difficulty = calculate_difficulty(level_id)
    grid_size = calculate_grid_size(level_id)
    coverage = calculate_coverage(level_id, difficulty)

    return DifficultyParams(
        level_id=level_id,
        grid_size=grid_size,
        difficulty=difficulty,
        coverage=coverage,
        style=calculate_style(level_id),
        target_node_count=target_node_count(grid_size, coverage),
    )


def get_tier_for_level(level_id: int) -> DifficultyTier:
    """Named tier containing level_id."""
    for tier, config in TIER_CONFIGS.items():
        if config.contains(level_id):
            return tier
    return DifficultyTier.NIGHTMARE


def get_tier_config(level_id: int) -> TierConfig:
    return TIER_CONFIGS[get_tier_for_level(level_id)]
