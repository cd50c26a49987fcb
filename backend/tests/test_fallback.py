"""Tests for the fallback traversal patterns."""
import pytest
from onestroke.core.fallback import (
    FallbackPattern,
    build_pattern,
    dedupe,
    generate_fallback_path,
    random_walk,
    select_pattern,
    thread_path,
)
from onestroke.models.level import Point


def full_grid(size):
    return {Point(x, y) for x in range(size) for y in range(size)}


def assert_simple_path(path, size):
    assert len(set(path)) == len(path)
    for p in path:
        assert 0 <= p.x < size and 0 <= p.y < size
    for a, b in zip(path, path[1:]):
        assert a.manhattan(b) == 1


# Patterns whose threaded walk covers the whole grid
COVERING_PATTERNS = [
    FallbackPattern.CORNER_SPIRAL,
    FallbackPattern.DIAGONAL_SWEEP,
    FallbackPattern.HORIZONTAL_SNAKE,
    FallbackPattern.RADIAL,
    FallbackPattern.VERTICAL_SNAKE,
    FallbackPattern.REVERSE_DIAGONAL_SWEEP,
    FallbackPattern.CENTER_SPIRAL,
]


class TestPatternSelection:
    """Test cases for pattern selection."""

    def test_select_by_id_mod_nine(self):
        """Test that the pattern is chosen by level_id % 9."""
        assert select_pattern(9) == FallbackPattern.CORNER_SPIRAL
        assert select_pattern(11) == FallbackPattern.HORIZONTAL_SNAKE
        assert select_pattern(200) == FallbackPattern.HORIZONTAL_SNAKE
        assert select_pattern(17) == FallbackPattern.ZIGZAG


class TestPatterns:
    """Test cases for each pattern."""

    @pytest.mark.parametrize("pattern", list(FallbackPattern))
    @pytest.mark.parametrize("size", range(1, 9))
    def test_every_pattern_is_simple_path(self, pattern, size):
        """Test that every pattern yields a simple unit-step path."""
        path = build_pattern(pattern, size, level_id=pattern.value + 9 * size)
        assert_simple_path(path, size)
        assert len(path) >= min(3, size * size)

    @pytest.mark.parametrize("pattern", COVERING_PATTERNS)
    @pytest.mark.parametrize("size", range(2, 9))
    def test_covering_patterns_fill_grid(self, pattern, size):
        """Test that the deterministic sweeps visit every cell."""
        path = build_pattern(pattern, size)
        assert set(path) == full_grid(size)

    def test_horizontal_snake_shape(self):
        """Test the horizontal snake on a 3x3 grid."""
        path = build_pattern(FallbackPattern.HORIZONTAL_SNAKE, 3)
        assert path[:4] == [Point(0, 0), Point(1, 0), Point(2, 0), Point(2, 1)]
        assert path[-1] == Point(2, 2)

    def test_vertical_snake_shape(self):
        """Test the vertical snake on a 3x3 grid."""
        path = build_pattern(FallbackPattern.VERTICAL_SNAKE, 3)
        assert path[:4] == [Point(0, 0), Point(0, 1), Point(0, 2), Point(1, 2)]

    def test_corner_spiral_starts_in_corner(self):
        """Test that the corner spiral sweeps outward from (0, 0)."""
        path = build_pattern(FallbackPattern.CORNER_SPIRAL, 4)
        assert path[:4] == [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]

    def test_center_spiral_starts_in_center(self):
        """Test that the center spiral starts at the middle and ends at the corner."""
        path = build_pattern(FallbackPattern.CENTER_SPIRAL, 3)
        assert path[0] == Point(1, 1)
        assert path[-1] == Point(0, 0)

    def test_diagonal_sweeps_start_at_opposite_corners(self):
        """Test the start cells of the diagonal sweeps."""
        assert build_pattern(FallbackPattern.DIAGONAL_SWEEP, 5)[0] == Point(0, 0)
        assert build_pattern(FallbackPattern.REVERSE_DIAGONAL_SWEEP, 5)[0] == Point(4, 4)

    def test_radial_starts_at_center(self):
        """Test that the radial pattern starts at the grid center."""
        assert build_pattern(FallbackPattern.RADIAL, 5)[0] == Point(2, 2)

    def test_random_walk_is_seeded_per_level(self):
        """Test that the random walk repeats for one level."""
        assert random_walk(6, 13) == random_walk(6, 13)

    def test_random_walk_is_bounded(self):
        """Test that the random walk never exceeds the cell count."""
        for level_id in range(1, 60):
            assert len(random_walk(5, level_id)) <= 25

    def test_rejects_empty_grid(self):
        """Test that a non-positive grid size raises."""
        with pytest.raises(ValueError):
            build_pattern(FallbackPattern.HORIZONTAL_SNAKE, 0)


class TestCleanup:
    """Test cases for dedupe and threading."""

    def test_dedupe_drops_repeats_and_out_of_bounds(self):
        """Test that dedupe keeps first occurrences inside the grid."""
        points = [Point(0, 0), Point(1, 0), Point(0, 0), Point(5, 5), Point(1, 1)]
        assert dedupe(points, 2) == [Point(0, 0), Point(1, 0), Point(1, 1)]

    def test_thread_keeps_valid_path(self):
        """Test that an ordering already made of unit steps comes through unchanged."""
        order = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        assert thread_path(order, 2) == order

    def test_thread_repairs_jumps(self):
        """Test that non-adjacent orderings become unit-step walks."""
        order = [Point(0, 0), Point(0, 1), Point(1, 0), Point(1, 1)]
        path = thread_path(order, 2)
        assert_simple_path(path, 2)
        assert path[0] == Point(0, 0)

    def test_thread_empty(self):
        """Test threading an empty ordering."""
        assert thread_path([], 3) == []


class TestGenerateFallbackPath:
    """Test cases for generate_fallback_path."""

    @pytest.mark.parametrize("level_id", range(1, 19))
    def test_valid_for_all_patterns(self, level_id):
        """Test fallback for two full cycles of patterns."""
        path = generate_fallback_path(level_id, 6)
        assert_simple_path(path, 6)
        assert len(path) >= 3

    def test_deterministic(self):
        """Test that fallback output repeats."""
        assert generate_fallback_path(40, 7) == generate_fallback_path(40, 7)
