"""Tests for level generator."""
import warnings

import pytest
from onestroke.core.fallback import FallbackPattern, select_pattern
from onestroke.core.generator import (
    GenerationError,
    LevelGenerator,
    assemble_level,
    generate_level,
    get_generator,
    get_solution,
)
from onestroke.models.level import GenerationSource, Point
from onestroke.utils.helpers import node_signature, validate_level


@pytest.fixture
def generator():
    """Create generator instance."""
    return LevelGenerator()


SPOT_CHECK_IDS = list(range(1, 41)) + [45, 60, 61, 75, 99, 100, 101, 130, 150, 171, 199, 200]


class TestLevelGenerator:
    """Test cases for LevelGenerator."""

    def test_generate_returns_result(self, generator):
        """Test that generate returns a GenerationResult."""
        result = generator.generate(1)

        assert result.level.id == 1
        assert result.params.level_id == 1
        assert result.source in (GenerationSource.SEARCH, GenerationSource.FALLBACK)
        assert result.attempts >= 0
        assert result.generation_time_ms >= 0

    @pytest.mark.parametrize("level_id", SPOT_CHECK_IDS)
    def test_generated_levels_are_valid(self, generator, level_id):
        """Test that generated levels satisfy every structural invariant."""
        level = generator.generate(level_id).level
        is_valid, error = validate_level(level)
        assert is_valid, error
        assert level.grid_size == generator.generate(level_id).params.grid_size

    @pytest.mark.parametrize("level_id", [1, 17, 64, 150, 200])
    def test_deterministic_across_instances(self, level_id):
        """Test that two fresh generators agree exactly."""
        a = LevelGenerator().generate(level_id).level
        b = LevelGenerator().generate(level_id).level
        assert a == b

    def test_first_level_is_small(self, generator):
        """Test that level 1 is an easy warm-up."""
        level = generator.generate(1).level
        assert level.grid_size <= 3
        assert level.node_count <= 5

    def test_last_level_is_dense(self, generator):
        """Test that level 200 fills most of an 8x8 grid."""
        level = generator.generate(200).level
        assert level.grid_size == 8
        assert level.coverage >= 0.8

    def test_result_to_dict(self, generator):
        """Test that the result dict includes the solution and bookkeeping."""
        data = generator.generate(5).to_dict()
        assert "solution" in data["level"]
        assert data["params"]["level_id"] == 5
        assert data["source"] in ("search", "fallback")

    @pytest.mark.parametrize("level_id", [1, 10, 30, 100, 200])
    def test_search_hits_target_count(self, generator, level_id):
        """Test that a searched level has exactly the target node count."""
        result = generator.generate(level_id)
        assert result.source == GenerationSource.SEARCH
        assert result.attempts >= 1
        assert result.level.node_count == result.params.target_node_count

    def test_top_tier_gets_larger_budget(self, generator):
        """Test the attempt budget boundary at level 100."""
        assert generator.attempt_budget(100) == LevelGenerator.MAX_ATTEMPTS
        assert generator.attempt_budget(101) == LevelGenerator.MAX_ATTEMPTS_TOP_TIER

    def test_rejects_non_positive_id(self, generator):
        """Test that level ids below one raise."""
        with pytest.raises(ValueError):
            generator.generate(0)

    def test_uniqueness_spot_check(self, generator):
        """Test that most Master-tier levels have distinct node sets."""
        signatures = {}
        for level_id in range(61, 81):
            signatures.setdefault(node_signature(generator.generate(level_id).level), []).append(level_id)
        shared = [ids for ids in signatures.values() if len(ids) > 1]
        if shared:
            warnings.warn(f"levels sharing a node set: {shared}")


class TestFallback:
    """Test cases for levels produced without search."""

    @pytest.fixture
    def fallback_generator(self):
        return LevelGenerator(max_attempts=0, max_attempts_top_tier=0)

    @pytest.mark.parametrize("level_id", list(range(1, 19)) + [30, 60, 101, 200])
    def test_fallback_levels_are_valid(self, fallback_generator, level_id):
        """Test that every pattern produces a valid level on every grid size."""
        result = fallback_generator.generate(level_id)
        assert result.source == GenerationSource.FALLBACK
        assert result.attempts == 0
        is_valid, error = validate_level(result.level)
        assert is_valid, error

    def test_fallback_covers_all_patterns(self):
        """Test that the fallback ids above reach every pattern."""
        assert {select_pattern(i) for i in range(1, 19)} == set(FallbackPattern)

    def test_fallback_is_deterministic(self, fallback_generator):
        """Test that the fallback path repeats for one level."""
        assert fallback_generator.generate(13).level == fallback_generator.generate(13).level


class TestAssembly:
    """Test cases for assemble_level."""

    def test_nodes_sorted_row_major(self):
        """Test that nodes are row-major and the start is the first path cell."""
        path = [Point(1, 1), Point(1, 0), Point(0, 0)]
        level = assemble_level(7, 3, path)
        assert level.start == Point(1, 1)
        assert level.nodes == (Point(0, 0), Point(1, 0), Point(1, 1))
        assert level.solution == tuple(path)

    def test_short_path_raises(self):
        """Test that fewer than three cells raise GenerationError."""
        with pytest.raises(GenerationError) as exc_info:
            assemble_level(4, 3, [Point(0, 0), Point(1, 0)])
        assert exc_info.value.level_id == 4

    def test_single_cell_grid_raises(self):
        """Test that a one-cell grid cannot hold a level."""
        with pytest.raises(GenerationError):
            assemble_level(1, 1, [Point(0, 0)])

    def test_to_dict_hides_solution(self):
        """Test that the serialized level carries no solution by default."""
        level = generate_level(3)
        data = level.to_dict()
        assert "solution" not in data
        assert data["gridSize"] == level.grid_size
        assert "solution" in level.to_dict(include_solution=True)


class TestModuleFunctions:
    """Test cases for the module-level accessors."""

    def test_get_generator_singleton(self):
        """Test that get_generator returns singleton."""
        assert get_generator() is get_generator()

    def test_solution_matches_level(self):
        """Test that the hint is the level's own solution."""
        assert get_solution(12) == list(generate_level(12).solution)
