"""Tests for the seeded random stream."""
import pytest
from onestroke.core.rng import SeededRandom


# First draws for known seeds, computed with the reference 32-bit mixer
REFERENCE_STREAMS = {
    0: [0.26642920868471265, 0.0003297457005828619, 0.2232720274478197, 0.1462021479383111],
    1: [0.6270739405881613, 0.002735721180215478, 0.5274470399599522, 0.9810509674716741],
    22318: [0.1474801911972463, 0.3982249784749001, 0.27817234420217574, 0.15101590403355658],
    2006945: [0.8733950350433588, 0.1715462023857981, 0.5833697086200118, 0.2206705955322832],
}


class TestSeededRandom:
    """Test cases for SeededRandom."""

    @pytest.mark.parametrize("seed,expected", sorted(REFERENCE_STREAMS.items()))
    def test_matches_reference_stream(self, seed, expected):
        """Test that the stream is bit-exact with the reference values."""
        rng = SeededRandom(seed)
        assert [rng.random() for _ in expected] == expected

    def test_same_seed_same_sequence(self):
        """Test that two streams with one seed agree."""
        a = SeededRandom(9973 * 42 + 12345)
        b = SeededRandom(9973 * 42 + 12345)
        assert [a.random() for _ in range(100)] == [b.random() for _ in range(100)]

    def test_values_in_unit_interval(self):
        """Test that every draw lies in [0, 1)."""
        rng = SeededRandom(7)
        for _ in range(1000):
            value = rng.random()
            assert 0.0 <= value < 1.0

    def test_large_seed_is_masked(self):
        """Test that seeds beyond 32 bits wrap like the 32-bit state."""
        a = SeededRandom(5)
        b = SeededRandom(5 + 2 ** 32)
        assert a.random() == b.random()

    def test_draws_are_counted(self):
        """Test that the draw counter advances once per draw."""
        rng = SeededRandom(3)
        rng.random()
        rng.randbelow(10)
        rng.shuffle([1, 2, 3])
        assert rng.draws == 4

    def test_randbelow_range(self):
        """Test that randbelow stays in [0, n)."""
        rng = SeededRandom(11)
        values = {rng.randbelow(4) for _ in range(200)}
        assert values == {0, 1, 2, 3}

    def test_randbelow_rejects_empty_range(self):
        """Test that randbelow(0) raises."""
        with pytest.raises(ValueError):
            SeededRandom(1).randbelow(0)

    def test_shuffle_is_permutation(self):
        """Test that shuffle keeps all items."""
        items = list(range(10))
        shuffled = SeededRandom(99).shuffle(list(items))
        assert sorted(shuffled) == items

    def test_choice_uses_one_draw(self):
        """Test that choice consumes exactly one draw."""
        rng = SeededRandom(123)
        expected_index = int(SeededRandom(123).random() * 3)
        assert rng.choice(["a", "b", "c"]) == ["a", "b", "c"][expected_index]
        assert rng.draws == 1
