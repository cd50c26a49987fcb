"""Seeded 32-bit random stream shared by every stage of level generation.

The stream is the mulberry32 mixer: a Weyl increment followed by xor-shift
and multiply rounds over 32-bit state. All arithmetic is masked to 32 bits,
so a given seed yields the same float sequence on every platform.
"""
from typing import List, Sequence, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
WEYL_INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a * b."""
    return (a * b) & MASK_32


class SeededRandom:
    """Deterministic float stream in [0, 1) owned by a single generation call."""

    def __init__(self, seed: int):
        self.state = seed & MASK_32
        self.draws = 0

    def random(self) -> float:
        """Advance the stream and return the next float in [0, 1)."""
        self.state = (self.state + WEYL_INCREMENT) & MASK_32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        self.draws += 1
        return ((t ^ (t >> 14)) & MASK_32) / TWO_POW_32

    def randbelow(self, n: int) -> int:
        """Integer in [0, n) drawn from one float."""
        if n <= 0:
            raise ValueError(f"randbelow() requires n > 0, got {n}")
        return int(self.random() * n)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one item, consuming one draw."""
        return items[self.randbelow(len(items))]

    def shuffle(self, items: List[T]) -> List[T]:
        """Fisher-Yates shuffle in place, from the back. Returns the list."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]
        return items
