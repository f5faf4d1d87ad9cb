"""
Deterministic random number generator for layout generation.

A 32-bit xorshift generator. Unlike random.Random, the exact sequence is
fixed by this module, so a seed produces the same layout on every platform
and Python version. The number and order of draws made by each planner is
part of the reproducibility contract.
"""

from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 2**32


class XorShiftRandom:
    """Seeded xorshift32 generator with integer, float, choice and shuffle helpers."""

    def __init__(self, seed: int):
        state = int(seed) & MASK_32
        # xorshift is stuck at zero
        if state == 0:
            state = 1
        self._state = state

    @property
    def state(self) -> int:
        return self._state

    def next_u32(self) -> int:
        """Advance the state and return the new 32-bit value."""
        x = self._state
        x ^= (x << 13) & MASK_32
        x ^= x >> 17
        x ^= (x << 5) & MASK_32
        self._state = x & MASK_32
        return self._state

    def next_int(self, min_value: int, max_value: int) -> int:
        """
        Draw an integer in [min_value, max_value] (inclusive).

        Args:
            min_value: Lower bound
            max_value: Upper bound, must be >= min_value

        Returns:
            Integer in range
        """
        if max_value < min_value:
            raise ValueError(f"Empty range: {min_value}..{max_value}")
        return min_value + (self.next_u32() % (max_value - min_value + 1))

    def next_float(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        """Draw a float in [min_value, max_value)."""
        value = self.next_u32() / TWO_POW_32
        return min_value + value * (max_value - min_value)

    def choice(self, items: Sequence[T]) -> Optional[T]:
        """Pick one element uniformly, or None for an empty sequence."""
        if not items:
            return None
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: List[T]) -> List[T]:
        """Fisher-Yates shuffle in place. Returns the same list."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i)
            items[i], items[j] = items[j], items[i]
        return items
