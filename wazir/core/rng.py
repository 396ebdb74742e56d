"""
Seeded hashing, random numbers and shuffling shared by every device.

All arithmetic is wrapped to 32 bits after each step so that the results
match the browser clients bit for bit.
"""

import struct
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0  # 2**32

MULBERRY32_INCREMENT = 0x6D2B79F5


def _to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of value as a signed integer."""
    value &= UINT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str) -> Sequence[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(data) // 2}H", data)


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32-bit multiplication."""
    return (a * b) & UINT32_MASK


def hash_seed(text: str) -> int:
    """
    Hash a string into a non-negative 32-bit seed.

    Equivalent to Java's String.hashCode() folded with abs(), computed over
    UTF-16 code units.

    Args:
        text: Any string, including the empty string

    Returns:
        Non-negative integer in [0, 2**31]
    """
    acc = 0
    for code in _utf16_code_units(text):
        acc = _to_int32(acc * 31 + code)
    return abs(acc)


class Mulberry32:
    """Mulberry32 generator producing floats in [0, 1)."""

    def __init__(self, seed: int):
        self.state = seed & UINT32_MASK

    def next_uint32(self) -> int:
        """Advance the generator and return the next 32-bit output."""
        self.state = (self.state + MULBERRY32_INCREMENT) & UINT32_MASK
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return (t ^ (t >> 14)) & UINT32_MASK

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        return self.next_uint32() / UINT32_SCALE


def make_rng(seed: int) -> Callable[[], float]:
    """Create a deterministic float generator from a 32-bit seed."""
    return Mulberry32(seed).next


def shuffle(sequence: Sequence[T], rng: Callable[[], float]) -> List[T]:
    """
    Fisher-Yates shuffle driven by a seeded generator.

    The input is left untouched; a new list is returned.
    """
    shuffled = list(sequence)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
