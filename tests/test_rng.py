"""
Tests for seeded hashing, Mulberry32 and the deterministic shuffle.
"""

import pytest
from wazir.core.rng import hash_seed, make_rng, shuffle, Mulberry32


def test_hash_seed_small_strings():
    """Test hash of short strings."""
    assert hash_seed("") == 0
    assert hash_seed("a") == 97
    assert hash_seed("ab") == 97 * 31 + 98


def test_hash_seed_matches_java_string_hash():
    """Test values known from Java's String.hashCode()."""
    assert hash_seed("hello") == 99162322
    assert hash_seed("hello world") == 1794106052


def test_hash_seed_wraps_at_32_bits():
    """Test overflow wraps like a signed 32-bit integer."""
    # "polygenelubricants".hashCode() is Integer.MIN_VALUE
    assert hash_seed("polygenelubricants") == 2147483648


def test_hash_seed_is_never_negative():
    for text in ["GAME123|1|x", "zzzzzzzzzzzzzzzzzzzz", "ROOM-" * 50]:
        assert hash_seed(text) >= 0
        assert hash_seed(text) <= 2 ** 31


def test_hash_seed_uses_utf16_code_units():
    """Test characters outside the BMP hash as their surrogate pair."""
    assert hash_seed("\U0001F600") == 0xD83D * 31 + 0xDE00
    assert hash_seed("é") == 0xE9


def test_mulberry32_reference_values():
    """Test output for well-known seeds."""
    rng = Mulberry32(0)
    assert [rng.next_uint32() for _ in range(3)] == [1144304738, 1416247, 958946056]

    rng = Mulberry32(42)
    assert [rng.next_uint32() for _ in range(3)] == [2581720956, 1925393290, 3661312704]


def test_make_rng_floats():
    """Test floats are the 32-bit outputs scaled into [0, 1)."""
    rng = make_rng(0)
    assert rng() == 1144304738 / 2 ** 32
    assert rng() == 1416247 / 2 ** 32


def test_make_rng_same_seed_same_sequence():
    a = make_rng(123456)
    b = make_rng(123456)
    assert [a() for _ in range(100)] == [b() for _ in range(100)]


def test_make_rng_range():
    rng = make_rng(2147483648)
    for _ in range(1000):
        value = rng()
        assert 0.0 <= value < 1.0


def test_shuffle_does_not_mutate_input():
    original = [1, 2, 3, 4, 5]
    result = shuffle(original, make_rng(7))
    assert original == [1, 2, 3, 4, 5]
    assert sorted(result) == original


def test_shuffle_is_deterministic():
    items = list(range(20))
    assert shuffle(items, make_rng(99)) == shuffle(items, make_rng(99))


def test_shuffle_uses_fisher_yates_order():
    """Test swaps follow j = floor(rng() * (i + 1)) from the last index down."""
    draws = iter([0.0, 0.0, 0.0])
    assert shuffle(["a", "b", "c", "d"], lambda: next(draws)) == ["b", "c", "d", "a"]

    draws = iter([0.99, 0.99, 0.99])
    assert shuffle(["a", "b", "c", "d"], lambda: next(draws)) == ["a", "b", "c", "d"]


@pytest.mark.parametrize("items", [[], ["only"]])
def test_shuffle_trivial_inputs(items):
    """Test short sequences never draw from the generator."""
    def rng():
        raise AssertionError("rng should not be called")

    assert shuffle(items, rng) == items
