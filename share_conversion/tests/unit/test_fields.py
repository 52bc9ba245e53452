"""Unit tests for the field capability.

This module tests:
- GF(2^128) integer arithmetic (fields/utils.py)
- Uniform sampling helpers
- ``P256`` and ``GF2_128`` value types (fields/elements.py)
"""

import numpy as np
import pytest
from ecdsa import NIST256p

from share_conversion.core.constants import GF128_MODULUS, P256_PRIME
from share_conversion.core.exceptions import MissingInverse
from share_conversion.fields.elements import GF2_128, P256
from share_conversion.fields.utils import (
    bytes_to_field_ints,
    chunk_bytes,
    gf_add,
    gf_inverse,
    gf_multiply,
    gf_power,
    mod_inverse,
    random_below,
    random_bits,
    validate_field_element,
)


# =============================================================================
# GF(2^128) Integer Arithmetic
# =============================================================================


class TestGFAdd:
    """Test suite for GF addition (XOR)."""

    def test_add_zero(self):
        assert gf_add(42, 0) == 42
        assert gf_add(0, 42) == 42

    def test_add_self(self):
        """Test that a + a = 0 (characteristic 2)."""
        assert gf_add(42, 42) == 0
        assert gf_add(0xFFFF, 0xFFFF) == 0

    def test_add_known_values(self):
        assert gf_add(0b1010, 0b1100) == 0b0110


class TestGFMultiply:
    """Test suite for GF(2^128) multiplication."""

    def test_multiply_by_zero(self):
        assert gf_multiply(42, 0) == 0
        assert gf_multiply(0, 42) == 0

    def test_multiply_by_one(self):
        assert gf_multiply(42, 1) == 42
        assert gf_multiply(1, 42) == 42

    def test_multiply_small_values(self):
        """Carry-less: (x + 1)^2 = x^2 + 1."""
        assert gf_multiply(2, 2) == 4
        assert gf_multiply(3, 3) == 5

    def test_reduction(self):
        """x^127 * x = x^128 = x^7 + x^2 + x + 1."""
        assert gf_multiply(1 << 127, 2) == GF128_MODULUS

    def test_multiply_commutativity(self):
        a, b = 0x1234_5678_9ABC_DEF0 << 60, 0x0FED_CBA9_8765_4321
        assert gf_multiply(a, b) == gf_multiply(b, a)

    def test_multiply_distributes_over_add(self):
        a, b, c = 0xDEADBEEF << 90, 0xCAFEBABE, 0x1 << 127
        assert gf_multiply(a, gf_add(b, c)) == gf_add(gf_multiply(a, b), gf_multiply(a, c))

    def test_multiply_stays_in_field(self):
        a = (1 << 127) | 0x12345678
        b = (1 << 126) | 0x87654321
        assert validate_field_element(gf_multiply(a, b))


class TestGFPowerInverse:
    """Test suite for GF exponentiation and inversion."""

    def test_power_zero(self):
        assert gf_power(42, 0) == 1
        assert gf_power(0, 0) == 1

    def test_power_three(self):
        a = 7
        assert gf_power(a, 3) == gf_multiply(gf_multiply(a, a), a)

    def test_power_negative_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            gf_power(2, -1)

    def test_inverse(self):
        for a in (1, 2, 0x87, (1 << 127) | 5):
            assert gf_multiply(a, gf_inverse(a)) == 1

    def test_inverse_of_zero_raises(self):
        with pytest.raises(MissingInverse):
            gf_inverse(0)

    def test_mod_inverse(self):
        assert (mod_inverse(3, 7) * 3) % 7 == 1

    def test_mod_inverse_of_zero_raises(self):
        with pytest.raises(MissingInverse):
            mod_inverse(P256_PRIME, P256_PRIME)


# =============================================================================
# Sampling and Byte Helpers
# =============================================================================


class TestSampling:
    """Test suite for uniform sampling helpers."""

    def test_random_bits_range(self, rng):
        for _ in range(50):
            assert 0 <= random_bits(13, rng) < (1 << 13)

    def test_random_below_range(self, rng):
        values = {random_below(5, rng) for _ in range(200)}
        assert values == {0, 1, 2, 3, 4}

    def test_random_below_invalid_bound(self, rng):
        with pytest.raises(ValueError):
            random_below(0, rng)

    def test_seeded_sampling_is_deterministic(self):
        a = random_bits(128, np.random.default_rng(7))
        b = random_bits(128, np.random.default_rng(7))
        assert a == b

    def test_chunk_bytes_pads_last_chunk(self):
        assert chunk_bytes(b"abc", 2) == [b"ab", b"c\x00"]
        assert chunk_bytes(b"", 2) == []

    def test_bytes_to_field_ints(self):
        data = bytes(15) + b"\x01" + b"\x02"
        assert bytes_to_field_ints(data) == [1, 2 << 120]


# =============================================================================
# Field Element Types
# =============================================================================


class TestP256:
    """Test suite for the P-256 coordinate field type."""

    def test_modulus_matches_curve(self):
        assert P256.MODULUS == NIST256p.curve.p()

    def test_reduction_on_construction(self):
        assert P256(P256_PRIME + 5) == P256(5)
        assert P256.from_int(-1) == P256(P256_PRIME - 1)

    def test_arithmetic(self):
        a, b = P256(10), P256(20)
        assert a + b == P256(30)
        assert a - b == P256(P256_PRIME - 10)
        assert -a + a == P256.zero()
        assert a * b == P256(200)

    def test_inverse(self, rng):
        a = P256.random(rng)
        assert a * a.inverse() == P256.one()

    def test_inverse_of_zero_raises(self):
        with pytest.raises(MissingInverse):
            P256.zero().inverse()

    def test_random_in_range(self, rng):
        for _ in range(20):
            assert 0 <= P256.random(rng).value < P256_PRIME

    def test_to_bytes_width(self):
        assert len(P256(1).to_bytes()) == 32


class TestGF2_128:
    """Test suite for the GF(2^128) type."""

    def test_add_is_xor(self):
        assert GF2_128(0b1010) + GF2_128(0b1100) == GF2_128(0b0110)

    def test_self_inverse_under_addition(self, rng):
        x = GF2_128.random(rng)
        assert x + x == GF2_128.zero()
        assert -x == x
        assert x - x == GF2_128.zero()

    def test_doubling_is_zero(self):
        """1 + 1 = 0: the integer 2 does not embed as a doubling."""
        assert GF2_128.one() + GF2_128.one() == GF2_128.zero()

    def test_multiplication_matches_raw(self):
        a, b = GF2_128(1 << 127), GF2_128(2)
        assert a * b == GF2_128(gf_multiply(1 << 127, 2))

    def test_inverse(self, rng):
        a = GF2_128.random(rng)
        assert a * a.inverse() == GF2_128.one()

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            GF2_128(1 << 128)
        with pytest.raises(ValueError):
            GF2_128(-1)


class TestFieldElementProtocol:
    """Behaviour shared by both element types."""

    def test_mixing_fields_raises(self):
        with pytest.raises(TypeError):
            P256(1) + GF2_128(1)
        with pytest.raises(TypeError):
            GF2_128(1) * P256(1)

    def test_cross_field_equality_is_false(self):
        assert P256(1) != GF2_128(1)

    def test_immutable(self):
        x = P256(3)
        with pytest.raises(AttributeError):
            x.value = 4

    def test_operations_do_not_mutate(self):
        a, b = GF2_128(3), GF2_128(5)
        _ = a * b + a
        assert a == GF2_128(3)
        assert b == GF2_128(5)

    def test_hashable(self):
        assert len({P256(1), P256(1), P256(2)}) == 2

    def test_int_and_repr(self):
        assert int(GF2_128(0x87)) == 0x87
        assert repr(GF2_128(0x87)) == "GF2_128(0x87)"
