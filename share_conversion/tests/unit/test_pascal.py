"""Unit tests for power vectors and field-specialised Pascal triangles."""

from math import comb

import pytest

from share_conversion.fields.elements import GF2_128, P256
from share_conversion.fields.pascal import pascal_triangle, power_vector


class TestPascalTriangle:
    """Binomial coefficients built with the field's own addition."""

    def test_gf2_128_first_rows(self):
        """This is an extension field so no naive arithmetic."""
        one, zero = GF2_128.one(), GF2_128.zero()
        pascal = pascal_triangle(GF2_128, 4)

        assert pascal[0] == [one]
        assert pascal[1] == [one, one]
        assert pascal[2] == [one, zero, one]
        assert pascal[3] == [one, one, one, one]
        assert pascal[4] == [one, zero, zero, zero, one]

    def test_p256_rows_are_integer_binomials(self):
        pascal = pascal_triangle(P256, 6)
        for k, row in enumerate(pascal):
            assert row == [P256(comb(k, i)) for i in range(k + 1)]

    @pytest.mark.parametrize("field", [GF2_128, P256])
    def test_recurrence(self, field):
        pascal = pascal_triangle(field, 12)
        for k in range(1, 13):
            assert len(pascal[k]) == k + 1
            assert pascal[k][0] == field.one()
            assert pascal[k][k] == field.one()
            for i in range(1, k):
                assert pascal[k][i] == pascal[k - 1][i - 1] + pascal[k - 1][i]

    def test_char_2_collapses_even_coefficients(self):
        """Over GF(2^128), C(k, i) reduces to its parity."""
        pascal = pascal_triangle(GF2_128, 16)
        for k, row in enumerate(pascal):
            for i, coefficient in enumerate(row):
                assert coefficient == GF2_128(comb(k, i) % 2)

    def test_power_of_two_rows_have_empty_interior(self):
        pascal = pascal_triangle(GF2_128, 16)
        for k in (2, 4, 8, 16):
            assert all(c == GF2_128.zero() for c in pascal[k][1:-1])

    def test_row_zero_only(self):
        assert pascal_triangle(P256, 0) == [[P256.one()]]

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            pascal_triangle(GF2_128, -1)


class TestPowerVector:
    """Successive powers by repeated multiplication."""

    def test_powers(self):
        powers = power_vector(P256(3), 4)
        assert powers == [P256(1), P256(3), P256(9), P256(27), P256(81)]

    def test_zero_base(self):
        """0^0 = 1, higher powers vanish."""
        powers = power_vector(GF2_128.zero(), 3)
        assert powers == [GF2_128.one()] + [GF2_128.zero()] * 3

    def test_length(self, rng):
        assert len(power_vector(GF2_128.random(rng), 10)) == 11

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            power_vector(P256(2), -1)
