"""Raw integer arithmetic for the protocol fields.

This module implements the arithmetic behind the field element types:
GF(2^128) for GHASH and the P-256 coordinate field for E2F. Elements are
plain Python ints here; ``fields.elements`` wraps them into value types.

Reference:
- https://eprint.iacr.org/2023/964 §GHASH

Notes
-----
GF(2^n) arithmetic uses carry-less multiplication (XOR instead of addition)
and reduction modulo an irreducible polynomial:

- GF(2^128): x^128 + x^7 + x^2 + x + 1 (0x87 in reduced form)
"""

from typing import List, Optional

import numpy as np

from share_conversion.core.constants import GF128_BITS, GF128_MODULUS
from share_conversion.core.exceptions import MissingInverse


def gf_multiply(a: int, b: int) -> int:
    """Multiply two elements in GF(2^128).

    Parameters
    ----------
    a : int
        First element (must be < 2^128).
    b : int
        Second element (must be < 2^128).

    Returns
    -------
    int
        Product a * b in GF(2^128).

    Notes
    -----
    Implements Russian peasant multiplication (shift-and-XOR) with
    reduction modulo the field's irreducible polynomial.

    Examples
    --------
    >>> gf_multiply(2, 2)
    4
    """
    result = 0
    mask = (1 << GF128_BITS) - 1

    while b:
        if b & 1:
            result ^= a

        b >>= 1

        # Multiply a by x, folding the overflow bit back in
        carry = a >> (GF128_BITS - 1)
        a = (a << 1) & mask
        if carry:
            a ^= GF128_MODULUS

    return result


def gf_add(a: int, b: int) -> int:
    """Add two elements in GF(2^128).

    Notes
    -----
    Addition is XOR, which is also subtraction: a - b = a ^ b.
    """
    return a ^ b


def gf_power(base: int, exponent: int) -> int:
    """Compute base^exponent in GF(2^128) using square-and-multiply.

    Parameters
    ----------
    base : int
        Base element.
    exponent : int
        Non-negative exponent.

    Returns
    -------
    int
        base^exponent in GF(2^128). ``0^0`` is 1 by convention.

    Raises
    ------
    ValueError
        If exponent is negative.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")

    result = 1
    while exponent > 0:
        if exponent & 1:
            result = gf_multiply(result, base)
        base = gf_multiply(base, base)
        exponent >>= 1

    return result


def gf_inverse(a: int) -> int:
    """Compute the multiplicative inverse in GF(2^128).

    Uses Fermat's little theorem: a^(2^128 - 2) = a^-1 for a != 0.

    Raises
    ------
    MissingInverse
        If a is zero.
    """
    if a == 0:
        raise MissingInverse("No inverse for 0 in GF(2^128)")
    return gf_power(a, (1 << GF128_BITS) - 2)


def mod_inverse(a: int, modulus: int) -> int:
    """Compute the inverse of a modulo a prime.

    Raises
    ------
    MissingInverse
        If a is congruent to zero.
    """
    a %= modulus
    if a == 0:
        raise MissingInverse(f"No inverse for 0 modulo {modulus:#x}")
    return pow(a, -1, modulus)


def validate_field_element(value: int, field_bits: int = GF128_BITS) -> bool:
    """Check if a value is a valid GF(2^n) element (0 <= value < 2^n)."""
    return 0 <= value < (1 << field_bits)


def random_bits(num_bits: int, rng: Optional[np.random.Generator] = None) -> int:
    """Draw a uniform integer with ``num_bits`` random bits.

    Parameters
    ----------
    num_bits : int
        Number of bits in the result.
    rng : np.random.Generator, optional
        Random number generator. Uses default if None.

    Returns
    -------
    int
        Uniform value in [0, 2^num_bits).
    """
    if rng is None:
        rng = np.random.default_rng()

    num_bytes = (num_bits + 7) // 8
    value = int.from_bytes(rng.bytes(num_bytes), "big")
    return value >> (num_bytes * 8 - num_bits)


def random_below(bound: int, rng: Optional[np.random.Generator] = None) -> int:
    """Draw a uniform integer in [0, bound) by rejection sampling.

    Raises
    ------
    ValueError
        If bound is not positive.
    """
    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")
    if rng is None:
        rng = np.random.default_rng()

    num_bits = bound.bit_length()
    while True:
        value = random_bits(num_bits, rng)
        if value < bound:
            return value


def chunk_bytes(data: bytes, chunk_size: int) -> List[bytes]:
    """Split bytes into chunks, zero-padding the last one.

    Examples
    --------
    >>> chunk_bytes(b"abc", 2)
    [b'ab', b'c\\x00']
    """
    chunks = []
    for i in range(0, len(data), chunk_size):
        chunk = data[i : i + chunk_size]
        if len(chunk) < chunk_size:
            chunk = chunk + bytes(chunk_size - len(chunk))
        chunks.append(chunk)
    return chunks


def bytes_to_field_ints(data: bytes, element_bytes: int = GF128_BITS // 8) -> List[int]:
    """Convert a byte string to big-endian field integers, one per chunk."""
    return [int.from_bytes(chunk, "big") for chunk in chunk_bytes(data, element_bytes)]
