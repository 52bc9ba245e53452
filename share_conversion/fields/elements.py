"""Field element value types.

Two fields are used by the protocols:

- ``P256``: integers modulo the NIST P-256 coordinate prime (E2F).
- ``GF2_128``: the binary extension field of degree 128 (GHASH).

Both are immutable. Arithmetic returns new elements and never mutates its
operands. Mixing element types in one operation raises ``TypeError``.
"""

import abc
from typing import Optional

import numpy as np

from share_conversion.core.constants import GF128_BITS, P256_BITS, P256_PRIME
from share_conversion.fields.utils import (
    gf_add,
    gf_inverse,
    gf_multiply,
    mod_inverse,
    random_below,
    random_bits,
)


class FieldElement(abc.ABC):
    """Base class for immutable field elements.

    Subclasses provide the raw integer operations; this class provides the
    operator protocol shared by both fields.

    Parameters
    ----------
    value : int
        Integer representation. Reduced into the field on construction.
    """

    __slots__ = ("_value",)

    BITS: int

    def __init__(self, value: int = 0) -> None:
        self._value = self._reduce(int(value))

    @classmethod
    @abc.abstractmethod
    def _reduce(cls, value: int) -> int:
        """Map an integer onto its canonical field representative."""

    @classmethod
    @abc.abstractmethod
    def _add(cls, a: int, b: int) -> int: ...

    @classmethod
    @abc.abstractmethod
    def _neg(cls, a: int) -> int: ...

    @classmethod
    @abc.abstractmethod
    def _mul(cls, a: int, b: int) -> int: ...

    @classmethod
    @abc.abstractmethod
    def _inverse(cls, a: int) -> int: ...

    @classmethod
    @abc.abstractmethod
    def _sample(cls, rng: np.random.Generator) -> int: ...

    @property
    def value(self) -> int:
        """Return the canonical integer representative."""
        return self._value

    @classmethod
    def zero(cls) -> "FieldElement":
        return cls(0)

    @classmethod
    def one(cls) -> "FieldElement":
        return cls(1)

    @classmethod
    def from_int(cls, value: int) -> "FieldElement":
        """Embed an integer, e.g. ``P256.from_int(2)`` for doubling."""
        return cls(value)

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> "FieldElement":
        """Draw a uniform element (zero included).

        Parameters
        ----------
        rng : np.random.Generator, optional
            Random number generator. Uses default if None.
        """
        if rng is None:
            rng = np.random.default_rng()
        return cls(cls._sample(rng))

    def is_zero(self) -> bool:
        return self._value == 0

    def inverse(self) -> "FieldElement":
        """Return the multiplicative inverse.

        Raises
        ------
        MissingInverse
            If this element is zero.
        """
        return type(self)(self._inverse(self._value))

    def to_bytes(self) -> bytes:
        """Big-endian encoding of fixed width."""
        return self._value.to_bytes((self.BITS + 7) // 8, "big")

    def _check(self, other: object) -> "FieldElement":
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other  # type: ignore[return-value]

    def __add__(self, other: "FieldElement") -> "FieldElement":
        other = self._check(other)
        return type(self)(self._add(self._value, other._value))

    def __neg__(self) -> "FieldElement":
        return type(self)(self._neg(self._value))

    def __sub__(self, other: "FieldElement") -> "FieldElement":
        other = self._check(other)
        return type(self)(self._add(self._value, self._neg(other._value)))

    def __mul__(self, other: "FieldElement") -> "FieldElement":
        other = self._check(other)
        return type(self)(self._mul(self._value, other._value))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value:#x})"


class P256(FieldElement):
    """Element of the NIST P-256 coordinate field."""

    __slots__ = ()

    BITS = P256_BITS
    MODULUS = P256_PRIME

    @classmethod
    def _reduce(cls, value: int) -> int:
        return value % cls.MODULUS

    @classmethod
    def _add(cls, a: int, b: int) -> int:
        return (a + b) % cls.MODULUS

    @classmethod
    def _neg(cls, a: int) -> int:
        return (-a) % cls.MODULUS

    @classmethod
    def _mul(cls, a: int, b: int) -> int:
        return (a * b) % cls.MODULUS

    @classmethod
    def _inverse(cls, a: int) -> int:
        return mod_inverse(a, cls.MODULUS)

    @classmethod
    def _sample(cls, rng: np.random.Generator) -> int:
        return random_below(cls.MODULUS, rng)


class GF2_128(FieldElement):
    """Element of GF(2^128).

    Addition is XOR and every element is its own negative, so
    ``x + x == 0`` for all x.
    """

    __slots__ = ()

    BITS = GF128_BITS

    @classmethod
    def _reduce(cls, value: int) -> int:
        if not 0 <= value < (1 << GF128_BITS):
            raise ValueError(f"Value does not fit in GF(2^128): {value:#x}")
        return value

    @classmethod
    def _add(cls, a: int, b: int) -> int:
        return gf_add(a, b)

    @classmethod
    def _neg(cls, a: int) -> int:
        return a

    @classmethod
    def _mul(cls, a: int, b: int) -> int:
        return gf_multiply(a, b)

    @classmethod
    def _inverse(cls, a: int) -> int:
        return gf_inverse(a)

    @classmethod
    def _sample(cls, rng: np.random.Generator) -> int:
        return random_bits(GF128_BITS, rng)
