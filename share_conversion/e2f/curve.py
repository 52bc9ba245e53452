"""NIST P-256 point helpers for E2F.

The protocol itself only sees coordinates as ``P256`` field elements. These
helpers produce points and compute the clear-text reference result with the
``ecdsa`` package, so protocol output can be checked against an independent
elliptic-curve implementation.
"""

from typing import Optional, Tuple, Union

import numpy as np
from ecdsa import NIST256p
from ecdsa.ellipticcurve import Point, PointJacobi

from share_conversion.core.exceptions import DegenerateInput
from share_conversion.fields.elements import P256
from share_conversion.fields.utils import random_below

CURVE = NIST256p
GENERATOR = NIST256p.generator
ORDER: int = NIST256p.order

AnyPoint = Union[Point, PointJacobi]


def random_point(rng: Optional[np.random.Generator] = None) -> PointJacobi:
    """Return k * G for a uniform non-zero scalar k.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Random number generator. Uses default if None.
    """
    k = 1 + random_below(ORDER - 1, rng)
    return GENERATOR * k


def point_to_field(point: AnyPoint) -> Tuple[P256, P256]:
    """Convert an affine or Jacobian point to its ``(x, y)`` coordinates."""
    x, y = point.x(), point.y()
    if x is None or y is None:
        raise ValueError("The point at infinity has no affine coordinates")
    return P256(x), P256(y)


def add_points_x(p1: AnyPoint, p2: AnyPoint) -> P256:
    """Return x(P1 + P2) using ``ecdsa`` point addition.

    Raises
    ------
    ValueError
        If the sum is the point at infinity.
    """
    return point_to_field(p1 + p2)[0]


def chord_x(p1: Tuple[P256, P256], p2: Tuple[P256, P256]) -> P256:
    """Chord rule: x3 = ((y2 - y1) / (x2 - x1))^2 - x1 - x2.

    Raises
    ------
    DegenerateInput
        If x1 == x2 (doubling or inverse points).
    """
    (x1, y1), (x2, y2) = p1, p2
    denominator = x2 - x1
    if denominator.is_zero():
        raise DegenerateInput("Chord rule is undefined for equal x-coordinates")

    slope = (y2 - y1) * denominator.inverse()
    return slope * slope - x1 - x2
