"""Power vectors and binomial coefficients over a field.

The GHASH share protocol expands ``h^k = (d + r)^k`` with the binomial
theorem. Binomial coefficients must be taken in the field itself: in
characteristic 2, ``1 + 1 = 0`` so every even integer coefficient
collapses to zero. Building Pascal's triangle with the field's own
addition gets this right for any field.
"""

from typing import List, Type

from share_conversion.fields.elements import FieldElement


def power_vector(base: FieldElement, n: int) -> List[FieldElement]:
    """Return ``[1, base, base^2, ..., base^n]``.

    Parameters
    ----------
    base : FieldElement
        Element to exponentiate.
    n : int
        Highest power (non-negative).

    Returns
    -------
    List[FieldElement]
        The n + 1 successive powers, computed by repeated multiplication.

    Raises
    ------
    ValueError
        If n is negative.
    """
    if n < 0:
        raise ValueError("n must be non-negative")

    powers = [type(base).one()]
    for _ in range(n):
        powers.append(powers[-1] * base)
    return powers


def pascal_triangle(field: Type[FieldElement], n: int) -> List[List[FieldElement]]:
    """Build rows 0..n of Pascal's triangle using the field's addition.

    Parameters
    ----------
    field : Type[FieldElement]
        Field element class supplying ``one()`` and ``+``.
    n : int
        Index of the last row.

    Returns
    -------
    List[List[FieldElement]]
        ``rows[k][i]`` is the binomial coefficient C(k, i) mapped into the
        field, satisfying ``rows[k][i] = rows[k-1][i-1] + rows[k-1][i]``.

    Examples
    --------
    Over GF(2^128) row 4 is ``[1, 0, 0, 0, 1]``.
    """
    if n < 0:
        raise ValueError("n must be non-negative")

    one = field.one()
    rows = [[one]]

    for _ in range(n):
        last_row = rows[-1]
        new_row = [one]
        new_row.extend(a + b for a, b in zip(last_row, last_row[1:]))
        new_row.append(one)
        rows.append(new_row)

    return rows
