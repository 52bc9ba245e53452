"""Ideal oblivious linear evaluation (OLE) functionality.

Given the sender's vector S and the receiver's vector R, the functionality
hands out additive shares of the elementwise products:

    sender_share[i] + receiver_share[i] == S[i] * R[i]

Notes
-----
This is a trusted simulator: one object sees both inputs. It stands in for
a real OT- or lattice-based OLE protocol, which can replace it without
touching the protocol parties since they only call ``input`` and
``output``.
"""

from enum import Enum
from typing import List, Optional, Sequence, Type

import numpy as np

from share_conversion.core.exceptions import InvalidBatch
from share_conversion.fields.elements import FieldElement
from share_conversion.utils.logging import get_logger

logger = get_logger(__name__)


class Role(Enum):
    """Role a party plays in an OLE batch."""

    SENDER = "sender"
    RECEIVER = "receiver"


class Ole:
    """Single-use OLE batch over one field.

    Parameters
    ----------
    field : Type[FieldElement]
        Element type of both input vectors.
    rng : np.random.Generator, optional
        Randomness for the output shares. Uses default if None.

    Notes
    -----
    The first ``output`` call draws fresh shares, returns the caller's and
    caches the complement. The next call returns the cached complement,
    modelling that the other party computed its share with the same
    randomness. After that the batch is exhausted until new inputs arrive.

    Examples
    --------
    >>> ole = Ole(P256, rng=np.random.default_rng(1))
    >>> ole.input(Role.SENDER, [P256(3)])
    >>> ole.input(Role.RECEIVER, [P256(5)])
    >>> s, r = ole.output(Role.SENDER), ole.output(Role.RECEIVER)
    >>> s[0] + r[0] == P256(15)
    True
    """

    def __init__(
        self,
        field: Type[FieldElement],
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._field = field
        self._rng = rng if rng is not None else np.random.default_rng()
        self._input_sender: Optional[List[FieldElement]] = None
        self._input_receiver: Optional[List[FieldElement]] = None
        self._output: Optional[List[FieldElement]] = None

    @property
    def field(self) -> Type[FieldElement]:
        return self._field

    @property
    def pending(self) -> bool:
        """Return True if a complementary share is waiting to be drawn."""
        return self._output is not None

    def input(self, role: Role, values: Sequence[FieldElement]) -> None:
        """Record one party's vector for this batch.

        Parameters
        ----------
        role : Role
            Role of the calling party.
        values : Sequence[FieldElement]
            The party's private scalars.

        Raises
        ------
        TypeError
            If an element is not of this batch's field.
        """
        values = list(values)
        for value in values:
            if type(value) is not self._field:
                raise TypeError(
                    f"OLE over {self._field.__name__} got {type(value).__name__}"
                )

        if role is Role.SENDER:
            self._input_sender = values
        else:
            self._input_receiver = values

    def output(self, role: Role) -> List[FieldElement]:
        """Return the calling party's share vector.

        Parameters
        ----------
        role : Role
            Role of the calling party.

        Returns
        -------
        List[FieldElement]
            One share per input position.

        Raises
        ------
        InvalidBatch
            If an input is missing, the inputs differ in length, or the
            batch was already consumed.
        """
        if self._output is not None:
            output, self._output = self._output, None
            return output

        if self._input_sender is None or self._input_receiver is None:
            raise InvalidBatch("OLE output requested before both inputs were set")
        if len(self._input_sender) != len(self._input_receiver):
            raise InvalidBatch(
                f"OLE input length mismatch: sender {len(self._input_sender)}, "
                f"receiver {len(self._input_receiver)}"
            )

        output = []
        output_cached = []

        for s, r in zip(self._input_sender, self._input_receiver):
            s_out = self._field.random(self._rng)
            r_out = s * r - s_out

            if role is Role.SENDER:
                output.append(s_out)
                output_cached.append(r_out)
            else:
                output.append(r_out)
                output_cached.append(s_out)

        logger.debug(f"Drew OLE batch of {len(output)} {self._field.__name__} shares")

        self._input_sender = None
        self._input_receiver = None
        self._output = output_cached
        return output
