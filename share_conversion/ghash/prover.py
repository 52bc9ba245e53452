"""The GHASH share prover.

The prover holds the key share h1 and a private mask r1, and always plays
the OLE sender.
"""

from typing import List, Optional, Sequence

import numpy as np

from share_conversion.core.exceptions import PreconditionViolation
from share_conversion.core.session import GhashPhase, PartySession, phase_step
from share_conversion.fields.elements import GF2_128
from share_conversion.fields.pascal import pascal_triangle, power_vector
from share_conversion.func.ole import Ole, Role


class Prover(PartySession):
    """Prover side of the GHASH share protocol.

    Parameters
    ----------
    block_num : int
        Maximum number of message blocks; powers h^0..h^block_num are shared.
    h1 : GF2_128
        The prover's additive share of the hash key.
    rng : np.random.Generator, optional
        Source of the prover's mask. Uses default if None.

    Raises
    ------
    ValueError
        If block_num is smaller than 1.
    """

    def __init__(
        self,
        block_num: int,
        h1: GF2_128,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if block_num < 1:
            raise ValueError(f"block_num must be at least 1, got {block_num}")

        super().__init__(GhashPhase.NEW, "ghash.prover", rng)
        self.block_num = block_num
        self._store(h1=h1, r1=self._sample_mask())

    def _sample_mask(self) -> GF2_128:
        return GF2_128.random(self._rng)

    @property
    def d_powers(self) -> List[GF2_128]:
        return self._require("d_powers")

    @property
    def hi(self) -> List[GF2_128]:
        """Shares of h^0..h^block_num, indexed by exponent."""
        return self._require("hi")

    @phase_step(GhashPhase.PREPROCESS_OLE_INPUT)
    def preprocess_ole_input(self, ole: Ole) -> None:
        r1_powers = power_vector(self._require("r1"), self.block_num)
        ole.input(Role.SENDER, r1_powers)

    @phase_step(GhashPhase.PREPROCESS_OLE_OUTPUT)
    def preprocess_ole_output(self, ole: Ole) -> None:
        self._store(ai=ole.output(Role.SENDER))

    def handshake_a_open_d(self) -> GF2_128:
        h1, ai = self._require("h1", "ai")
        return h1 - ai[1]

    @phase_step(GhashPhase.HANDSHAKE_A_SET_D)
    def handshake_a_set_d(self, d: GF2_128) -> None:
        self._store(d=d, d_powers=power_vector(d, self.block_num))

    @phase_step(GhashPhase.HANDSHAKE_A_SET_HI)
    def handshake_a_set_hi(self) -> None:
        """Share of h^k = sum_j C(k, j) d^(k-j) (r1 r2)^j for every k."""
        d_powers, ai = self._require("d_powers", "ai")
        pascal = pascal_triangle(GF2_128, self.block_num)

        hi = []
        for k in range(self.block_num + 1):
            share = GF2_128.zero()
            for j, coefficient in enumerate(pascal[k]):
                share = share + coefficient * d_powers[k - j] * ai[j]
            hi.append(share)

        self._store(hi=hi)

    def handshake_output_ghash(self, blocks: Sequence[GF2_128]) -> GF2_128:
        """Share of sum_i blocks[i] * h^(n - i), n = len(blocks).

        Raises
        ------
        PreconditionViolation
            If there are no blocks or more than block_num.
        """
        hi = self._require("hi")
        n = len(blocks)
        if not 1 <= n <= self.block_num:
            raise PreconditionViolation(
                f"Expected 1..{self.block_num} blocks, got {n}"
            )

        res = GF2_128.zero()
        for i, block in enumerate(blocks):
            res = res + block * hi[n - i]
        return res


class MaliciousProver(Prover):
    """A prover that inputs a zero mask.

    With r1 = 0 the OLE shares of (r1 r2)^j cancel for j >= 1, so the
    opened d equals the full key h. The honest verifier cannot detect
    this: the protocol is only secure against semi-honest parties.
    """

    def _sample_mask(self) -> GF2_128:
        return GF2_128.zero()

    @property
    def extracted_key(self) -> GF2_128:
        """The hash key as learned from the opened d."""
        return self._require("d")
