"""The GHASH share verifier.

The verifier holds the key share h2 and a private mask r2, and always plays
the OLE receiver.
"""

from typing import List, Optional, Sequence

import numpy as np

from share_conversion.core.exceptions import PreconditionViolation
from share_conversion.core.session import GhashPhase, PartySession, phase_step
from share_conversion.fields.elements import GF2_128
from share_conversion.fields.pascal import pascal_triangle, power_vector
from share_conversion.func.ole import Ole, Role


class Verifier(PartySession):
    """Verifier side of the GHASH share protocol.

    Parameters
    ----------
    block_num : int
        Maximum number of message blocks.
    h2 : GF2_128
        The verifier's additive share of the hash key.
    rng : np.random.Generator, optional
        Source of the verifier's mask. Uses default if None.
    """

    def __init__(
        self,
        block_num: int,
        h2: GF2_128,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if block_num < 1:
            raise ValueError(f"block_num must be at least 1, got {block_num}")

        super().__init__(GhashPhase.NEW, "ghash.verifier", rng)
        self.block_num = block_num
        self._store(h2=h2, r2=GF2_128.random(self._rng))

    @property
    def d_powers(self) -> List[GF2_128]:
        return self._require("d_powers")

    @property
    def hi(self) -> List[GF2_128]:
        return self._require("hi")

    @phase_step(GhashPhase.PREPROCESS_OLE_INPUT)
    def preprocess_ole_input(self, ole: Ole) -> None:
        r2_powers = power_vector(self._require("r2"), self.block_num)
        ole.input(Role.RECEIVER, r2_powers)

    @phase_step(GhashPhase.PREPROCESS_OLE_OUTPUT)
    def preprocess_ole_output(self, ole: Ole) -> None:
        self._store(bi=ole.output(Role.RECEIVER))

    def handshake_a_open_d(self) -> GF2_128:
        h2, bi = self._require("h2", "bi")
        return h2 - bi[1]

    @phase_step(GhashPhase.HANDSHAKE_A_SET_D)
    def handshake_a_set_d(self, d: GF2_128) -> None:
        self._store(d=d, d_powers=power_vector(d, self.block_num))

    @phase_step(GhashPhase.HANDSHAKE_A_SET_HI)
    def handshake_a_set_hi(self) -> None:
        d_powers, bi = self._require("d_powers", "bi")
        pascal = pascal_triangle(GF2_128, self.block_num)

        hi = []
        for k in range(self.block_num + 1):
            share = GF2_128.zero()
            for j, coefficient in enumerate(pascal[k]):
                share = share + coefficient * d_powers[k - j] * bi[j]
            hi.append(share)

        self._store(hi=hi)

    def handshake_output_ghash(self, blocks: Sequence[GF2_128]) -> GF2_128:
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
