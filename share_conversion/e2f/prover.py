"""The E2F prover.

The prover holds the point P1 = (x1, y1) and always plays the OLE sender.
Its final output z1 satisfies z1 + z2 = x(P1 + P2).
"""

from typing import Optional, Tuple

import numpy as np

from share_conversion.core.exceptions import DegenerateInput
from share_conversion.core.session import E2FPhase, PartySession, phase_step
from share_conversion.fields.elements import P256
from share_conversion.func.ole import Ole, Role


class Prover(PartySession):
    """Prover side of the E2F protocol.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Source of the prover's masks. Uses default if None.

    Notes
    -----
    Slots written per phase:

    - preprocess1: ``a1``, ``b1``, ``b1_prime``, ``r1``
    - preprocess2: ``a1_b2_share``, ``a2_b1_share``, ``a1_b2_prime_share``,
      ``a2_b1_prime_share``, ``r1_r2_share``
    - preprocess3: ``c1``, ``c1_prime``
    - preprocess4: ``r_squared_share``
    - handshake5: ``ec_point``, ``omega_share``
    - handshake6: ``eta_share``
    - handshake7: ``z1``
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(E2FPhase.NEW, "e2f.prover", rng)

    @phase_step(E2FPhase.PREPROCESS1)
    def preprocess1(self) -> None:
        self._store(
            a1=P256.random(self._rng),
            b1=P256.random(self._rng),
            b1_prime=P256.random(self._rng),
            r1=P256.random(self._rng),
        )

    @phase_step(E2FPhase.PREPROCESS2_OLE_INPUT)
    def preprocess2_ole_input(self, ole: Ole) -> None:
        a1, b1, b1_prime, r1 = self._require("a1", "b1", "b1_prime", "r1")
        ole.input(Role.SENDER, [a1, b1, a1, b1_prime, r1])

    @phase_step(E2FPhase.PREPROCESS2_OLE_OUTPUT)
    def preprocess2_ole_output(self, ole: Ole) -> None:
        output = ole.output(Role.SENDER)

        self._store(
            a1_b2_share=output[0],
            a2_b1_share=output[1],
            a1_b2_prime_share=output[2],
            a2_b1_prime_share=output[3],
            r1_r2_share=output[4],
        )

    @phase_step(E2FPhase.PREPROCESS3)
    def preprocess3(self) -> None:
        """Combine own products and OLE cross terms into Beaver triple shares."""
        a1, b1, b1_prime = self._require("a1", "b1", "b1_prime")
        a1_b2_share, a2_b1_share = self._require("a1_b2_share", "a2_b1_share")
        a1_b2_prime_share, a2_b1_prime_share = self._require(
            "a1_b2_prime_share", "a2_b1_prime_share"
        )

        self._store(
            c1=a1 * b1 + a1_b2_share + a2_b1_share,
            c1_prime=a1 * b1_prime + a1_b2_prime_share + a2_b1_prime_share,
        )

    @phase_step(E2FPhase.PREPROCESS4)
    def preprocess4(self) -> None:
        """Share of r^2 = r1^2 + 2 r1 r2 + r2^2."""
        r1, r1_r2_share = self._require("r1", "r1_r2_share")
        two = P256.from_int(2)

        self._store(r_squared_share=r1 * r1 + two * r1_r2_share)

    @phase_step(E2FPhase.HANDSHAKE5_INPUT_EC)
    def handshake5_input_ec(self, ec_point: Tuple[P256, P256]) -> None:
        x1, y1 = ec_point
        self._store(ec_point=(P256(int(x1)), P256(int(y1))))

    def handshake5_varepsilon1_share_open(self) -> P256:
        x1, _ = self._require("ec_point")
        return -x1 - self._require("b1")

    @phase_step(E2FPhase.HANDSHAKE5_SET_OMEGA)
    def handshake5_set_omega(self, varepsilon1: P256) -> None:
        a1, c1 = self._require("a1", "c1")
        self._store(omega_share=varepsilon1 * a1 + c1)

    def handshake6_omega_share_open(self) -> P256:
        return self._require("omega_share")

    def handshake6_varepsilon2_share_open(self) -> P256:
        _, y1 = self._require("ec_point")
        return -y1 - self._require("b1_prime")

    @phase_step(E2FPhase.HANDSHAKE6_SET_ETA)
    def handshake6_set_eta(self, omega: P256, varepsilon2: P256) -> None:
        """Share of the slope (y2 - y1) / (x2 - x1).

        Raises
        ------
        DegenerateInput
            If omega is zero, i.e. x1 == x2.
        """
        if omega.is_zero():
            raise DegenerateInput("omega is 0: input points share an x-coordinate")

        a1, c1_prime = self._require("a1", "c1_prime")
        self._store(eta_share=omega.inverse() * (varepsilon2 * a1 + c1_prime))

    def handshake7_varepsilon3_share_open(self) -> P256:
        return self._require("eta_share") - self._require("r1")

    @phase_step(E2FPhase.HANDSHAKE7_SET_Z)
    def handshake7_set_z1(self, varepsilon3: P256) -> None:
        """Final share; only the prover adds the public varepsilon3^2 term."""
        r1, r_squared_share = self._require("r1", "r_squared_share")
        x1, _ = self._require("ec_point")
        two = P256.from_int(2)

        self._store(
            z1=varepsilon3 * varepsilon3 + two * varepsilon3 * r1 + r_squared_share - x1
        )

    def handshake8_z1_open(self) -> P256:
        return self._require("z1")
