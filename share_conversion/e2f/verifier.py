"""The E2F verifier.

The verifier holds the point P2 = (x2, y2) and always plays the OLE
receiver. Its final output z2 satisfies z1 + z2 = x(P1 + P2).
"""

from typing import Optional, Tuple

import numpy as np

from share_conversion.core.exceptions import DegenerateInput
from share_conversion.core.session import E2FPhase, PartySession, phase_step
from share_conversion.fields.elements import P256
from share_conversion.func.ole import Ole, Role


class Verifier(PartySession):
    """Verifier side of the E2F protocol.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Source of the verifier's masks. Uses default if None.

    Notes
    -----
    Mirrors ``Prover`` with two differences: the OLE input is ordered so
    each position pairs with the prover's complementary mask, and the
    public varepsilon3^2 term is left out of z2 so it is counted once.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(E2FPhase.NEW, "e2f.verifier", rng)

    @phase_step(E2FPhase.PREPROCESS1)
    def preprocess1(self) -> None:
        self._store(
            a2=P256.random(self._rng),
            b2=P256.random(self._rng),
            b2_prime=P256.random(self._rng),
            r2=P256.random(self._rng),
        )

    @phase_step(E2FPhase.PREPROCESS2_OLE_INPUT)
    def preprocess2_ole_input(self, ole: Ole) -> None:
        a2, b2, b2_prime, r2 = self._require("a2", "b2", "b2_prime", "r2")
        ole.input(Role.RECEIVER, [b2, a2, b2_prime, a2, r2])

    @phase_step(E2FPhase.PREPROCESS2_OLE_OUTPUT)
    def preprocess2_ole_output(self, ole: Ole) -> None:
        output = ole.output(Role.RECEIVER)

        self._store(
            a1_b2_share=output[0],
            a2_b1_share=output[1],
            a1_b2_prime_share=output[2],
            a2_b1_prime_share=output[3],
            r1_r2_share=output[4],
        )

    @phase_step(E2FPhase.PREPROCESS3)
    def preprocess3(self) -> None:
        a2, b2, b2_prime = self._require("a2", "b2", "b2_prime")
        a1_b2_share, a2_b1_share = self._require("a1_b2_share", "a2_b1_share")
        a1_b2_prime_share, a2_b1_prime_share = self._require(
            "a1_b2_prime_share", "a2_b1_prime_share"
        )

        self._store(
            c2=a2 * b2 + a1_b2_share + a2_b1_share,
            c2_prime=a2 * b2_prime + a1_b2_prime_share + a2_b1_prime_share,
        )

    @phase_step(E2FPhase.PREPROCESS4)
    def preprocess4(self) -> None:
        r2, r1_r2_share = self._require("r2", "r1_r2_share")
        two = P256.from_int(2)

        self._store(r_squared_share=r2 * r2 + two * r1_r2_share)

    @phase_step(E2FPhase.HANDSHAKE5_INPUT_EC)
    def handshake5_input_ec(self, ec_point: Tuple[P256, P256]) -> None:
        x2, y2 = ec_point
        self._store(ec_point=(P256(int(x2)), P256(int(y2))))

    def handshake5_varepsilon1_share_open(self) -> P256:
        x2, _ = self._require("ec_point")
        return x2 - self._require("b2")

    @phase_step(E2FPhase.HANDSHAKE5_SET_OMEGA)
    def handshake5_set_omega(self, varepsilon1: P256) -> None:
        a2, c2 = self._require("a2", "c2")
        self._store(omega_share=varepsilon1 * a2 + c2)

    def handshake6_omega_share_open(self) -> P256:
        return self._require("omega_share")

    def handshake6_varepsilon2_share_open(self) -> P256:
        _, y2 = self._require("ec_point")
        return y2 - self._require("b2_prime")

    @phase_step(E2FPhase.HANDSHAKE6_SET_ETA)
    def handshake6_set_eta(self, omega: P256, varepsilon2: P256) -> None:
        if omega.is_zero():
            raise DegenerateInput("omega is 0: input points share an x-coordinate")

        a2, c2_prime = self._require("a2", "c2_prime")
        self._store(eta_share=omega.inverse() * (varepsilon2 * a2 + c2_prime))

    def handshake7_varepsilon3_share_open(self) -> P256:
        return self._require("eta_share") - self._require("r2")

    @phase_step(E2FPhase.HANDSHAKE7_SET_Z)
    def handshake7_set_z2(self, varepsilon3: P256) -> None:
        r2, r_squared_share = self._require("r2", "r_squared_share")
        x2, _ = self._require("ec_point")
        two = P256.from_int(2)

        self._store(z2=two * varepsilon3 * r2 + r_squared_share - x2)

    def handshake8_z2_open(self) -> P256:
        return self._require("z2")
