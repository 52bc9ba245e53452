"""E2F: EC point addition to additive field shares.

Converts two points, P1 held by the prover and P2 held by the verifier,
into additive shares z1 + z2 = x(P1 + P2) over the P-256 coordinate field.

Reference:
- https://eprint.iacr.org/2023/964 (E2F, page 33)

Notes
-----
The protocol computes the chord rule x3 = eta^2 - x1 - x2 with
eta = (y2 - y1) / (x2 - x1) on secret-shared data:

1. Preprocessing: two Beaver triples (a, b, c) and (a, b', c') plus shares
   of a mask r and of r^2, all from one OLE batch.
2. Round 5: open varepsilon1 = x2 - x1 - b, derive shares of
   omega = (x2 - x1) * a.
3. Round 6: open omega and varepsilon2 = y2 - y1 - b', derive shares of eta.
   Abort if omega == 0.
4. Round 7: open varepsilon3 = eta - r, derive shares of eta^2 - x1 - x2.
5. Round 8: reveal z1 and z2.
"""

import time
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from share_conversion.e2f.curve import (
    GENERATOR,
    add_points_x,
    chord_x,
    point_to_field,
    random_point,
)
from share_conversion.e2f.prover import Prover
from share_conversion.e2f.verifier import Verifier
from share_conversion.fields.elements import P256
from share_conversion.func.ole import Ole
from share_conversion.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class E2FTranscript:
    """Public values of one E2F run.

    Attributes
    ----------
    varepsilon1 : P256
        Opened x2 - x1 - b.
    omega : P256
        Opened (x2 - x1) * a.
    varepsilon2 : P256
        Opened y2 - y1 - b'.
    varepsilon3 : P256
        Opened eta - r.
    z1 : P256
        Prover's final share.
    z2 : P256
        Verifier's final share.
    duration_ms : float
        Wall-clock time of the run.
    """

    varepsilon1: P256
    omega: P256
    varepsilon2: P256
    varepsilon3: P256
    z1: P256
    z2: P256
    duration_ms: float = 0.0

    @property
    def x(self) -> P256:
        """Reconstructed x-coordinate of P1 + P2."""
        return self.z1 + self.z2


def run_e2f(
    p1: Tuple[P256, P256],
    p2: Tuple[P256, P256],
    prover: Optional[Prover] = None,
    verifier: Optional[Verifier] = None,
    rng: Optional[np.random.Generator] = None,
) -> E2FTranscript:
    """Drive prover and verifier through the full E2F protocol.

    Parameters
    ----------
    p1 : Tuple[P256, P256]
        Prover's point (x1, y1).
    p2 : Tuple[P256, P256]
        Verifier's point (x2, y2).
    prover : Prover, optional
        Fresh prover session. Created with ``rng`` if None.
    verifier : Verifier, optional
        Fresh verifier session. Created with ``rng`` if None.
    rng : np.random.Generator, optional
        Randomness for sessions created here and for the OLE batch.

    Returns
    -------
    E2FTranscript
        Opened values and final shares.

    Raises
    ------
    DegenerateInput
        If x1 == x2.
    PreconditionViolation
        If a supplied session is not fresh.
    """
    if rng is None:
        rng = np.random.default_rng()
    if prover is None:
        prover = Prover(rng=rng)
    if verifier is None:
        verifier = Verifier(rng=rng)

    start = time.perf_counter()
    logger.info("Starting E2F")

    try:
        ole = Ole(P256, rng=rng)

        prover.preprocess1()
        verifier.preprocess1()

        prover.preprocess2_ole_input(ole)
        verifier.preprocess2_ole_input(ole)
        prover.preprocess2_ole_output(ole)
        verifier.preprocess2_ole_output(ole)

        prover.preprocess3()
        verifier.preprocess3()

        prover.preprocess4()
        verifier.preprocess4()

        # Round 5
        prover.handshake5_input_ec(p1)
        verifier.handshake5_input_ec(p2)

        varepsilon1 = (
            prover.handshake5_varepsilon1_share_open()
            + verifier.handshake5_varepsilon1_share_open()
        )
        prover.handshake5_set_omega(varepsilon1)
        verifier.handshake5_set_omega(varepsilon1)

        # Round 6
        omega = prover.handshake6_omega_share_open() + verifier.handshake6_omega_share_open()
        varepsilon2 = (
            prover.handshake6_varepsilon2_share_open()
            + verifier.handshake6_varepsilon2_share_open()
        )
        prover.handshake6_set_eta(omega, varepsilon2)
        verifier.handshake6_set_eta(omega, varepsilon2)

        # Round 7
        varepsilon3 = (
            prover.handshake7_varepsilon3_share_open()
            + verifier.handshake7_varepsilon3_share_open()
        )
        prover.handshake7_set_z1(varepsilon3)
        verifier.handshake7_set_z2(varepsilon3)

        # Round 8
        z1 = prover.handshake8_z1_open()
        z2 = verifier.handshake8_z2_open()
    except Exception as e:
        logger.error(f"E2F aborted: {e}")
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"E2F complete in {duration_ms:.1f} ms")

    return E2FTranscript(
        varepsilon1=varepsilon1,
        omega=omega,
        varepsilon2=varepsilon2,
        varepsilon3=varepsilon3,
        z1=z1,
        z2=z2,
        duration_ms=duration_ms,
    )


__all__ = [
    "Prover",
    "Verifier",
    "E2FTranscript",
    "run_e2f",
    "GENERATOR",
    "add_points_x",
    "chord_x",
    "point_to_field",
    "random_point",
]
