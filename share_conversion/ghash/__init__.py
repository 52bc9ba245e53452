"""GHASH share: polynomial hashing under a secret-shared key.

The prover holds h1, the verifier h2, and the hash key is h = h1 + h2 in
GF(2^128). The protocol gives each party an additive share of

    GHASH_h(B) = B_1 * h^n + B_2 * h^(n-1) + ... + B_n * h

without reconstructing h.

Reference:
- https://eprint.iacr.org/2023/964 (GHASH, page 36)

Notes
-----
1. Each party feeds the powers of its private mask (r1 or r2) into one OLE
   batch and gets additive shares of (r1 r2)^j for j = 0..n.
2. Both open d = h - r1 r2.
3. Since h = d + r1 r2, the binomial theorem gives
   h^k = sum_j C(k, j) d^(k-j) (r1 r2)^j, which is linear in the shared
   powers. Binomial coefficients are taken in GF(2^128), where every even
   coefficient is zero.
4. Each party dots the message blocks with its shares of h^n..h^1.

Only one OLE batch is needed regardless of the number of blocks.
"""

import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from share_conversion.fields.elements import GF2_128
from share_conversion.fields.pascal import pascal_triangle
from share_conversion.fields.utils import bytes_to_field_ints
from share_conversion.func.ole import Ole
from share_conversion.ghash.prover import MaliciousProver, Prover
from share_conversion.ghash.verifier import Verifier
from share_conversion.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GhashTranscript:
    """Public values of one GHASH share run.

    Attributes
    ----------
    d : GF2_128
        Opened h - r1 r2.
    share1 : GF2_128
        Prover's share of the hash.
    share2 : GF2_128
        Verifier's share of the hash.
    num_blocks : int
        Number of blocks hashed.
    duration_ms : float
        Wall-clock time of the run.
    """

    d: GF2_128
    share1: GF2_128
    share2: GF2_128
    num_blocks: int
    duration_ms: float = 0.0

    @property
    def value(self) -> GF2_128:
        """Reconstructed hash."""
        return self.share1 + self.share2


def ghash_shares(
    blocks: Sequence[GF2_128],
    prover: Prover,
    verifier: Verifier,
    rng: Optional[np.random.Generator] = None,
) -> GhashTranscript:
    """Drive prover and verifier through the GHASH share protocol.

    Parameters
    ----------
    blocks : Sequence[GF2_128]
        Message blocks, at most ``block_num`` of them.
    prover : Prover
        Fresh prover session (a ``MaliciousProver`` is accepted too).
    verifier : Verifier
        Fresh verifier session.
    rng : np.random.Generator, optional
        Randomness for the OLE batch. Uses default if None.

    Returns
    -------
    GhashTranscript
        Opened d and both hash shares.
    """
    start = time.perf_counter()
    logger.info(f"Starting GHASH share over {len(blocks)} block(s)")

    try:
        ole = Ole(GF2_128, rng=rng)

        prover.preprocess_ole_input(ole)
        verifier.preprocess_ole_input(ole)

        prover.preprocess_ole_output(ole)
        verifier.preprocess_ole_output(ole)

        d = prover.handshake_a_open_d() + verifier.handshake_a_open_d()

        prover.handshake_a_set_d(d)
        verifier.handshake_a_set_d(d)

        prover.handshake_a_set_hi()
        verifier.handshake_a_set_hi()

        share1 = prover.handshake_output_ghash(blocks)
        share2 = verifier.handshake_output_ghash(blocks)
    except Exception as e:
        logger.error(f"GHASH share aborted: {e}")
        raise

    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(f"GHASH share complete in {duration_ms:.1f} ms")

    return GhashTranscript(
        d=d,
        share1=share1,
        share2=share2,
        num_blocks=len(blocks),
        duration_ms=duration_ms,
    )


def ghash(
    blocks: Sequence[GF2_128],
    prover: Prover,
    verifier: Verifier,
    rng: Optional[np.random.Generator] = None,
) -> GF2_128:
    """Run the protocol and return the reconstructed hash."""
    return ghash_shares(blocks, prover, verifier, rng).value


def ghash_with_input_zero_from_prover(
    blocks: Sequence[GF2_128],
    prover: MaliciousProver,
    verifier: Verifier,
    rng: Optional[np.random.Generator] = None,
) -> GF2_128:
    """Run the protocol with a prover that inputs a zero mask.

    The result is still the correct hash, but afterwards
    ``prover.extracted_key`` equals the full key h.
    """
    logger.warning("Running GHASH share with a zero-mask prover")
    return ghash(blocks, prover, verifier, rng)


def reference_ghash(blocks: Sequence[GF2_128], h: GF2_128) -> GF2_128:
    """Compute the hash in the clear with Horner's method.

    Notes
    -----
    H = B_1 * h^n + ... + B_n * h = h * (... (h * (h * B_1 + B_2) + B_3) ... + B_n)
    """
    if not blocks:
        return GF2_128.zero()

    result = blocks[0]
    for block in blocks[1:]:
        result = result * h + block

    # Final multiplication so the lowest power is h^1
    return result * h


def blocks_from_bytes(data: Union[bytes, bytearray]) -> List[GF2_128]:
    """Split a message into 16-byte big-endian blocks, zero-padding the last."""
    return [GF2_128(value) for value in bytes_to_field_ints(bytes(data))]


__all__ = [
    "Prover",
    "Verifier",
    "MaliciousProver",
    "GhashTranscript",
    "ghash",
    "ghash_shares",
    "ghash_with_input_zero_from_prover",
    "reference_ghash",
    "blocks_from_bytes",
    "pascal_triangle",
]
