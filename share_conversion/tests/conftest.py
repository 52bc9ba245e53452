"""Shared fixtures for share conversion tests."""

from typing import Tuple

import numpy as np
import pytest

from share_conversion.e2f import Prover as E2FProver
from share_conversion.e2f import Verifier as E2FVerifier
from share_conversion.e2f import random_point
from share_conversion.fields.elements import GF2_128, P256
from share_conversion.func.ole import Ole


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so failures are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def point_pair(rng):
    """Two independent random P-256 points (as ``ecdsa`` points)."""
    return random_point(rng), random_point(rng)


@pytest.fixture
def key_shares(rng) -> Tuple[GF2_128, GF2_128]:
    """Random additive split of a GHASH key."""
    return GF2_128.random(rng), GF2_128.random(rng)


def run_e2f_preprocessing(rng: np.random.Generator) -> Tuple[E2FProver, E2FVerifier]:
    """Return an E2F prover and verifier that completed preprocess1-4."""
    prover = E2FProver(rng=rng)
    verifier = E2FVerifier(rng=rng)
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

    return prover, verifier


@pytest.fixture
def preprocessed_e2f(rng) -> Tuple[E2FProver, E2FVerifier]:
    """E2F parties ready for handshake round 5."""
    return run_e2f_preprocessing(rng)
