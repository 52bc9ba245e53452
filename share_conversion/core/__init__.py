"""Core package initialization."""

from share_conversion.core.constants import (
    DEFAULT_BLOCK_NUM,
    DEFAULT_NUM_RUNS,
    DEFAULT_SEED,
    GF128_BITS,
    GF128_MODULUS,
    P256_BITS,
    P256_PRIME,
    PROTOCOL_E2F,
    PROTOCOL_GHASH,
)
from share_conversion.core.exceptions import (
    DegenerateInput,
    InvalidBatch,
    MissingInverse,
    PreconditionViolation,
    ShareConversionError,
)
from share_conversion.core.session import (
    E2FPhase,
    GhashPhase,
    PartySession,
    phase_step,
)

__all__ = [
    # Constants
    "DEFAULT_BLOCK_NUM",
    "DEFAULT_NUM_RUNS",
    "DEFAULT_SEED",
    "GF128_BITS",
    "GF128_MODULUS",
    "P256_BITS",
    "P256_PRIME",
    "PROTOCOL_E2F",
    "PROTOCOL_GHASH",
    # Exceptions
    "ShareConversionError",
    "PreconditionViolation",
    "InvalidBatch",
    "DegenerateInput",
    "MissingInverse",
    # Sessions
    "E2FPhase",
    "GhashPhase",
    "PartySession",
    "phase_step",
]
