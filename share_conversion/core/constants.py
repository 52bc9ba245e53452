"""Protocol constants.

Reference:
- https://eprint.iacr.org/2023/964 (E2F page 33, GHASH page 36)
"""

# NIST P-256 coordinate field: p = 2^256 - 2^224 + 2^192 + 2^96 - 1
P256_PRIME: int = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
P256_BITS: int = 256

# GF(2^128) with x^128 + x^7 + x^2 + x + 1 (feedback bits 0x87)
GF128_MODULUS: int = 0x87
GF128_BITS: int = 128

# Defaults
DEFAULT_SEED: int = 42
DEFAULT_BLOCK_NUM: int = 10
DEFAULT_NUM_RUNS: int = 1

# Protocol names used in results and logs
PROTOCOL_E2F: str = "e2f"
PROTOCOL_GHASH: str = "ghash"

