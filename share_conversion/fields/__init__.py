"""Field capability used by the share conversion protocols.

Modules
-------
utils
    Raw integer arithmetic and uniform sampling.
elements
    ``P256`` and ``GF2_128`` immutable value types.
pascal
    Power vectors and field-specialised Pascal's triangle.
"""

from share_conversion.fields.elements import GF2_128, P256, FieldElement
from share_conversion.fields.pascal import pascal_triangle, power_vector
from share_conversion.fields.utils import (
    bytes_to_field_ints,
    chunk_bytes,
    gf_add,
    gf_inverse,
    gf_multiply,
    gf_power,
    mod_inverse,
    random_below,
    random_bits,
    validate_field_element,
)

__all__ = [
    # Value types
    "FieldElement",
    "P256",
    "GF2_128",
    # Helpers
    "pascal_triangle",
    "power_vector",
    # Raw arithmetic
    "gf_add",
    "gf_multiply",
    "gf_power",
    "gf_inverse",
    "mod_inverse",
    "random_bits",
    "random_below",
    "chunk_bytes",
    "bytes_to_field_ints",
    "validate_field_element",
]
