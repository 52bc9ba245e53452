"""Exceptions raised by the share conversion protocols.

None of these are recovered inside a protocol. A failed run has consumed
private randomness, so the caller must start over from preprocessing.
"""


class ShareConversionError(Exception):
    """Base exception for share conversion failures."""


class PreconditionViolation(ShareConversionError):
    """A phase was invoked before its predecessors, or a slot was misused."""


class InvalidBatch(PreconditionViolation):
    """OLE inputs are missing, of unequal length, or already consumed."""


class DegenerateInput(ShareConversionError):
    """An opened denominator is zero, the protocol has no fallback path."""


class MissingInverse(ShareConversionError, ZeroDivisionError):
    """The multiplicative inverse of the zero element was requested."""
