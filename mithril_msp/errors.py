"""
Exception types raised by mithril_msp.

Verification failures are *not* exceptions: ``verify``,
``aggregate_verify`` and ``check_proof_of_possession`` return ``False``.
Exceptions are reserved for input that cannot be interpreted at all.
"""

from __future__ import annotations


class MSPError(Exception):
    """Base class for every error raised by this package."""


class MalformedInputError(MSPError, ValueError):
    """
    Bytes or arguments rejected at a decoding boundary.

    Raised for wrong lengths, invalid flag bits, coordinates outside the
    base field, points off the curve or outside the prime-order
    subgroup, identity elements where a real key is required, and
    lottery indices outside the u64 range.  Always raised before any
    pairing is computed.
    """


class RandomnessError(MSPError):
    """The injected randomness source returned something unusable."""
