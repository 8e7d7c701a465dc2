"""
Key material: the secret scalar and its public G2 commitment.

A ``SigningKey`` stays inside the owning process: it has no byte
encoding and its ``repr`` is redacted.  A ``VerificationKey`` is the
public  mvk = x·g2  and is never the identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .curve import G2Point, RandomSource, Scalar, g2
from .errors import MalformedInputError


@dataclass(frozen=True)
class SigningKey:
    """Secret exponent  x ∈ [1, r-1]."""

    x: Scalar = field(repr=False)

    def __post_init__(self) -> None:
        if self.x.is_zero():
            raise MalformedInputError("signing key must be non-zero")

    @classmethod
    def random(cls, rng: Optional[RandomSource] = None) -> SigningKey:
        return cls(Scalar.random(rng))

    def verification_key(self) -> VerificationKey:
        """mvk = x · g2."""
        return VerificationKey(self.x * g2)


@dataclass(frozen=True)
class VerificationKey:
    """
    Public key  mvk ∈ G2.

    Only trust a ``VerificationKey`` once the ``ProofOfPossession`` that
    came with it has been checked.
    """

    mvk: G2Point

    def __post_init__(self) -> None:
        if not isinstance(self.mvk, G2Point):
            raise TypeError(f"expected G2Point, got {type(self.mvk).__name__}")
        if self.mvk.is_identity():
            raise MalformedInputError("verification key is the identity")

    def to_bytes(self) -> bytes:
        """192-byte uncompressed G2 encoding."""
        return self.mvk.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> VerificationKey:
        return cls(G2Point.from_bytes(data))
