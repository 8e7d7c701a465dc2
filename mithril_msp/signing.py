"""
BLS-style signing, verification and aggregation over BLS12-381.

    σ     = x · H_G1("M" ‖ msg)
    Ver   :  e(σ, g2) == e(H_G1("M" ‖ msg), mvk)

Aggregation is plain group addition: keys in G2, signatures in G1.
By bilinearity

    e(Σ σ_i, g2) = Π e(H(msg), mvk_i) = e(H(msg), Σ mvk_i)

so an aggregate verifies exactly when every contribution was a valid
signature on the *same* message under a key whose proof of possession
was checked.  Neither condition can be detected from the aggregate;
the caller tracks provenance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .curve import G1Point, G2Point, g2, pairings_equal
from .hash import ensure_bytes, hash_message
from .keys import SigningKey, VerificationKey

logger = logging.getLogger(__name__)


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Signature:
    """Single signature  σ ∈ G1."""

    sigma: G1Point

    def __post_init__(self) -> None:
        if not isinstance(self.sigma, G1Point):
            raise TypeError(f"expected G1Point, got {type(self.sigma).__name__}")

    def to_bytes(self) -> bytes:
        """96-byte uncompressed G1 encoding (also the lottery input)."""
        return self.sigma.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        return cls(G1Point.from_bytes(data))


@dataclass(frozen=True)
class AggregateVerificationKey:
    """Σ mvk_i ∈ G2.  The identity means "no signers"."""

    mvk: G2Point

    def __post_init__(self) -> None:
        if not isinstance(self.mvk, G2Point):
            raise TypeError(f"expected G2Point, got {type(self.mvk).__name__}")

    def is_empty(self) -> bool:
        return self.mvk.is_identity()

    def to_bytes(self) -> bytes:
        return self.mvk.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> AggregateVerificationKey:
        return cls(G2Point.from_bytes(data))


@dataclass(frozen=True)
class AggregateSignature:
    """Σ σ_i ∈ G1 over one message."""

    sigma: G1Point

    def __post_init__(self) -> None:
        if not isinstance(self.sigma, G1Point):
            raise TypeError(f"expected G1Point, got {type(self.sigma).__name__}")

    def to_bytes(self) -> bytes:
        return self.sigma.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> AggregateSignature:
        return cls(G1Point.from_bytes(data))


# ── signing / verification ──────────────────────────────────────────────

def sign(sk: SigningKey, message: bytes) -> Signature:
    """
    MSP.Sig:  σ = x · H_G1("M" ‖ msg).

    Deterministic: the same key and message always give the same σ.
    """
    return Signature(sk.x * hash_message(message))


def _verify_points(message: bytes, mvk: G2Point, sigma: G1Point) -> bool:
    return pairings_equal(sigma, g2, hash_message(message), mvk)


def verify(message: bytes, vk: VerificationKey, sigma: Signature) -> bool:
    """MSP.Ver:  e(σ, g2) == e(H_G1("M" ‖ msg), mvk)."""
    return _verify_points(message, vk.mvk, sigma.sigma)


# ── aggregation ─────────────────────────────────────────────────────────

def aggregate_keys(vks: Iterable[VerificationKey]) -> AggregateVerificationKey:
    """
    MSP.AKey:  Σ mvk_i.

    Order-independent; an empty input gives the identity, which
    ``aggregate_verify`` never accepts.
    """
    points = []
    for vk in vks:
        if not isinstance(vk, VerificationKey):
            raise TypeError(f"expected VerificationKey, got {type(vk).__name__}")
        points.append(vk.mvk)
    logger.debug("aggregating %d verification keys", len(points))
    return AggregateVerificationKey(G2Point.sum(points))


def aggregate_signatures(sigmas: Iterable[Signature]) -> AggregateSignature:
    """
    MSP.Aggr:  Σ σ_i.

    Every σ_i must be a signature on the same message under a key that
    passed its proof-of-possession check; this is not (and cannot be)
    verified here.
    """
    points = []
    for s in sigmas:
        if not isinstance(s, Signature):
            raise TypeError(f"expected Signature, got {type(s).__name__}")
        points.append(s.sigma)
    logger.debug("aggregating %d signatures", len(points))
    return AggregateSignature(G1Point.sum(points))


def aggregate_verify(
    message: bytes,
    avk: AggregateVerificationKey,
    mu: AggregateSignature,
) -> bool:
    """
    MSP.AVer: same equation as ``verify`` on the aggregated values.

    An empty aggregate key is rejected outright: with  mvk = σ = O  the
    pairing equation holds trivially.
    """
    message = ensure_bytes(message)
    if avk.is_empty():
        logger.debug("aggregate verification over zero signers rejected")
        return False
    return _verify_points(message, avk.mvk, mu.sigma)
