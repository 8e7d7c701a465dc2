"""
Key generation with proof of possession.

A proof of possession binds a verification key  mvk = x·g2  to the same
exponent *x* on both source groups:

    k1 = x · H_G1("PoP" ‖ mvk)
    k2 = x · g1

and is accepted iff both pairing equations hold:

    e(k1, g2) == e(H_G1("PoP" ‖ mvk), mvk)
    e(g1, mvk) == e(k2, g2)

Without it a party could publish  mvk' = y·g2 − Σ mvk_i  and forge an
aggregate over the honest keys (rogue-key attack).

References
----------
- Ristenpart & Yilek (2007). "The Power of Proofs-of-Possession."
  EUROCRYPT 2007.
- Chaidos & Kiayias (2021). "Mithril: Stake-based Threshold
  Multisignatures."  §3, MSP.Gen / MSP.Check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .curve import G1Point, G1_BYTES, G2_BYTES, RandomSource, g1, g2, pairings_equal
from .errors import MalformedInputError
from .hash import hash_pop
from .keys import SigningKey, VerificationKey

logger = logging.getLogger(__name__)

POP_BYTES = G2_BYTES + 2 * G1_BYTES


@dataclass(frozen=True)
class ProofOfPossession:
    """
    Verification key together with its possession proof  (mvk, k1, k2).

    Transcript:  k1 = x·H_G1("PoP" ‖ mvk),  k2 = x·g1.
    """

    vk: VerificationKey
    k1: G1Point
    k2: G1Point

    def __post_init__(self) -> None:
        for name in ("k1", "k2"):
            value = getattr(self, name)
            if not isinstance(value, G1Point):
                raise TypeError(
                    f"{name} must be a G1Point, got {type(value).__name__}"
                )
            if value.is_identity():
                raise MalformedInputError(f"{name} is the identity")

    @staticmethod
    def prove(sk: SigningKey) -> ProofOfPossession:
        """Produce  (mvk, k1, k2)  for ``sk``."""
        vk = sk.verification_key()
        k1 = sk.x * hash_pop(vk.to_bytes())
        k2 = sk.x * g1
        return ProofOfPossession(vk=vk, k1=k1, k2=k2)

    def verify(self) -> bool:
        """Check both pairing equations; ``False`` on any mismatch."""
        mvk = self.vk.mvk
        if not pairings_equal(self.k1, g2, hash_pop(self.vk.to_bytes()), mvk):
            logger.debug("proof of possession rejected: k1 does not match mvk")
            return False
        if not pairings_equal(g1, mvk, self.k2, g2):
            logger.debug("proof of possession rejected: k2 does not match mvk")
            return False
        return True

    def to_bytes(self) -> bytes:
        """384 bytes:  mvk (192) ‖ k1 (96) ‖ k2 (96)."""
        return self.vk.to_bytes() + self.k1.to_bytes() + self.k2.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> ProofOfPossession:
        if len(data) != POP_BYTES:
            raise MalformedInputError(
                f"expected {POP_BYTES} bytes, got {len(data)}"
            )
        vk = VerificationKey.from_bytes(data[:G2_BYTES])
        k1 = G1Point.from_bytes(data[G2_BYTES:G2_BYTES + G1_BYTES])
        k2 = G1Point.from_bytes(data[G2_BYTES + G1_BYTES:])
        return cls(vk=vk, k1=k1, k2=k2)


# ── operations ──────────────────────────────────────────────────────────

def generate(
    rng: Optional[RandomSource] = None,
) -> Tuple[SigningKey, VerificationKey, ProofOfPossession]:
    """
    MSP.Gen: draw  x  and return  (sk, mvk, pop).

    Parameters
    ----------
    rng : callable, optional
        ``rng(n) -> bytes`` randomness capability; defaults to
        ``secrets.token_bytes``.  Failures of the source propagate.
    """
    sk = SigningKey.random(rng)
    pop = ProofOfPossession.prove(sk)
    logger.debug("generated key pair mvk=%s…", pop.vk.to_bytes()[:8].hex())
    return sk, pop.vk, pop


def check_proof_of_possession(pop: ProofOfPossession) -> bool:
    """MSP.Check: ``True`` iff the key may be trusted for aggregation."""
    return pop.verify()
