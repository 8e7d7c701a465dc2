"""
mithril_msp: the multi-signature primitive behind Mithril certificates.

A pairing-based (BLS12-381) multi-signature scheme with

- **proof of possession** binding each key to its secret exponent,
  closing the rogue-key attack on aggregation
- **homomorphic aggregation** of keys (G2) and signatures (G1)
- a **stake-weighted lottery** score per (message, index, signature)

Quick start
-----------
::

    from mithril_msp import MSP

    parties = [MSP.generate() for _ in range(5)]
    assert all(MSP.check_proof_of_possession(pop) for _, _, pop in parties)

    msg = b"round-42"
    sigs = [MSP.sign(sk, msg) for sk, _, _ in parties]

    avk = MSP.aggregate_keys([vk for _, vk, _ in parties])
    mu = MSP.aggregate_signatures(sigs)
    assert MSP.aggregate_verify(msg, avk, mu)
"""

__version__ = "0.1.0"

# ── core types ──────────────────────────────────────────────────────────
from .curve import Scalar, G1Point, G2Point, g1, g2, ORDER

# ── errors ──────────────────────────────────────────────────────────────
from .errors import MSPError, MalformedInputError, RandomnessError

# ── key material ────────────────────────────────────────────────────────
from .keys import SigningKey, VerificationKey
from .proofs import ProofOfPossession, generate, check_proof_of_possession

# ── signing & aggregation ───────────────────────────────────────────────
from .signing import (
    Signature,
    AggregateVerificationKey,
    AggregateSignature,
    sign,
    verify,
    aggregate_keys,
    aggregate_signatures,
    aggregate_verify,
)

# ── lottery ─────────────────────────────────────────────────────────────
from .lottery import Index, evaluate, winning_indices

# ── facade ──────────────────────────────────────────────────────────────
from .protocol import MSP

__all__ = [
    # version
    "__version__",
    # core
    "Scalar", "G1Point", "G2Point", "g1", "g2", "ORDER",
    # errors
    "MSPError", "MalformedInputError", "RandomnessError",
    # keys
    "SigningKey", "VerificationKey", "ProofOfPossession",
    "generate", "check_proof_of_possession",
    # signing
    "Signature", "AggregateVerificationKey", "AggregateSignature",
    "sign", "verify", "aggregate_keys", "aggregate_signatures",
    "aggregate_verify",
    # lottery
    "Index", "evaluate", "winning_indices",
    # facade
    "MSP",
]
