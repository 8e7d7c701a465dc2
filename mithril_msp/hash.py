"""
Domain-separated hash functions for the Mithril multi-signature scheme.

Three usage tags keep the three random oracles of the scheme
independent even when fed identical data:

    PoP  →  hash-to-G1 of a verification key (proof of possession)
    M    →  hash-to-G1 of a round message (signing)
    map  →  lottery score of (message, index, signature)

Hash-to-curve follows the IETF suite ``BLS12381G1_XMD:SHA-256_SSWU_RO_``
with a scheme-wide DST; the usage tag is prepended to the input:

    H_tag(x) = hash_to_G1( tag ‖ x,  DST )

The lottery uses BLAKE2b configured for an 8-byte digest and personalised
with the scheme name.
"""

from __future__ import annotations

import hashlib

from py_ecc.bls.hash_to_curve import hash_to_G1

from .curve import G1Point
from .errors import MalformedInputError


# ── domain tags ─────────────────────────────────────────────────────────
DST         = b"MITHRIL-MSP-V01-CS01-with-BLS12381G1_XMD:SHA-256_SSWU_RO_"
TAG_POP     = b"PoP"
TAG_MSG     = b"M"
TAG_LOTTERY = b"map"

LOTTERY_DIGEST_SIZE = 8
LOTTERY_PERSON      = b"MITHRIL-MSP-V01"

if len({TAG_POP, TAG_MSG, TAG_LOTTERY}) != 3:
    raise RuntimeError("domain tags must be pairwise distinct")


# ── internal helpers ────────────────────────────────────────────────────
def ensure_bytes(data: object, what: str = "message") -> bytes:
    """Accept bytes-like input only; text must be encoded by the caller."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise MalformedInputError(
        f"{what} must be bytes-like, got {type(data).__name__}"
    )


def _hash_to_g1(tag: bytes, data: bytes) -> G1Point:
    return G1Point(hash_to_G1(tag + data, DST, hashlib.sha256))


# ── public hash functions ───────────────────────────────────────────────

def hash_pop(mvk_bytes: bytes) -> G1Point:
    """H_G1("PoP" ‖ mvk) over the canonical encoding of a G2 key."""
    return _hash_to_g1(TAG_POP, mvk_bytes)


def hash_message(message: bytes) -> G1Point:
    """H_G1("M" ‖ msg): the point every signer exponentiates."""
    return _hash_to_g1(TAG_MSG, ensure_bytes(message))


def lottery_score(message: bytes, index_bytes: bytes, sigma_bytes: bytes) -> int:
    r"""
    ev = BLAKE2b-64("map" ‖ msg ‖ index ‖ σ)  read as little-endian u64.

    ``index_bytes`` is the 8-byte little-endian index and ``sigma_bytes``
    the full uncompressed encoding of the signature; nothing is
    truncated before hashing.
    """
    h = hashlib.blake2b(digest_size=LOTTERY_DIGEST_SIZE, person=LOTTERY_PERSON)
    h.update(TAG_LOTTERY)
    h.update(message)
    h.update(index_bytes)
    h.update(sigma_bytes)
    return int.from_bytes(h.digest(), "little")
