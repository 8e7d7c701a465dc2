"""
The ``MSP`` facade: the eight operations an orchestration layer uses.

Usage
-----
::

    from mithril_msp import MSP

    sk, vk, pop = MSP.generate()
    assert MSP.check(pop)

    sigma = MSP.sign(sk, b"round-42")
    assert MSP.verify(b"round-42", vk, sigma)

    avk = MSP.aggregate_keys([vk])
    mu = MSP.aggregate_signatures([sigma])
    assert MSP.aggregate_verify(b"round-42", avk, mu)

    ev = MSP.eval(b"round-42", 7, sigma)

All methods are stateless and safe to call from any thread.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union

from .curve import RandomSource
from .keys import SigningKey, VerificationKey
from .lottery import Index, evaluate
from .proofs import ProofOfPossession, check_proof_of_possession, generate
from .signing import (
    AggregateSignature,
    AggregateVerificationKey,
    Signature,
    aggregate_keys,
    aggregate_signatures,
    aggregate_verify,
    sign,
    verify,
)


class MSP:
    """Multi-signature primitive with proof of possession and lottery."""

    @staticmethod
    def generate(
        rng: Optional[RandomSource] = None,
    ) -> Tuple[SigningKey, VerificationKey, ProofOfPossession]:
        return generate(rng)

    @staticmethod
    def check_proof_of_possession(pop: ProofOfPossession) -> bool:
        return check_proof_of_possession(pop)

    @staticmethod
    def check(pop: ProofOfPossession) -> bool:
        return check_proof_of_possession(pop)

    @staticmethod
    def sign(sk: SigningKey, message: bytes) -> Signature:
        return sign(sk, message)

    @staticmethod
    def verify(message: bytes, vk: VerificationKey, sigma: Signature) -> bool:
        return verify(message, vk, sigma)

    @staticmethod
    def aggregate_keys(vks: Iterable[VerificationKey]) -> AggregateVerificationKey:
        return aggregate_keys(vks)

    @staticmethod
    def aggregate_signatures(sigmas: Iterable[Signature]) -> AggregateSignature:
        return aggregate_signatures(sigmas)

    @staticmethod
    def aggregate_verify(
        message: bytes,
        avk: AggregateVerificationKey,
        mu: AggregateSignature,
    ) -> bool:
        return aggregate_verify(message, avk, mu)

    @staticmethod
    def eval(message: bytes, index: Union[Index, int], sigma: Signature) -> int:
        return evaluate(message, index, sigma)
