"""
Stake-weighted lottery evaluation.

Each signer signs the round message once and then scores every index
it was allotted (the number of indices is proportional to its stake):

    ev = BLAKE2b-64("map" ‖ msg ‖ index_le64 ‖ σ)

An index wins when  ev < threshold.  Choosing the threshold (from total
stake and the target quorum probability) is the caller's policy; this
module only provides the pseudorandom score and a convenience filter.
"""

from __future__ import annotations

import functools
import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .errors import MalformedInputError
from .hash import ensure_bytes, lottery_score
from .signing import Signature

logger = logging.getLogger(__name__)

U64_MAX = 2**64 - 1


@dataclass(frozen=True, order=True)
class Index:
    """Lottery index, an unsigned 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise MalformedInputError(
                f"index must be an int, got {type(self.value).__name__}"
            )
        if not 0 <= self.value <= U64_MAX:
            raise MalformedInputError(f"index {self.value} outside u64 range")

    @classmethod
    def coerce(cls, index: Union[Index, int]) -> Index:
        return index if isinstance(index, Index) else cls(index)

    def to_bytes(self) -> bytes:
        return self.value.to_bytes(8, "little")

    def __int__(self) -> int:
        return self.value


def evaluate(message: bytes, index: Union[Index, int], sigma: Signature) -> int:
    """
    MSP.Eval: deterministic u64 lottery score of ``(message, index, σ)``.

    Every input byte reaches the hash: the full message, the 8-byte
    little-endian index and the 96-byte uncompressed σ.
    """
    return lottery_score(
        ensure_bytes(message), Index.coerce(index).to_bytes(), sigma.to_bytes(),
    )


def _score(message: bytes, sigma_bytes: bytes, index: Index) -> int:
    return lottery_score(message, index.to_bytes(), sigma_bytes)


def winning_indices(
    message: bytes,
    indices: Iterable[Union[Index, int]],
    sigma: Signature,
    threshold: int,
    executor: Optional[Executor] = None,
) -> List[Index]:
    """
    Return the candidate indices whose score is strictly below ``threshold``.

    Parameters
    ----------
    message : bytes
        Round message that ``sigma`` signs.
    indices : iterable of Index or int
        Indices allotted to the signer; output keeps their order.
    sigma : Signature
        The signer's signature on ``message``.
    threshold : int
        In ``[0, 2**64]``; 0 never wins, ``2**64`` always wins.
    executor : concurrent.futures.Executor, optional
        Spread the evaluations over a worker pool.
    """
    message = ensure_bytes(message)
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise MalformedInputError("threshold must be an int")
    if not 0 <= threshold <= U64_MAX + 1:
        raise MalformedInputError(f"threshold {threshold} outside [0, 2**64]")

    candidates = [Index.coerce(i) for i in indices]
    score = functools.partial(_score, message, sigma.to_bytes())
    if executor is None:
        scores = [score(i) for i in candidates]
    else:
        scores = list(executor.map(score, candidates))

    winners = [i for i, ev in zip(candidates, scores) if ev < threshold]
    logger.debug("lottery: %d of %d indices won", len(winners), len(candidates))
    return winners
