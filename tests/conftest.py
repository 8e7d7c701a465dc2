"""Shared fixtures.  Pairings are pure Python, so key sets are cached."""

import random

import pytest

from mithril_msp import generate


def seeded_rng(seed):
    """Deterministic ``rng(n) -> bytes`` capability for key generation."""
    return random.Random(seed).randbytes


@pytest.fixture(scope="session")
def parties():
    """Five (sk, vk, pop) triples from a fixed seed."""
    draw = seeded_rng(2024)
    return [generate(draw) for _ in range(5)]


@pytest.fixture(scope="session")
def party(parties):
    return parties[0]
