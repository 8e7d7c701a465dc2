"""
Tests for group wrappers, canonical encoding and validated decoding.
"""

import random

import pytest
from py_ecc.bls.hash_to_curve import map_to_curve_G2
from py_ecc.fields import (
    optimized_bls12_381_FQ as FQ,
    optimized_bls12_381_FQ2 as FQ2,
)

from mithril_msp.curve import (
    FIELD_PRIME,
    G1Point,
    G1_BYTES,
    G2Point,
    G2_BYTES,
    ORDER,
    Scalar,
    g1,
    g2,
    pairings_equal,
)
from mithril_msp.errors import MalformedInputError, RandomnessError


class TestScalar:
    """Scalar sampling and encoding."""

    def test_random_is_deterministic_under_seeded_source(self):
        a = Scalar.random(random.Random(7).randbytes)
        b = Scalar.random(random.Random(7).randbytes)
        assert a == b
        assert 0 < a.value < ORDER

    def test_random_rejects_out_of_range_draws(self):
        draws = iter([b"\xff" * 32, b"\x00" * 32, (5).to_bytes(32, "big")])
        s = Scalar.random(lambda n: next(draws))
        assert s.value == 5

    def test_short_draw_raises(self):
        with pytest.raises(RandomnessError):
            Scalar.random(lambda n: b"\x01" * (n - 1))

    def test_source_failure_propagates(self):
        def broken(n):
            raise OSError("entropy pool unavailable")

        with pytest.raises(OSError):
            Scalar.random(broken)

    def test_bytes_roundtrip(self):
        s = Scalar(123456789)
        assert Scalar.from_bytes(s.to_bytes()) == s

    def test_from_bytes_rejects_order(self):
        with pytest.raises(MalformedInputError):
            Scalar.from_bytes(ORDER.to_bytes(32, "big"))

    def test_repr_hides_value(self):
        assert "123" not in repr(Scalar(123))


class TestGroupOps:
    """Addition, negation and multiplication behave as a group."""

    def test_scalar_mult_distributes(self):
        assert 5 * g1 == (2 * g1) + (3 * g1)
        assert 5 * g2 == (2 * g2) + (3 * g2)

    def test_negation(self):
        assert (g1 + (-g1)).is_identity()
        assert (g2 + (-g2)).is_identity()

    def test_order_annihilates(self):
        assert (Scalar(ORDER - 1) * g1 + g1).is_identity()

    def test_mixed_groups_do_not_add(self):
        with pytest.raises(TypeError):
            g1 + g2

    def test_sum_matches_left_fold(self):
        points = [Scalar(k) * g1 for k in (3, 11, 17, 29, 101)]
        folded = G1Point.identity()
        for p in points:
            folded = folded + p
        assert G1Point.sum(points) == folded
        assert G1Point.sum(reversed(points)).to_bytes() == folded.to_bytes()

    def test_empty_sum_is_identity(self):
        assert G2Point.sum([]).is_identity()

    def test_sum_rejects_foreign_elements(self):
        with pytest.raises(TypeError):
            G1Point.sum([g1, g2])


class TestPairing:
    """Bilinearity sanity check on the backend."""

    def test_bilinear(self):
        a, b = Scalar(6), Scalar(7)
        assert pairings_equal(a * g1, b * g2, Scalar(42) * g1, g2)

    def test_unequal(self):
        assert not pairings_equal(Scalar(6) * g1, g2, Scalar(7) * g1, g2)


class TestEncoding:
    """Canonical uncompressed encoding and every rejection path."""

    def test_widths(self):
        assert len(g1.to_bytes()) == G1_BYTES == 96
        assert len(g2.to_bytes()) == G2_BYTES == 192

    def test_roundtrip(self):
        p = Scalar(987654321) * g1
        q = Scalar(123456789) * g2
        assert G1Point.from_bytes(p.to_bytes()) == p
        assert G2Point.from_bytes(q.to_bytes()) == q

    def test_decodes_any_bytes_like(self):
        p = Scalar(31337) * g1
        assert G1Point.from_bytes(memoryview(p.to_bytes())) == p
        assert G1Point.from_bytes(bytearray(p.to_bytes())) == p
        assert G2Point.from_bytes(memoryview(g2.to_bytes())) == g2

    def test_encoding_is_canonical_across_representations(self):
        # same point reached by two different Jacobian paths
        assert (g1 + g1 + g1).to_bytes() == (3 * g1).to_bytes()

    def test_identity_roundtrip(self):
        data = G1Point.identity().to_bytes()
        assert data[0] == 0x40 and not any(data[1:])
        assert G1Point.from_bytes(data).is_identity()
        assert G2Point.from_bytes(G2Point.identity().to_bytes()).is_identity()

    @pytest.mark.parametrize("length", [0, 48, 95, 97, 192])
    def test_wrong_length(self, length):
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(b"\x00" * length)

    def test_not_bytes(self):
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes("00" * 96)

    def test_compressed_flag_rejected(self):
        data = bytearray(g1.to_bytes())
        data[0] |= 0x80
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(bytes(data))

    def test_sort_flag_rejected(self):
        data = bytearray(g2.to_bytes())
        data[0] |= 0x20
        with pytest.raises(MalformedInputError):
            G2Point.from_bytes(bytes(data))

    def test_non_canonical_infinity_rejected(self):
        data = bytearray(G1Point.identity().to_bytes())
        data[-1] = 1
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(bytes(data))

    def test_all_zero_is_not_identity(self):
        # infinity must be flagged; (0, 0) is simply off the curve
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(b"\x00" * 96)

    def test_coordinate_out_of_field(self):
        data = FIELD_PRIME.to_bytes(48, "big") + g1.to_bytes()[48:]
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(data)

    def test_off_curve(self):
        data = (1).to_bytes(48, "big") + (1).to_bytes(48, "big")
        with pytest.raises(MalformedInputError):
            G1Point.from_bytes(data)

    def test_g1_wrong_subgroup(self):
        # (0, 2) lies on y² = x³ + 4 but has order 3
        data = (0).to_bytes(48, "big") + (2).to_bytes(48, "big")
        with pytest.raises(MalformedInputError, match="subgroup"):
            G1Point.from_bytes(data)

    def test_g2_wrong_subgroup(self):
        # SSWU output before cofactor clearing is on the twist but not in G2
        raw = map_to_curve_G2(FQ2([1, 2]))
        data = G2Point(raw).to_bytes()
        with pytest.raises(MalformedInputError, match="subgroup"):
            G2Point.from_bytes(data)

    def test_g1_point_in_g2_slot(self):
        with pytest.raises(MalformedInputError):
            G2Point.from_bytes(g1.to_bytes() * 2)

    def test_hash_follows_encoding(self):
        assert hash(g1 + g1) == hash(2 * g1)
        assert len({g1 + g1, 2 * g1, g1}) == 2

    def test_to_bytes_does_not_validate(self):
        assert G1Point((FQ(0), FQ(2), FQ(1))).to_bytes()[95] == 2
