"""
Pairing-group arithmetic on BLS12-381 via py_ecc.

Every group operation (addition, scalar multiplication, Miller loop,
final exponentiation) is delegated to ``py_ecc.optimized_bls12_381``;
this module only wraps the raw Jacobian tuples in small value types and
owns the canonical byte encoding of G1 and G2 elements.

Encoding
--------
Uncompressed zcash/IETF serialisation everywhere:

- G1:  96 bytes   ``x || y``
- G2: 192 bytes   ``x.c1 || x.c0 || y.c1 || y.c0``

each coordinate 48 bytes big-endian.  The three most significant bits
of byte 0 carry the (compression, infinity, sort) flags; only the
infinity flag may be set in this encoding.

Every ``from_bytes`` checks length, flags, coordinate range, curve
equation and prime-order subgroup membership before returning a point.

Install
-------
    pip install py_ecc>=8.0

References
----------
- IETF draft-irtf-cfrg-pairing-friendly-curves §4.2.1  BLS12-381
- zcash/librustzcash  bls12_381 serialisation notes
"""

from __future__ import annotations

import hmac
import secrets
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from py_ecc.bls.g2_primitives import subgroup_check
from py_ecc.fields import (
    optimized_bls12_381_FQ as FQ,
    optimized_bls12_381_FQ2 as FQ2,
)
from py_ecc.optimized_bls12_381 import (
    FQ12,
    G1 as _G1,
    G2 as _G2,
    Z1 as _Z1,
    Z2 as _Z2,
    add as _add,
    b as _B1,
    b2 as _B2,
    curve_order,
    eq as _eq,
    field_modulus,
    final_exponentiate,
    is_inf,
    is_on_curve,
    multiply as _multiply,
    neg as _neg,
    normalize as _normalize,
    pairing as _pairing,
)

from .errors import MalformedInputError, RandomnessError

# ── BLS12-381 constants ─────────────────────────────────────────────────
ORDER = curve_order
FIELD_PRIME = field_modulus
SCALAR_BYTES = 32
FQ_BYTES = 48
G1_BYTES = 2 * FQ_BYTES
G2_BYTES = 4 * FQ_BYTES

_FLAG_COMPRESSED = 0x80
_FLAG_INFINITY = 0x40
_FLAG_SORT = 0x20

RandomSource = Callable[[int], bytes]


# ── Scalar  (Z_r, r = BLS12-381 group order) ────────────────────────────
class Scalar:
    """Element of the scalar field  Z_r  where *r* = ``ORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % ORDER

    @classmethod
    def random(cls, rng: Optional[RandomSource] = None) -> Scalar:
        """
        Uniform in [1, r-1] via rejection sampling.

        ``rng(n)`` must return *n* bytes; it defaults to
        ``secrets.token_bytes``.  Whatever the source raises propagates.
        """
        draw = rng if rng is not None else secrets.token_bytes
        while True:
            raw = draw(SCALAR_BYTES)
            if not isinstance(raw, (bytes, bytearray)) or len(raw) != SCALAR_BYTES:
                raise RandomnessError(
                    f"randomness source must return {SCALAR_BYTES} bytes"
                )
            c = int.from_bytes(raw, "big")
            if 0 < c < ORDER:
                return cls(c)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        if len(data) != SCALAR_BYTES:
            raise MalformedInputError(
                f"need {SCALAR_BYTES} bytes, got {len(data)}"
            )
        v = int.from_bytes(data, "big")
        if v >= ORDER:
            raise MalformedInputError("scalar out of range")
        return cls(v)

    def to_bytes(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Scalar):
            return NotImplemented
        return hmac.compare_digest(self.to_bytes(), o.to_bytes())

    def __hash__(self) -> int:
        return hash(self._v)

    def __repr__(self) -> str:
        return "Scalar(<redacted>)"


# ── points ──────────────────────────────────────────────────────────────
class _GroupPoint:
    """
    Immutable wrapper around a py_ecc Jacobian point.

    Subclasses fix the group: its generator, identity, curve constant and
    encoded width.  Mixing groups in ``+`` returns ``NotImplemented``.
    """

    __slots__ = ("_pt",)

    _GENERATOR: tuple
    _IDENTITY: tuple
    _CURVE_B: object
    _WIDTH: int

    def __init__(self, pt: tuple) -> None:
        self._pt = pt

    # constructors -----------------------------------------------------------
    @classmethod
    def generator(cls):
        return cls(cls._GENERATOR)

    @classmethod
    def identity(cls):
        return cls(cls._IDENTITY)

    @classmethod
    def sum(cls, points: Iterable):
        """
        Balanced pairwise reduction of ``points``.

        Yields the same element as a left fold because the group is
        abelian; the empty sum is the identity.
        """
        layer: List = list(points)
        for p in layer:
            if not isinstance(p, cls):
                raise TypeError(
                    f"cannot sum {type(p).__name__} into {cls.__name__}"
                )
        if not layer:
            return cls.identity()
        while len(layer) > 1:
            paired = [
                layer[i] + layer[i + 1] for i in range(0, len(layer) - 1, 2)
            ]
            if len(layer) % 2:
                paired.append(layer[-1])
            layer = paired
        return layer[0]

    @classmethod
    def from_bytes(cls, data: bytes):
        """Deserialise the uncompressed form, with full validation."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise MalformedInputError(
                f"{cls.__name__} encoding must be bytes, got {type(data).__name__}"
            )
        data = bytes(data)
        if len(data) != cls._WIDTH:
            raise MalformedInputError(
                f"{cls.__name__} needs {cls._WIDTH} bytes, got {len(data)}"
            )
        flags = data[0] & 0xE0
        if flags & _FLAG_COMPRESSED:
            raise MalformedInputError("compressed encoding is not accepted")
        if flags & _FLAG_SORT:
            raise MalformedInputError("sort flag must be clear when uncompressed")
        body = bytes([data[0] & 0x1F]) + bytes(data[1:])
        if flags & _FLAG_INFINITY:
            if any(body):
                raise MalformedInputError("non-canonical encoding of infinity")
            return cls.identity()

        coords = [
            int.from_bytes(body[i:i + FQ_BYTES], "big")
            for i in range(0, cls._WIDTH, FQ_BYTES)
        ]
        if any(c >= FIELD_PRIME for c in coords):
            raise MalformedInputError("coordinate is not a canonical field element")

        pt = cls._point_from_coords(coords)
        if not is_on_curve(pt, cls._CURVE_B):
            raise MalformedInputError(f"{cls.__name__} point is not on the curve")
        if not subgroup_check(pt):
            raise MalformedInputError(
                f"{cls.__name__} point is not in the prime-order subgroup"
            )
        return cls(pt)

    @classmethod
    def _point_from_coords(cls, coords: Sequence[int]) -> tuple:
        raise NotImplementedError

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        if self.is_identity():
            return bytes([_FLAG_INFINITY]) + b"\x00" * (self._WIDTH - 1)
        return b"".join(
            c.to_bytes(FQ_BYTES, "big") for c in self._affine_coords()
        )

    def _affine_coords(self) -> Tuple[int, ...]:
        raise NotImplementedError

    def is_identity(self) -> bool:
        return is_inf(self._pt)

    @property
    def raw(self) -> tuple:
        """The underlying py_ecc Jacobian tuple."""
        return self._pt

    # group operations -------------------------------------------------------
    def __add__(self, o):
        if type(o) is not type(self):
            return NotImplemented
        return type(self)(_add(self._pt, o._pt))

    def __neg__(self):
        return type(self)(_neg(self._pt))

    def __rmul__(self, s):
        if isinstance(s, Scalar):
            return type(self)(_multiply(self._pt, s.value))
        if isinstance(s, int):
            return type(self)(_multiply(self._pt, s % ORDER))
        return NotImplemented

    def __eq__(self, o: object) -> bool:
        if type(o) is not type(self):
            return NotImplemented
        return _eq(self._pt, o._pt)

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        if self.is_identity():
            return f"{type(self).__name__}(∞)"
        return f"{type(self).__name__}(0x{self.to_bytes()[:8].hex()}…)"


class G1Point(_GroupPoint):
    """Point of the order-r subgroup of  E(F_p):  y² = x³ + 4."""

    __slots__ = ()

    _GENERATOR = _G1
    _IDENTITY = _Z1
    _CURVE_B = _B1
    _WIDTH = G1_BYTES

    @classmethod
    def _point_from_coords(cls, coords: Sequence[int]) -> tuple:
        x, y = coords
        return (FQ(x), FQ(y), FQ(1))

    def _affine_coords(self) -> Tuple[int, ...]:
        x, y = _normalize(self._pt)
        return (x.n, y.n)


class G2Point(_GroupPoint):
    """Point of the order-r subgroup of the twist  E'(F_p²)."""

    __slots__ = ()

    _GENERATOR = _G2
    _IDENTITY = _Z2
    _CURVE_B = _B2
    _WIDTH = G2_BYTES

    @classmethod
    def _point_from_coords(cls, coords: Sequence[int]) -> tuple:
        x_c1, x_c0, y_c1, y_c0 = coords
        return (FQ2([x_c0, x_c1]), FQ2([y_c0, y_c1]), FQ2.one())

    def _affine_coords(self) -> Tuple[int, ...]:
        x, y = _normalize(self._pt)
        x_c0, x_c1 = x.coeffs
        y_c0, y_c1 = y.coeffs
        return (int(x_c1), int(x_c0), int(y_c1), int(y_c0))


# ── pairing ─────────────────────────────────────────────────────────────
def pairings_equal(a: G1Point, b: G2Point, c: G1Point, d: G2Point) -> bool:
    r"""
    Decide  e(a, b) == e(c, d).

    Evaluated as a single product  FE( ML(a, b) · ML(-c, d) ) == 1,
    so only one final exponentiation is paid.
    """
    product = _pairing(b.raw, a.raw, final_exponentiate=False) * _pairing(
        d.raw, (-c).raw, final_exponentiate=False,
    )
    return final_exponentiate(product) == FQ12.one()


# ── module-level generators ─────────────────────────────────────────────
g1 = G1Point.generator()
g2 = G2Point.generator()
