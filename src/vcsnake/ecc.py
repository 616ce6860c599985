import operator
from enum import Enum

from joblib import Parallel, delayed
from py_ecc import optimized_bls12_381, optimized_bn128
from py_ecc.bls.point_compression import (
    compress_G1,
    compress_G2,
    decompress_G1,
    decompress_G2,
)
from py_ecc.fields.optimized_field_elements import FQ2
from py_ecc.fields import (
    optimized_bn128_FQ,
    optimized_bn128_FQ2,
    optimized_bls12_381_FQ,
    optimized_bls12_381_FQ2,
)

from .constant import (
    BLS12_381_MODULUS,
    BLS12_381_SCALAR_FIELD,
    BN254_MODULUS,
    BN254_SCALAR_FIELD,
)
from .utils import get_n_jobs, split_list


class CurveType(Enum):
    BN254 = optimized_bn128
    BN128 = optimized_bn128
    ALT_BN128 = optimized_bn128
    BLS12_381 = optimized_bls12_381


class CurveFQ(Enum):
    BN254 = optimized_bn128_FQ
    BN128 = optimized_bn128_FQ
    ALT_BN128 = optimized_bn128_FQ
    BLS12_381 = optimized_bls12_381_FQ


class CurveFQ2(Enum):
    BN254 = optimized_bn128_FQ2
    BN128 = optimized_bn128_FQ2
    ALT_BN128 = optimized_bn128_FQ2
    BLS12_381 = optimized_bls12_381_FQ2


class CurveField(Enum):
    BN254 = BN254_MODULUS
    BN128 = BN254_MODULUS
    ALT_BN128 = BN254_MODULUS
    BLS12_381 = BLS12_381_MODULUS


class CurveOrder(Enum):
    BN254 = BN254_SCALAR_FIELD
    BN128 = BN254_SCALAR_FIELD
    ALT_BN128 = BN254_SCALAR_FIELD
    BLS12_381 = BLS12_381_SCALAR_FIELD


class CurveScalarSize(Enum):
    BN254 = 32
    BN128 = 32
    ALT_BN128 = 32
    BLS12_381 = 32


class CurvePointSize(Enum):
    """Size of a compressed G1 point, G2 points take twice as much"""

    BN254 = 32
    BN128 = 32
    ALT_BN128 = 32
    BLS12_381 = 48


# arkworks short Weierstrass flags, stored in the top bits of the last byte
SW_Y_IS_NEGATIVE = 0x80
SW_INFINITY = 0x40
SW_FLAG_MASK = SW_Y_IS_NEGATIVE | SW_INFINITY


def ispointG1(x):
    return isinstance(x, Curve) and not x.is_g2()


def ispointG2(x):
    return isinstance(x, Curve) and x.is_g2()


def _coeffs(element):
    if isinstance(element, FQ2):
        return [int(c) for c in element.coeffs]
    return [int(element)]


def _is_larger_root(y, modulus):
    """Return True if `y > -y`, comparing Fq2 elements on c1 first"""
    coeffs = _coeffs(y)
    neg_coeffs = [-c % modulus for c in coeffs]
    return coeffs[::-1] > neg_coeffs[::-1]


def _sqrt(a, modulus):
    """
    Square root in Fq or Fq2 for `modulus = 3 mod 4`,
    raise ValueError if `a` is not a square
    """
    if isinstance(a, FQ2):
        # Adj and Rodriguez-Henriquez, "Square root computation over even
        # extension fields", Algorithm 9
        a1 = a ** ((modulus - 3) // 4)
        alpha = a1 * a1 * a
        x0 = a1 * a
        if alpha == -a.one():
            x = type(a)([0, 1]) * x0
        else:
            x = (alpha + alpha.one()) ** ((modulus - 1) // 2) * x0
    else:
        x = a ** ((modulus + 1) // 4)

    if x * x != a:
        raise ValueError("Point is not on curve")
    return x


class EllipticCurve:
    def __init__(self, curve: str):
        if curve not in CurveType.__members__:
            raise ValueError(f"Unsupported curve: {curve}")

        self.name = CurveType[curve].name
        self.curve = CurveType[curve].value
        self.order = CurveOrder[curve].value
        self.field_modulus = CurveField[curve].value
        self.scalar_size = CurveScalarSize[curve].value
        self.point_size = CurvePointSize[curve].value

    def G1(self):
        """
        Return generator G1 of the curve
        """
        return Curve(self.curve.G1, self.name)

    def G2(self):
        """
        Return generator G2 of the curve
        """
        return Curve(self.curve.G2, self.name)

    def identity_G1(self):
        return Curve(self.curve.Z1, self.name)

    def pairing(self, a, b):
        """
        Compute pairing, that is `e(a, b)`, where `a in G1` and `b in G2`
        """
        if not ispointG1(a) or not ispointG2(b):
            raise TypeError("Pairing expects a G1 point and a G2 point")
        return self.curve.pairing(b.point, a.point)

    def multi_pairing(self, a: list, b: list):
        """
        Perform pairing of e(a[i], b[i]) in batch
        and compute its product
        """
        assert len(a) == len(b), "Length of a and b must be equal"

        result = self.curve.FQ12.one()
        for p, q in zip(a, b):
            if not ispointG1(p) or not ispointG2(q):
                raise TypeError("Pairing expects a G1 point and a G2 point")
            result *= self.curve.pairing(q.point, p.point, final_exponentiate=False)

        return self.curve.final_exponentiate(result)

    def pairing_check(self, a: list, b: list) -> bool:
        """
        Check that the product of e(a[i], b[i]) is the identity of GT
        """
        return self.multi_pairing(a, b) == self.curve.FQ12.one()

    def batch_mul(self, g, s):
        """
        Perform EC multiplication in parallel batch
        where g is Elliptic Curve point(s) and s is scalars
        """

        if not isinstance(g, list):
            g = [g] * len(s)

        if len(g) == 0:
            return []

        return Parallel(n_jobs=get_n_jobs())(
            delayed(operator.mul)(point, scalar) for point, scalar in zip(g, s)
        )

    def multiexp(self, g, s):
        """
        Perform Multi-Scalar-Multiplication (MSM)
        to compute sum of g[i] * s[i] where g is
        Elliptic Curve point and s is scalar
        """
        assert len(g) > 0

        if len(s) == 0:
            return g[0] * 0

        if len(s) < len(g):
            g = g[: len(s)]

        result = g[0] * 0
        for term in self.batch_mul(g, s):
            result += term

        return result

    def scalar_to_bytes(self, scalar: int) -> bytes:
        return (scalar % self.order).to_bytes(self.scalar_size, "little")

    def scalar_from_bytes(self, data: bytes) -> int:
        if len(data) != self.scalar_size:
            raise ValueError(
                f"Scalar of {self.scalar_size} bytes expected, got {len(data)}"
            )
        scalar = int.from_bytes(data, "little")
        if scalar >= self.order:
            raise ValueError("Scalar is not reduced")
        return scalar

    def from_bytes(self, data: bytes):
        """
        Construct Elliptic curve point from its compressed encoding
        """
        n = self.point_size
        if len(data) == n:
            is_g2 = False
        elif len(data) == n * 2:
            is_g2 = True
        else:
            raise ValueError(
                f"Point size of {n} or {n*2} bytes expected, got {len(data)}"
            )

        if self.curve is optimized_bls12_381:
            point = self._decode_zcash(bytes(data), is_g2)
        else:
            point = self._decode_arkworks(bytearray(data), is_g2)

        # G1 of BN254 has cofactor 1, everything else needs a subgroup check
        if is_g2 or self.curve is not optimized_bn128:
            if not self.curve.is_inf(self.curve.multiply(point, self.order)):
                raise ValueError("Point is not in the prime order subgroup")

        return Curve(point, self.name)

    def _decode_zcash(self, data, is_g2):
        n = self.point_size
        if is_g2:
            z1, z2 = (int.from_bytes(chunk, "big") for chunk in split_list(data, n))
            return decompress_G2((z1, z2))
        return decompress_G1(int.from_bytes(data, "big"))

    def _decode_arkworks(self, data, is_g2):
        flags = data[-1] & SW_FLAG_MASK
        data[-1] &= ~SW_FLAG_MASK & 0xFF

        coords = [
            int.from_bytes(chunk, "little") for chunk in split_list(data, self.point_size)
        ]
        if any(c >= self.field_modulus for c in coords):
            raise ValueError("Coordinate is not a field element")

        fq = CurveFQ2[self.name].value if is_g2 else CurveFQ[self.name].value
        if flags & SW_INFINITY:
            if flags != SW_INFINITY or any(coords):
                raise ValueError("Invalid encoding of point at infinity")
            return self.curve.Z2 if is_g2 else self.curve.Z1

        x = fq(coords) if is_g2 else fq(coords[0])
        b = self.curve.b2 if is_g2 else self.curve.b
        y = _sqrt(x**3 + b, self.field_modulus)
        if _is_larger_root(y, self.field_modulus) != bool(flags & SW_Y_IS_NEGATIVE):
            y = -y

        return (x, y, x.one())


class Curve:
    """
    Point of G1 or G2 in projective coordinates,
    group law is written additively
    """

    def __init__(self, point: tuple, crv: str):
        self.name = CurveType[crv].name
        self.point = point

    @property
    def curve(self):
        return CurveType[self.name].value

    def is_g2(self) -> bool:
        return isinstance(self.point[0], FQ2)

    def _check_operand(self, other):
        if not isinstance(other, Curve):
            raise TypeError(
                f"Operation of {type(self)} with {type(other)} is not allowed"
            )
        if other.name != self.name or other.is_g2() != self.is_g2():
            raise TypeError("Points belong to different groups")

    def __add__(self, other):
        self._check_operand(other)
        return Curve(self.curve.add(self.point, other.point), self.name)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        self._check_operand(other)
        return self + (-other)

    def __mul__(self, other):
        if not isinstance(other, int):
            raise TypeError(
                f"Multiplication of {type(self)} with {type(other)} is not allowed"
            )

        scalar = other % self.curve.curve_order
        return Curve(self.curve.multiply(self.point, scalar), self.name)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return Curve(self.curve.neg(self.point), self.name)

    def __eq__(self, other):
        if not isinstance(other, Curve):
            return NotImplemented
        if other.name != self.name or other.is_g2() != self.is_g2():
            return False
        return self.curve.eq(self.point, other.point)

    def __hash__(self):
        return hash(self.to_bytes())

    def __str__(self) -> str:
        if self.is_zero():
            return "Infinity"
        return f"{self.curve.normalize(self.point)}"

    def __repr__(self) -> str:
        return self.__str__()

    def is_zero(self) -> bool:
        return self.curve.is_inf(self.point)

    def to_bytes(self) -> bytes:
        """Return the compressed encoding of the point"""
        if self.curve is optimized_bls12_381:
            return self._encode_zcash()
        return self._encode_arkworks()

    def hex(self) -> str:
        return self.to_bytes().hex()

    def _encode_zcash(self):
        n = CurvePointSize[self.name].value
        if self.is_g2():
            z1, z2 = compress_G2(self.point)
            return z1.to_bytes(n, "big") + z2.to_bytes(n, "big")
        return compress_G1(self.point).to_bytes(n, "big")

    def _encode_arkworks(self):
        n = CurvePointSize[self.name].value
        coords = 2 if self.is_g2() else 1

        if self.is_zero():
            data = bytearray(n * coords)
            data[-1] |= SW_INFINITY
            return bytes(data)

        x, y = self.curve.normalize(self.point)
        data = bytearray(b"".join(c.to_bytes(n, "little") for c in _coeffs(x)))
        if _is_larger_root(y, CurveField[self.name].value):
            data[-1] |= SW_Y_IS_NEGATIVE

        return bytes(data)

