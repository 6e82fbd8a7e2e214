"""Baby Jubjub twisted Edwards curve arithmetic

The curve is defined over the scalar field of BN254 and is the curve used by
circomlib for in-circuit EdDSA:

    a.x^2 + y^2 = 1 + d.x^2.y^2    with a = 168700, d = 168696

Points are affine (x, y) tuples of Python integers and the neutral element is
(0, 1). The packed encoding follows circomlib ``packPoint``: y as 32 bytes
little endian, with the highest bit of the last byte set when x is "negative"
(greater than (p-1)/2).

This file is formatted using "black --line-length=120"
"""
from typing import Optional, Tuple

from .errors import PointDecodingError

Point = Tuple[int, int]

P = 21888242871839275222246405745257275088548364400416034343698204186575808495617
A = 168700
D = 168696

# Order of the prime subgroup generated by BASE8
SUB_ORDER = 2736030358979909402780800718157159386076813972158567259200215660948447373041

BASE8: Point = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)

IDENTITY: Point = (0, 1)


def _inv(x: int) -> int:
    return pow(x, P - 2, P)


def _sqrt(n: int) -> Optional[int]:
    """Tonelli-Shanks square root modulo P, None for non-residues"""
    n %= P
    if n == 0:
        return 0
    if pow(n, (P - 1) // 2, P) != 1:
        return None
    # P - 1 = q * 2^s with q odd
    q, s = P - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while pow(z, (P - 1) // 2, P) != P - 1:
        z += 1
    m, c, t, r = s, pow(z, q, P), pow(n, q, P), pow(n, (q + 1) // 2, P)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % P
            i += 1
        b = pow(c, 1 << (m - i - 1), P)
        m, c, t, r = i, b * b % P, t * b * b % P, r * b % P
    return r


def in_curve(point: Point) -> bool:
    x, y = point
    x2, y2 = x * x % P, y * y % P
    return (A * x2 + y2) % P == (1 + D * x2 * y2) % P


def add_point(p1: Point, p2: Point) -> Point:
    """Unified twisted Edwards addition, also valid for doubling"""
    x1, y1 = p1
    x2, y2 = p2
    t = D * x1 * x2 * y1 * y2 % P
    x3 = (x1 * y2 + y1 * x2) * _inv(1 + t) % P
    y3 = (y1 * y2 - A * x1 * x2) * _inv(1 - t) % P
    return (x3, y3)


def mul_point_scalar(point: Point, e: int) -> Point:
    """Compute e.point with a double-and-add ladder (e must be non-negative)"""
    if e < 0:
        raise ValueError("Negative scalar")
    res = IDENTITY
    exp = point
    while e:
        if e & 1:
            res = add_point(res, exp)
        exp = add_point(exp, exp)
        e >>= 1
    return res


def pack_point(point: Point) -> bytes:
    x, y = point
    buf = bytearray(y.to_bytes(32, "little"))
    if x > (P - 1) // 2:
        buf[31] |= 0x80
    return bytes(buf)


def unpack_point(buf: bytes) -> Point:
    """
    INPUT:
      buf: 32 bytes packed point

    OUTPUT:
      (x, y) affine point

    PROCESS:
      1. read the sign bit from the highest bit of the last byte and clear it
      2. y = LEBytes_to_int(buf)
      3. x = sqrt((1 - y^2) / (a - d.y^2)), taking the root below (p-1)/2
      4. negate x if the sign bit was set
    """
    if len(buf) != 32:
        raise PointDecodingError("Packed point must be 32 bytes, got {}".format(len(buf)))
    raw = bytearray(buf)
    sign = bool(raw[31] & 0x80)
    raw[31] &= 0x7F
    y = int.from_bytes(raw, "little")
    if y >= P:
        raise PointDecodingError("Packed y coordinate is not reduced")

    y2 = y * y % P
    x = _sqrt((1 - y2) * _inv(A - D * y2))
    if x is None:
        raise PointDecodingError("No curve point with this y coordinate")
    if x > (P - 1) // 2:
        x = P - x
    if sign:
        if x == 0:
            raise PointDecodingError("Non canonical encoding of a point with x = 0")
        x = P - x
    return (x, y)


class BabyJubCurve:
    """Curve algebra used by the derivation engine

    Any object exposing these five members can be plugged into BIP32BabyJub.
    """

    base_point: Point = BASE8
    subgroup_order: int = SUB_ORDER

    @staticmethod
    def scalar_multiply(scalar: int, point: Point) -> Point:
        return mul_point_scalar(point, scalar)

    @staticmethod
    def point_add(p1: Point, p2: Point) -> Point:
        return add_point(p1, p2)

    @staticmethod
    def compress_point(point: Point) -> bytes:
        return pack_point(point)
