import pytest

from HDBabyJub.babyjub import (
    BASE8,
    IDENTITY,
    P,
    SUB_ORDER,
    BabyJubCurve,
    add_point,
    in_curve,
    mul_point_scalar,
    pack_point,
    unpack_point,
)
from HDBabyJub.errors import DerivationError, PointDecodingError


def test_base_point():
    assert in_curve(BASE8)
    assert in_curve(IDENTITY)
    assert mul_point_scalar(BASE8, SUB_ORDER) == IDENTITY
    assert mul_point_scalar(BASE8, 0) == IDENTITY
    assert mul_point_scalar(BASE8, 1) == BASE8


def test_add_point():
    double = add_point(BASE8, BASE8)
    assert in_curve(double)
    assert double == mul_point_scalar(BASE8, 2)
    assert add_point(double, BASE8) == mul_point_scalar(BASE8, 3)
    assert add_point(BASE8, IDENTITY) == BASE8
    assert add_point(BASE8, (P - BASE8[0], BASE8[1])) == IDENTITY


def test_mul_point_scalar():
    assert mul_point_scalar(BASE8, SUB_ORDER + 5) == mul_point_scalar(BASE8, 5)
    assert mul_point_scalar(mul_point_scalar(BASE8, 3), 7) == mul_point_scalar(BASE8, 21)
    with pytest.raises(ValueError):
        mul_point_scalar(BASE8, -1)


def test_pack_point():
    assert pack_point(BASE8) == bytes.fromhex("8b7d2d877a253c4b7733e1b91f05e0fcedf96bd11c2e572549b2a0f703727925")
    assert pack_point(add_point(BASE8, BASE8)) == bytes.fromhex(
        "53686d2b4005178e1843106f2992a867a01d8a84afbe9e8bda300abfaf6c6601"
    )
    assert pack_point(IDENTITY) == b"\x01" + bytes(31)


@pytest.mark.parametrize(
    "packed,point",
    [
        (
            "cbe9259686d726472ab1c371237b9af753a74375ce47dcee6f913b0ae9ead889",
            (
                14858341710665870071101122386552948889675692104057349648117850482451885852449,
                4454075894631878766112853129067696009497975056697278509880349658746676701643,
            ),
        ),
        (
            "6893dbc12652a9f8745e081e79ddecf1b4fb6ffb3efe293a908b844e732dba97",
            (
                11797851321811965660253381829717094123447392730279071799211127293346583703137,
                10732142758712263385839000233870110018827636477718674790391790294526439691112,
            ),
        ),
        (
            "4d7271a5d2c600d90d360d1f9350f8e0d7af41dc78debcb4c3024570bca42208",
            (
                3943225946630791518407799895582763834506892332885418999483111640395472581922,
                3679712555562809313808645943681924704560595101523564813948262905912585450061,
            ),
        ),
    ],
)
def test_unpack_point(packed, point):
    assert unpack_point(bytes.fromhex(packed)) == point
    assert pack_point(point) == bytes.fromhex(packed)


def test_unpack_base_point():
    assert unpack_point(pack_point(BASE8)) == BASE8
    assert unpack_point(pack_point(IDENTITY)) == IDENTITY


@pytest.mark.parametrize(
    "packed",
    [
        bytes(31),
        bytes(33),
        b"\x02" + bytes(31),  # y = 2 is not on the curve
        b"\xff" * 31 + b"\x7f",  # y >= p
        b"\x01" + bytes(30) + b"\x80",  # identity with the sign bit set
    ],
)
def test_unpack_point_invalid(packed):
    with pytest.raises(PointDecodingError):
        unpack_point(packed)
    assert issubclass(PointDecodingError, DerivationError)


def test_curve_adapter():
    curve = BabyJubCurve()
    assert curve.base_point == BASE8
    assert curve.subgroup_order == SUB_ORDER
    assert curve.scalar_multiply(2, BASE8) == add_point(BASE8, BASE8)
    assert curve.point_add(BASE8, IDENTITY) == BASE8
    assert curve.compress_point(BASE8) == pack_point(BASE8)
