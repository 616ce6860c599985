import pytest
from py_ecc import optimized_bls12_381, optimized_bn128

from vcsnake.constant import (
    BLS12_381_MODULUS,
    BLS12_381_SCALAR_FIELD,
    BN254_MODULUS,
    BN254_SCALAR_FIELD,
)
from vcsnake.ecc import EllipticCurve, ispointG1, ispointG2
from vcsnake.hashing import FieldHasher, hash_to_scalar

CURVES = ["BN254", "BLS12_381"]


def test_curve_constants():

    assert BN254_MODULUS == optimized_bn128.field_modulus
    assert BN254_SCALAR_FIELD == optimized_bn128.curve_order
    assert BLS12_381_MODULUS == optimized_bls12_381.field_modulus
    assert BLS12_381_SCALAR_FIELD == optimized_bls12_381.curve_order


def test_curve_aliases():

    assert EllipticCurve("BN128").name == "BN254"
    assert EllipticCurve("ALT_BN128").name == "BN254"

    with pytest.raises(ValueError):
        EllipticCurve("SECP256K1")


@pytest.mark.parametrize("crv", CURVES)
def test_group_arithmetic(crv):

    E = EllipticCurve(crv)

    for G in (E.G1(), E.G2()):
        assert G * 2 == G + G
        assert G * 5 - G * 2 == G * 3
        assert (G - G).is_zero()
        assert (-G + G).is_zero()
        assert (G * 0).is_zero()
        assert G * (E.order + 1) == G
        assert 3 * G == G * 3

    assert ispointG1(E.G1()) and not ispointG2(E.G1())
    assert ispointG2(E.G2()) and not ispointG1(E.G2())
    assert E.identity_G1().is_zero()
    assert (E.G2() * 0).is_zero()
    assert E.G1() + E.identity_G1() == E.G1()


@pytest.mark.parametrize("crv", CURVES)
def test_invalid_operands(crv):

    E = EllipticCurve(crv)

    with pytest.raises(TypeError):
        E.G1() + E.G2()

    with pytest.raises(TypeError):
        E.G1() * 1.5

    with pytest.raises(TypeError):
        E.G1() + 1

    with pytest.raises(TypeError):
        E.pairing(E.G2(), E.G1())

    assert E.G1() != E.G2()


def test_points_of_different_curves():

    bn = EllipticCurve("BN254")
    bls = EllipticCurve("BLS12_381")

    with pytest.raises(TypeError):
        bn.G1() + bls.G1()

    assert bn.G1() != bls.G1()


@pytest.mark.parametrize("crv", CURVES)
def test_bilinearity(crv):

    E = EllipticCurve(crv)
    a, b = 1337, 7331

    assert E.pairing(E.G1() * a, E.G2() * b) == E.pairing(E.G1() * (a * b), E.G2())
    assert E.pairing_check([E.G1() * a, -E.G1()], [E.G2(), E.G2() * a])
    assert not E.pairing_check([E.G1() * a, -E.G1()], [E.G2(), E.G2() * b])
    assert E.multi_pairing([E.G1()], [E.G2()]) == E.pairing(E.G1(), E.G2())


@pytest.mark.parametrize("crv", CURVES)
def test_multiexp(crv):

    E = EllipticCurve(crv)
    points = [E.G1() * i for i in range(1, 5)]
    scalars = [3, 1, 4, 1]

    expected = E.G1() * sum(i * s for i, s in zip(range(1, 5), scalars))

    assert E.multiexp(points, scalars) == expected
    assert E.multiexp(points, scalars[:2]) == E.G1() * 5
    assert E.multiexp(points, []).is_zero()
    assert E.batch_mul(E.G2(), [1, 2]) == [E.G2(), E.G2() * 2]
    assert E.batch_mul([], []) == []


@pytest.mark.parametrize("crv", CURVES)
def test_point_serialization(crv):

    E = EllipticCurve(crv)
    n = E.point_size

    points = [
        E.G1(),
        E.G1() * 1337,
        -(E.G1() * 1337),
        E.identity_G1(),
        E.G2(),
        E.G2() * 1337,
        -(E.G2() * 1337),
        E.G2() * 0,
    ]

    for point in points:
        data = point.to_bytes()
        assert len(data) == (n * 2 if point.is_g2() else n)
        assert E.from_bytes(data) == point
        assert E.from_bytes(data).is_g2() == point.is_g2()

    assert E.G1().to_bytes() != (-E.G1()).to_bytes()
    assert E.G2().to_bytes() != (-E.G2()).to_bytes()


def test_bn254_encoding():

    E = EllipticCurve("BN254")

    # generator is (1, 2) and 2 is the smaller root
    assert E.G1().to_bytes() == bytes([1]) + bytes(31)
    assert (-E.G1()).to_bytes() == bytes([1]) + bytes(30) + bytes([0x80])
    assert E.identity_G1().to_bytes() == bytes(31) + bytes([0x40])
    assert (E.G2() * 0).to_bytes() == bytes(63) + bytes([0x40])


def test_bls12_381_encoding():

    E = EllipticCurve("BLS12_381")

    assert E.G1().hex() == (
        "97f1d3a73197d7942695638c4fa9ac0fc3688c4f9774b905"
        "a14e3a3f171bac586c55e83ff97a1aeffb3af00adb22c6bb"
    )
    assert E.G2().hex() == (
        "93e02b6052719f607dacd3a088274f65596bd0d09920b61a"
        "b5da61bbdc7f5049334cf11213945d57e5ac7d055d042b7e"
        "024aa2b2f08f0a91260805272dc51051c6e47ad4fa403b02"
        "b4510b647ae3d1770bac0326a805bbefd48056c8c121bdb8"
    )


def test_invalid_point_encoding():

    E = EllipticCurve("BN254")

    with pytest.raises(ValueError):
        E.from_bytes(bytes(33))

    # x is not reduced
    with pytest.raises(ValueError):
        E.from_bytes(bytes([0xFF] * 31 + [0x3F]))

    # infinity flag with non-zero x
    with pytest.raises(ValueError):
        E.from_bytes(bytes([1]) + bytes(30) + bytes([0x40]))

    # both flags set
    with pytest.raises(ValueError):
        E.from_bytes(bytes(31) + bytes([0xC0]))


def test_scalar_serialization():

    E = EllipticCurve("BN254")

    assert E.scalar_to_bytes(1) == bytes([1]) + bytes(31)
    assert E.scalar_from_bytes(E.scalar_to_bytes(E.order - 1)) == E.order - 1
    assert E.scalar_to_bytes(E.order) == bytes(32)

    with pytest.raises(ValueError):
        E.scalar_from_bytes(E.order.to_bytes(32, "little"))

    with pytest.raises(ValueError):
        E.scalar_from_bytes(bytes(31))


@pytest.mark.parametrize("crv", CURVES)
def test_hash_to_field(crv):

    hasher = FieldHasher(b"vcsnake-test", crv)

    assert hasher.element_size == 48
    assert hasher(b"abc") == hasher(b"abc")
    assert hasher(b"abc") != hasher(b"abd")
    assert hasher(b"abc") == hash_to_scalar(b"abc", b"vcsnake-test", crv)
    assert hasher(b"abc") != hash_to_scalar(b"abc", b"vcsnake-other", crv)
    assert hasher(bytearray(b"abc")) == hasher(b"abc")
    assert 0 <= hasher(b"") < hasher.order

    values = hasher.hash_to_field(b"abc", 3)
    assert len(values) == 3
    assert len(set(values)) == 3


def test_hash_to_field_invalid_input():

    with pytest.raises(ValueError):
        FieldHasher(b"")

    with pytest.raises(ValueError):
        FieldHasher(b"x" * 256)

    with pytest.raises(TypeError):
        FieldHasher("vcsnake")

    with pytest.raises(TypeError):
        FieldHasher()("abc")
