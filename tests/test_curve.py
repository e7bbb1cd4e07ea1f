import pytest

from vanity_gen.curve import (
    INFINITY,
    SECP256K1,
    SECP256R1,
    encode_point_uncompressed,
    get_curve,
    inv,
    is_on_curve,
    point_add,
    point_double,
    scalar_multiply,
)


def test_inverse():
    assert inv(3, 7) == 5
    assert (inv(SECP256R1.gx, SECP256R1.p) * SECP256R1.gx) % SECP256R1.p == 1


def test_inverse_of_zero():
    with pytest.raises(ZeroDivisionError):
        inv(0, 7)


def test_p256_doubling():
    assert point_double(SECP256R1.g, SECP256R1) == (
        0x7CF27B188D034F7E8A52380304B51AC3C08969E277F21B35A60B48FC47669978,
        0x07775510DB8ED040293D9AC69F7430DBBA7DADE63CE982299E04B79D227873D1,
    )


def test_scalar_multiply_matches_repeated_addition():
    curve = SECP256R1
    point = INFINITY
    for _ in range(5):
        point = point_add(point, curve.g, curve)
    assert scalar_multiply(5, curve.g, curve) == point
    assert is_on_curve(point, curve)


@pytest.mark.parametrize('curve', [SECP256R1, SECP256K1])
def test_order_times_generator_is_infinity(curve):
    assert scalar_multiply(curve.n, curve.g, curve) == INFINITY


def test_adding_inverse_points():
    curve = SECP256K1
    negated = (curve.gx, curve.p - curve.gy)
    assert point_add(curve.g, negated, curve) == INFINITY


def test_uncompressed_encoding():
    encoded = encode_point_uncompressed(SECP256K1.g, SECP256K1)
    assert len(encoded) == 65
    assert encoded[0] == 4
    assert encoded[1:33] == SECP256K1.gx.to_bytes(32, 'big')


def test_curve_aliases():
    assert get_curve('secp256r1') is get_curve('prime256v1') is get_curve('P-256')
    with pytest.raises(ValueError):
        get_curve('ed25519')
