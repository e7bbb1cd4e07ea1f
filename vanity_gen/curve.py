"""
MIT License

Copyright (c) 2024 The-Sycorax (https://github.com/The-Sycorax)

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE+= OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


Point = Tuple[int, int]

# The point at infinity.
INFINITY: Point = (0, 0)


@dataclass(frozen=True)
class Curve:
    """
    Parameters of a short Weierstrass curve y^2 = x^3 + ax + b over a prime field.
    """
    name: str
    p: int   # Prime field order
    a: int   # Coefficient A in the curve equation
    b: int   # Coefficient B in the curve equation
    gx: int  # x-coordinate of the base point G
    gy: int  # y-coordinate of the base point G
    n: int   # Order of the base point G

    @property
    def g(self) -> Point:
        return (self.gx, self.gy)

    @property
    def byte_length(self) -> int:
        return (self.p.bit_length() + 7) // 8


SECP256R1 = Curve(
    name='prime256v1',
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
)

SECP256K1 = Curve(
    name='secp256k1',
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
)

# Curve names as accepted on the command line, OpenSSL and SEC aliases included.
CURVES: Dict[str, Curve] = {
    'prime256v1': SECP256R1,
    'secp256r1': SECP256R1,
    'P-256': SECP256R1,
    'secp256k1': SECP256K1,
}


def get_curve(name: str) -> Curve:
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError(f"Unknown curve '{name}'. Expected one of: {', '.join(sorted(CURVES))}") from None


def inv(a: int, p: int) -> int:
    """
    Computes the modular multiplicative inverse of 'a' under modulo 'p' using the extended Euclidean algorithm.

    Args:
    a (int): The number to find the inverse of.
    p (int): The modulus.

    Returns:
    int: The inverse of 'a' modulo 'p'.
    """
    u, v = a % p, p
    if u == 0:
        raise ZeroDivisionError("0 has no inverse modulo p")
    x1, x2 = 1, 0
    while u != 1:
        q, r = divmod(v, u)
        x = x2 - q * x1
        v = u
        u = r
        x2 = x1
        x1 = x
    # Ensure the result is positive.
    return x1 % p


def point_double(point: Point, curve: Curve) -> Point:
    """
    Doubles a point on the elliptic curve using the tangent rule.

    Args:
    point (tuple[int, int]): The point to double.
    curve (Curve): The curve the point lies on.

    Returns:
    tuple[int, int]: The doubled point.
    """
    if point == INFINITY:
        return INFINITY
    x, y = point
    if y == 0:
        return INFINITY
    # Use the derivative of the curve equation to find the slope.
    s = (3 * x**2 + curve.a) * inv(2 * y, curve.p) % curve.p
    x3 = (s**2 - 2 * x) % curve.p
    y3 = (s * (x - x3) - y) % curve.p
    return (x3, y3)


def point_add(p: Point, q: Point, curve: Curve) -> Point:
    """
    Adds two points 'p' and 'q' on an elliptic curve using the chord-and-tangent rule.

    Args:
    p (tuple[int, int]): The first point in the form (x1, y1).
    q (tuple[int, int]): The second point in the form (x2, y2).
    curve (Curve): The curve both points lie on.

    Returns:
    tuple[int, int]: The resulting point after addition.
    """
    # Identity element checks.
    if p == INFINITY:
        return q
    if q == INFINITY:
        return p
    (x1, y1), (x2, y2) = p, q
    if x1 == x2 and y1 != y2:
        return INFINITY  # Points are inverses.
    if p == q:
        return point_double(p, curve)
    s = (y2 - y1) * inv(x2 - x1, curve.p) % curve.p
    x3 = (s**2 - x1 - x2) % curve.p
    y3 = (s * (x1 - x3) - y1) % curve.p
    return (x3, y3)


def scalar_multiply(k: int, point: Point, curve: Curve) -> Point:
    """
    Multiplies 'point' by the scalar 'k', scanning the bits of 'k' from the most significant one.

    Args:
    k (int): The scalar multiplier.
    point (tuple[int, int]): The point on the elliptic curve to be multiplied.
    curve (Curve): The curve the point lies on.

    Returns:
    tuple[int, int]: The resulting point after multiplication.
    """
    result = INFINITY
    for bit in bin(k)[2:]:
        result = point_double(result, curve)
        if bit == '1':
            result = point_add(result, point, curve)
    return result


def is_on_curve(point: Point, curve: Curve) -> bool:
    if point == INFINITY:
        return True
    x, y = point
    return (y * y - (x * x * x + curve.a * x + curve.b)) % curve.p == 0


def encode_point_uncompressed(point: Point, curve: Curve) -> bytes:
    """Serializes a point as 0x04 || X || Y with fixed-width big-endian coordinates."""
    size = curve.byte_length
    x, y = point
    return b'\x04' + x.to_bytes(size, 'big') + y.to_bytes(size, 'big')
