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

import secrets

from dataclasses import dataclass

from Crypto.Hash import keccak

from vanity_gen.base58 import base58check_encode
from vanity_gen.config import ADDRESS_BYTES, BASE58CHECK_PREFIX, CURVE, VERSION_PREFIX
from vanity_gen.curve import encode_point_uncompressed, get_curve, is_on_curve, scalar_multiply


@dataclass(frozen=True)
class Wallet:
    """
    A keypair and the address derived from it.

    Attributes:
    private_key (bytes): The private scalar, big-endian and fixed width.
    public_key (bytes): The uncompressed public point (0x04 || X || Y).
    address (bytes): The last 20 bytes of Keccak-256 over X || Y.
    """
    private_key: bytes
    public_key: bytes
    address: bytes

    @property
    def private_key_hex(self) -> str:
        return self.private_key.hex()

    @property
    def address_hex(self) -> str:
        return self.address.hex()


def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def derive_address(public_key: bytes) -> bytes:
    """
    Derives the raw 20-byte address of an uncompressed public key.

    Args:
    public_key (bytes): 0x04 || X || Y.

    Returns:
    bytes: The low-order 20 bytes of Keccak-256 over the coordinates.
    """
    # The format byte is not part of the hashed data.
    return keccak256(public_key[1:])[-ADDRESS_BYTES:]


def _wallet_from_scalar(k: int, curve_name: str, verify: bool = False) -> Wallet:
    curve = get_curve(curve_name)
    point = scalar_multiply(k, curve.g, curve)
    if verify and not is_on_curve(point, curve):
        raise ValueError("Derived public key is not on the selected curve")
    public_key = encode_point_uncompressed(point, curve)
    return Wallet(
        private_key=k.to_bytes(curve.byte_length, 'big'),
        public_key=public_key,
        address=derive_address(public_key),
    )


def generate_wallet(curve: str = CURVE) -> Wallet:
    """
    Creates a wallet from a random private key.

    Args:
    curve (str): Name of the curve to generate the keypair on.

    Returns:
    Wallet: A fresh keypair and its address.
    """
    n = get_curve(curve).n
    # Private scalar in [1, n - 1].
    return _wallet_from_scalar(secrets.randbelow(n - 1) + 1, curve)


def wallet_from_private_key(private_key: str, curve: str = CURVE) -> Wallet:
    """
    Rebuilds the wallet of a hexadecimal private key, with or without a '0x' prefix.
    """
    if private_key.startswith('0x'):
        private_key = private_key[2:]
    k = int(private_key, 16)
    if not 0 < k < get_curve(curve).n:
        raise ValueError("Private key is out of range for the selected curve")
    return _wallet_from_scalar(k, curve, verify=True)


def to_checksum_address(address: str) -> str:
    """
    Applies checksum casing to a lowercase hex address.

    Each character is uppercased when the nibble at the same position of
    Keccak-256 over the lowercase address text is 8 or more.

    Args:
    address (str): Hex address without the '0x' prefix.

    Returns:
    str: The checksum-cased address.
    """
    address = address.lower()
    digest = keccak256(address.encode('ascii')).hex()
    return ''.join(
        char.upper() if int(digest[i], 16) >= 8 else char
        for i, char in enumerate(address)
    )


def to_alternate_address(address: bytes, version_prefix: bytes = VERSION_PREFIX) -> str:
    """
    Wraps a raw address with the network marker and encodes it as Base58Check.

    Args:
    address (bytes): The raw 20-byte address.
    version_prefix (bytes): Two-byte network marker.

    Returns:
    str: The alternate textual representation of the address.
    """
    if len(address) != ADDRESS_BYTES:
        raise ValueError(f"Address must be {ADDRESS_BYTES} bytes, got {len(address)}")
    return base58check_encode(version_prefix + address, prefix=BASE58CHECK_PREFIX)
