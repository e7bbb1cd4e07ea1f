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

import hashlib

from collections import deque


# Base58 characters used for encoding addresses.
b58_chars = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'
b58_index = {char: index for index, char in enumerate(b58_chars)}

CHECKSUM_LENGTH = 4


def b58encode(b: bytes) -> str:
    """
    Encodes bytes into a Base58 encoded string.

    Args:
    b (bytes): Byte sequence to encode.

    Returns:
    str: A Base58 encoded string, with one leading '1' per leading zero byte.
    """
    if not isinstance(b, (bytes, bytearray)):
        raise TypeError(f"Expected bytes, got {type(b).__name__}")
    # Convert byte sequence to a number.
    n = int.from_bytes(b, 'big')
    chars = deque()
    # Compute Base58 encoding by repeatedly dividing the number by 58.
    while n > 0:
        n, remainder = divmod(n, 58)
        chars.appendleft(b58_chars[remainder])
    # Handle leading zeros in the byte sequence.
    chars.appendleft('1' * (len(b) - len(bytes(b).lstrip(b'\0'))))
    return ''.join(chars)


def b58decode(s: str) -> bytes:
    """
    Decodes a Base58 encoded string back into bytes.

    Args:
    s (str): Base58 text.

    Returns:
    bytes: The decoded byte sequence, leading '1' characters restored as zero bytes.
    """
    if not isinstance(s, str):
        raise TypeError(f"Expected str, got {type(s).__name__}")
    n = 0
    for char in s:
        try:
            n = n * 58 + b58_index[char]
        except KeyError:
            raise ValueError(f"Invalid Base58 character: {char!r}") from None
    body = n.to_bytes((n.bit_length() + 7) // 8, 'big') if n else b''
    zeroes = len(s) - len(s.lstrip('1'))
    return b'\0' * zeroes + body


def checksum(data: bytes) -> bytes:
    """First four bytes of a double SHA-256 over 'data'."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:CHECKSUM_LENGTH]


def base58check_encode(payload: bytes, prefix: bytes = b'\x00') -> str:
    """
    Encodes 'prefix || payload || checksum' as Base58 text.

    Args:
    payload (bytes): The data to encode.
    prefix (bytes): Version bytes placed before the payload.

    Returns:
    str: The Base58Check encoded string.
    """
    if not isinstance(payload, (bytes, bytearray)):
        raise TypeError(f"Expected bytes, got {type(payload).__name__}")
    data = bytes(prefix) + bytes(payload)
    return b58encode(data + checksum(data))


def base58check_decode(s: str, prefix: bytes = b'\x00') -> bytes:
    """
    Decodes Base58Check text and validates its prefix and checksum.

    Returns:
    bytes: The payload with prefix and checksum removed.
    """
    raw = b58decode(s)
    if len(raw) < len(prefix) + CHECKSUM_LENGTH:
        raise ValueError("Base58Check data is too short")
    data, trailer = raw[:-CHECKSUM_LENGTH], raw[-CHECKSUM_LENGTH:]
    if checksum(data) != trailer:
        raise ValueError("Base58Check checksum mismatch")
    if not data.startswith(prefix):
        raise ValueError(f"Expected prefix {prefix.hex()}, got {data[:len(prefix)].hex()}")
    return data[len(prefix):]
