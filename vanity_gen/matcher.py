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

from vanity_gen.config import ALTERNATE_BODY_LENGTH, HEX_ADDRESS_LENGTH
from vanity_gen.wallet import keccak256


def _edge(address: str, length: int, total: int, is_suffix: bool) -> str:
    # Over-long patterns yield the whole address, which can never equal them.
    return address[max(total - length, 0):] if is_suffix else address[:length]


def is_valid_vanity_address(address: str, pattern: str, case_sensitive: bool, is_suffix: bool) -> bool:
    """
    Checks a lowercase hex address against the requested pattern.

    Args:
    address (str): 40-character lowercase hex address.
    pattern (str): The pattern, compared in lowercase when not case-sensitive.
    case_sensitive (bool): Whether the pattern must follow checksum casing.
    is_suffix (bool): Match the end of the address instead of the start.

    Returns:
    bool: True if the address satisfies the pattern.
    """
    sub_str = _edge(address, len(pattern), HEX_ADDRESS_LENGTH, is_suffix)

    if not case_sensitive:
        return pattern.lower() == sub_str
    if pattern.lower() != sub_str:
        return False

    return is_valid_checksum(address, pattern, is_suffix)


def is_valid_checksum(address: str, pattern: str, is_suffix: bool) -> bool:
    """
    Checks that every pattern character has the checksum casing of the address character it covers.
    """
    digest = keccak256(address.encode('ascii')).hex()
    shift = HEX_ADDRESS_LENGTH - len(pattern) if is_suffix else 0

    for i, char in enumerate(pattern):
        j = i + shift
        expected = address[j].upper() if int(digest[j], 16) >= 8 else address[j]
        if char != expected:
            return False
    return True


def is_valid_alternate_address(body: str, pattern: str, case_sensitive: bool, is_suffix: bool,
                               body_length: int = ALTERNATE_BODY_LENGTH) -> bool:
    """
    Checks the body of an alternate-format address against the requested pattern.

    Base58 has no casing convention, so case-sensitive matching is plain equality.
    """
    sub_str = _edge(body, len(pattern), body_length, is_suffix)

    if case_sensitive:
        return pattern == sub_str
    return pattern.lower() == sub_str.lower()
