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

from vanity_gen.curve import CURVES


# Number of attempts between two progress notifications.
BATCH_SIZE = 500

# OpenSSL name of the curve used to generate keypairs.
CURVE = 'prime256v1'

# Two-byte network marker prepended to raw addresses in the alternate format.
VERSION_PREFIX = bytes.fromhex('41f8')

# Leading byte of every Base58Check payload.
BASE58CHECK_PREFIX = b'\x00'

# Length of the alternate-format body once the leading characters are stripped.
ALTERNATE_BODY_LENGTH = 33

# Leading characters of the alternate-format text that are never matched against.
ALTERNATE_STRIP_LENGTH = 4

ADDRESS_BYTES = 20
HEX_ADDRESS_LENGTH = ADDRESS_BYTES * 2

HEX_DISPLAY_PREFIX = '0x'
ALTERNATE_DISPLAY_TAG = 'NEW'


@dataclass(frozen=True)
class SearchConfig:
    """
    Tunable parameters of a vanity search.

    Attributes:
    batch_size (int): Attempts between two progress notifications.
    curve (str): Name of the elliptic curve used for keypair generation.
    version_prefix (bytes): Two-byte marker for alternate-format addresses.
    alternate_body_length (int): Expected length of the matchable alternate-format body.
    """
    batch_size: int = BATCH_SIZE
    curve: str = CURVE
    version_prefix: bytes = VERSION_PREFIX
    alternate_body_length: int = ALTERNATE_BODY_LENGTH

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.curve not in CURVES:
            raise ValueError(f"Unknown curve '{self.curve}'. Expected one of: {', '.join(sorted(CURVES))}")
        if not isinstance(self.version_prefix, bytes) or len(self.version_prefix) != 2:
            raise ValueError("version_prefix must be exactly 2 bytes")
        if self.alternate_body_length < 1:
            raise ValueError(f"alternate_body_length must be positive, got {self.alternate_body_length}")


DEFAULT_CONFIG = SearchConfig()
