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

from vanity_gen.base58 import b58decode, b58encode, base58check_decode, base58check_encode
from vanity_gen.config import DEFAULT_CONFIG, SearchConfig
from vanity_gen.matcher import is_valid_alternate_address, is_valid_checksum, is_valid_vanity_address
from vanity_gen.search import Failure, Progress, SearchRequest, Success, get_vanity_wallet
from vanity_gen.wallet import (
    Wallet,
    derive_address,
    generate_wallet,
    to_alternate_address,
    to_checksum_address,
    wallet_from_private_key,
)
from vanity_gen.worker import ParallelSearch, SearchError, handle_message

__version__ = '1.0.0'
