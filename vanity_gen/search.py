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

import logging

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from vanity_gen.config import (
    ALTERNATE_DISPLAY_TAG,
    ALTERNATE_STRIP_LENGTH,
    DEFAULT_CONFIG,
    HEX_DISPLAY_PREFIX,
    SearchConfig,
)
from vanity_gen.matcher import is_valid_alternate_address, is_valid_vanity_address
from vanity_gen.wallet import Wallet, generate_wallet, to_alternate_address, to_checksum_address


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    pattern: str
    case_sensitive: bool = False
    use_alternate_format: bool = False
    match_at_suffix: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchRequest':
        """
        Builds a request from its message form:
        {"pattern", "caseSensitive", "useAlternateFormat", "matchAtSuffix"}.
        """
        pattern = data.get('pattern')
        if not isinstance(pattern, str):
            raise ValueError("Search request requires a 'pattern' string")
        flags = {}
        for key in ('caseSensitive', 'useAlternateFormat', 'matchAtSuffix'):
            flags[key] = data.get(key, False)
            if not isinstance(flags[key], bool):
                raise ValueError(f"Search request field '{key}' must be a boolean, got {flags[key]!r}")
        return cls(
            pattern=pattern,
            case_sensitive=flags['caseSensitive'],
            use_alternate_format=flags['useAlternateFormat'],
            match_at_suffix=flags['matchAtSuffix'],
        )


@dataclass(frozen=True)
class Progress:
    attempts: int

    def to_dict(self) -> Dict[str, Any]:
        return {'attempts': self.attempts}


@dataclass(frozen=True)
class Success:
    address: str
    private_key: str
    attempts: int

    def to_dict(self) -> Dict[str, Any]:
        return {'address': self.address, 'privateKey': self.private_key, 'attempts': self.attempts}


@dataclass(frozen=True)
class Failure:
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.error}


Message = Union[Progress, Success, Failure]


def _match(wallet: Wallet, request: SearchRequest, pattern: str, config: SearchConfig) -> Optional[str]:
    """Returns the display address of 'wallet' if it matches, None otherwise."""
    if request.use_alternate_format:
        address = to_alternate_address(wallet.address, config.version_prefix)
        body = address[ALTERNATE_STRIP_LENGTH:]
        if is_valid_alternate_address(body, pattern, request.case_sensitive, request.match_at_suffix,
                                      config.alternate_body_length):
            return ALTERNATE_DISPLAY_TAG + address
        return None

    address = wallet.address_hex
    if is_valid_vanity_address(address, pattern, request.case_sensitive, request.match_at_suffix):
        return HEX_DISPLAY_PREFIX + to_checksum_address(address)
    return None


def get_vanity_wallet(
    request: SearchRequest,
    emit: Callable[[Message], None],
    config: SearchConfig = DEFAULT_CONFIG,
    should_stop: Optional[Callable[[], bool]] = None,
    wallet_factory: Optional[Callable[[str], Wallet]] = None,
) -> Optional[Success]:
    """
    Generates wallets until one satisfies the request.

    A Progress message is emitted every 'config.batch_size' attempts, after which the
    attempt counter starts over. The matching wallet is emitted once as a Success
    carrying the attempts made since the last Progress, the matching one included.

    Args:
    request (SearchRequest): The pattern and matching options.
    emit (callable): Receives every outbound message. Must not block.
    config (SearchConfig): Batch size, curve and alternate-format parameters.
    should_stop (callable): Checked between attempts; a true result ends the search without a result.
    wallet_factory (callable): Creates a wallet for a curve name. Defaults to generate_wallet.

    Returns:
    Success or None: The emitted result, or None if the search was cancelled.
    """
    wallet_factory = wallet_factory or generate_wallet
    pattern = request.pattern if request.case_sensitive else request.pattern.lower()
    logger.debug("Searching for %s '%s' (case sensitive: %s, alternate format: %s)",
                 'suffix' if request.match_at_suffix else 'prefix', pattern,
                 request.case_sensitive, request.use_alternate_format)

    attempts = 0
    while should_stop is None or not should_stop():
        wallet = wallet_factory(config.curve)
        attempts += 1

        address = _match(wallet, request, pattern, config)
        if address is not None:
            result = Success(address=address, private_key=wallet.private_key_hex, attempts=attempts)
            emit(result)
            return result

        if attempts >= config.batch_size:
            emit(Progress(attempts=attempts))
            attempts = 0

    logger.debug("Search for '%s' cancelled", pattern)
    return None
