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

import math

from humanfriendly import format_timespan

from vanity_gen.base58 import b58_chars


def compute_difficulty(pattern: str, case_sensitive: bool, use_alternate_format: bool) -> float:
    """
    Calculates the expected number of attempts needed to match a pattern.

    Args:
    pattern (str): The vanity pattern.
    case_sensitive (bool): Whether the match respects case.
    use_alternate_format (bool): Whether the pattern targets the Base58Check form.

    Returns:
    float: The inverse of the probability that a random address matches.
    """
    if use_alternate_format:
        difficulty = 1.0
        for char in pattern:
            if case_sensitive:
                choices = 1
            else:
                # Both cases of a letter match when case is ignored.
                choices = sum(1 for c in b58_chars if c.lower() == char.lower()) or 1
            difficulty *= len(b58_chars) / choices
        return difficulty

    difficulty = 16.0 ** len(pattern)
    if case_sensitive:
        # Every letter has a one in two chance of carrying the requested case.
        difficulty *= 2 ** sum(1 for char in pattern if char.isalpha())
    return difficulty


def probability(difficulty: float, attempts: int) -> float:
    """Probability of having found a match after 'attempts' attempts."""
    return -math.expm1(attempts * math.log1p(-1 / difficulty)) if difficulty > 1 else 1.0


def attempts_for_probability(difficulty: float, target: float = 0.5) -> float:
    """Number of attempts needed to reach 'target' probability of a match."""
    if difficulty <= 1:
        return 1
    return math.log1p(-target) / math.log1p(-1 / difficulty)


def vanity_generation_stats(pattern: str, case_sensitive: bool, use_alternate_format: bool,
                            addresses_per_second: int, attempts: int = 0) -> dict:
    """
    Calculates the statistics shown while generating a vanity address.

    Args:
    pattern (str): The vanity pattern the generation is aiming to match.
    case_sensitive (bool): Whether the match respects case.
    use_alternate_format (bool): Whether the pattern targets the Base58Check form.
    addresses_per_second (int): The rate at which addresses are being generated per second.
    attempts (int): The number of addresses generated so far.

    Returns:
    dict: The expected number of attempts, the probability of a match so far,
          and the estimated time in seconds and in readable form for a 50% chance of a match.
    """
    expected_attempts = compute_difficulty(pattern, case_sensitive, use_alternate_format)

    # Guard against zero to prevent division error.
    if addresses_per_second == 0:
        addresses_per_second = 1

    remaining = max(attempts_for_probability(expected_attempts) - attempts, 0)
    expected_time_seconds = remaining / addresses_per_second

    return {
        "expected_attempts": expected_attempts,
        "probability": probability(expected_attempts, attempts),
        "expected_time_seconds": expected_time_seconds,
        "expected_time_readable": format_time(expected_time_seconds, 2),
    }


def format_time(seconds, units):
    try:
        result = format_timespan(seconds, max_units=units)
    except (ArithmeticError, ValueError):
        result = "∞"
    return result
