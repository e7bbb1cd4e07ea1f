import math

import pytest

from vanity_gen.stats import (
    attempts_for_probability,
    compute_difficulty,
    format_time,
    probability,
    vanity_generation_stats,
)


@pytest.mark.parametrize('pattern, case_sensitive, expected', [
    ('', False, 1),
    ('dead', False, 16 ** 4),
    ('DeAd', True, 16 ** 4 * 2 ** 4),
    ('12', True, 16 ** 2),
    ('a1', True, 16 ** 2 * 2),
])
def test_hex_difficulty(pattern, case_sensitive, expected):
    assert compute_difficulty(pattern, case_sensitive, False) == expected


def test_alternate_difficulty():
    assert compute_difficulty('ab', True, True) == 58 ** 2
    # Both 'a' and 'A' are Base58 characters.
    assert compute_difficulty('a', False, True) == 29
    # 'L' has no lowercase counterpart in the alphabet.
    assert compute_difficulty('L', False, True) == 58


def test_probability():
    assert probability(16, 0) == 0
    assert probability(1, 0) == 1
    assert math.isclose(probability(2, 1), 0.5)
    assert 0 < probability(16 ** 4, 1000) < 1


def test_attempts_for_probability():
    assert math.isclose(attempts_for_probability(2), 1)
    assert math.isclose(probability(256, attempts_for_probability(256)), 0.5)
    assert attempts_for_probability(1) == 1
    assert attempts_for_probability(58.0 ** 40) > 0


def test_format_time():
    assert format_time(90, 2) == '1 minute and 30 seconds'
    assert format_time(float('inf'), 2) == '∞'


def test_generation_stats():
    stats = vanity_generation_stats('dead', False, False, 0)
    assert stats['expected_attempts'] == 16 ** 4
    assert stats['probability'] == 0
    assert stats['expected_time_seconds'] > 0
    assert isinstance(stats['expected_time_readable'], str)


def test_generation_stats_after_expected_attempts():
    stats = vanity_generation_stats('a', False, False, 10, attempts=1000)
    assert stats['expected_time_seconds'] == 0
    assert stats['probability'] > 0.99
