import pytest

from vanity_gen.config import SearchConfig
from vanity_gen.search import Failure, Progress, SearchRequest, Success, get_vanity_wallet
from vanity_gen.wallet import (
    Wallet,
    derive_address,
    to_alternate_address,
    to_checksum_address,
    wallet_from_private_key,
)


MISS = bytes(20)
DEAD = bytes.fromhex('dead') + bytes(18)


def wallet_factory(addresses):
    """Returns a factory handing out wallets with the given raw addresses, in order."""
    remaining = iter(addresses)

    def factory(curve):
        address = next(remaining)
        return Wallet(private_key=b'\x01' * 32, public_key=b'\x04' + bytes(64), address=address)

    return factory


def run(request, addresses, config=None, should_stop=None):
    messages = []
    result = get_vanity_wallet(request, messages.append, config or SearchConfig(),
                               should_stop, wallet_factory(addresses))
    return result, messages


def test_request_from_dict():
    request = SearchRequest.from_dict({'pattern': 'Dead', 'caseSensitive': True, 'matchAtSuffix': True})
    assert request == SearchRequest(pattern='Dead', case_sensitive=True, use_alternate_format=False,
                                    match_at_suffix=True)


@pytest.mark.parametrize('data', [{}, {'pattern': None}, {'pattern': 12},
                                  {'pattern': 'dead', 'caseSensitive': 'false'},
                                  {'pattern': 'dead', 'useAlternateFormat': 1},
                                  {'pattern': 'dead', 'matchAtSuffix': None}])
def test_request_from_dict_rejects_malformed_fields(data):
    with pytest.raises(ValueError):
        SearchRequest.from_dict(data)


def test_message_dicts():
    assert Progress(500).to_dict() == {'attempts': 500}
    assert Success('0xab', 'cd', 3).to_dict() == {'address': '0xab', 'privateKey': 'cd', 'attempts': 3}
    assert Failure('boom').to_dict() == {'error': 'boom'}


def test_finds_prefix():
    result, messages = run(SearchRequest('dead'), [MISS, MISS, DEAD])
    assert messages == [result]
    assert result.address == '0x' + to_checksum_address(DEAD.hex())
    assert result.address.lower().startswith('0xdead')
    assert result.private_key == '01' * 32
    assert result.attempts == 3


def test_pattern_is_lowercased_when_not_case_sensitive():
    result, _ = run(SearchRequest('DEAD'), [MISS, DEAD])
    assert result is not None
    assert result.attempts == 2


def test_finds_suffix():
    tail = bytes(18) + bytes.fromhex('beef')
    result, _ = run(SearchRequest('beef', match_at_suffix=True), [DEAD, tail])
    assert result.address.lower().endswith('beef')


def test_case_sensitive_needs_checksum_casing():
    cased = to_checksum_address(DEAD.hex())[:4]
    wrong = cased.swapcase()

    result, _ = run(SearchRequest(cased, case_sensitive=True), [DEAD])
    assert result is not None

    messages = []
    get_vanity_wallet(SearchRequest(wrong, case_sensitive=True), messages.append, SearchConfig(batch_size=1),
                      lambda: len(messages) >= 3, wallet_factory([DEAD] * 3))
    assert messages == [Progress(1)] * 3


def test_progress_batches_and_counter_reset():
    addresses = [MISS] * 7 + [DEAD]
    result, messages = run(SearchRequest('dead'), addresses, SearchConfig(batch_size=3))
    assert messages == [Progress(3), Progress(3), result]
    assert result.attempts == 2


def test_match_on_batch_boundary_is_reported_as_success():
    result, messages = run(SearchRequest('dead'), [MISS, MISS, DEAD], SearchConfig(batch_size=3))
    assert messages == [result]
    assert result.attempts == 3


def test_empty_pattern_matches_first_wallet():
    messages = []
    result = get_vanity_wallet(SearchRequest(''), messages.append)
    assert messages == [result]
    assert result.attempts == 1
    assert result.address.startswith('0x')
    assert len(result.address) == 42
    assert len(result.private_key) == 64


def test_single_character_pattern_with_real_wallets():
    ticks = []

    def emit(message):
        ticks.append(message)

    result = get_vanity_wallet(SearchRequest('a'), emit, SearchConfig(batch_size=100),
                               should_stop=lambda: len(ticks) >= 20)
    assert isinstance(result, Success)
    assert result.address[2:].lower().startswith('a')


def test_real_wallets_reach_hex_prefix_match():
    progress = []

    def emit(message):
        if isinstance(message, Progress):
            progress.append(message)

    # 12,000 attempts leave a two-character prefix a negligible chance of being missed.
    result = get_vanity_wallet(SearchRequest('DE'), emit, SearchConfig(batch_size=500),
                               should_stop=lambda: len(progress) >= 24)
    assert isinstance(result, Success)
    assert result.address.lower().startswith('0xde')

    wallet = wallet_from_private_key(result.private_key)
    assert wallet.address == derive_address(wallet.public_key)
    assert result.address == '0x' + to_checksum_address(wallet.address_hex)


def test_overlong_pattern_never_matches():
    messages = []
    get_vanity_wallet(SearchRequest('a' * 41), messages.append, SearchConfig(batch_size=2),
                      should_stop=lambda: len(messages) >= 3)
    assert messages == [Progress(2)] * 3


def test_cancelled_before_first_attempt():
    def factory(curve):
        raise AssertionError("no wallet should be generated")

    messages = []
    result = get_vanity_wallet(SearchRequest('dead'), messages.append, should_stop=lambda: True,
                               wallet_factory=factory)
    assert result is None
    assert messages == []


def test_alternate_format():
    body = to_alternate_address(DEAD)[4:]
    result, messages = run(SearchRequest(body[:3], case_sensitive=True, use_alternate_format=True), [DEAD])
    assert messages == [result]
    assert result.address == 'NEW' + to_alternate_address(DEAD)


def test_alternate_format_suffix_case_insensitive():
    body = to_alternate_address(DEAD)[4:]
    request = SearchRequest(body[-3:].swapcase(), use_alternate_format=True, match_at_suffix=True)
    result, _ = run(request, [DEAD])
    assert result is not None
    assert result.address.lower().endswith(body[-3:].lower())


def test_wallet_errors_propagate():
    def factory(curve):
        raise RuntimeError("entropy source failure")

    with pytest.raises(RuntimeError):
        get_vanity_wallet(SearchRequest('dead'), lambda message: None, wallet_factory=factory)


def test_factory_receives_configured_curve():
    curves = []

    def factory(curve):
        curves.append(curve)
        return Wallet(b'\x01' * 32, b'\x04' + bytes(64), DEAD)

    get_vanity_wallet(SearchRequest('dead'), lambda message: None, SearchConfig(curve='secp256k1'),
                      wallet_factory=factory)
    assert curves == ['secp256k1']
