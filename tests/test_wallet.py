import pytest

from vanity_gen import wallet
from vanity_gen.base58 import base58check_decode
from vanity_gen.curve import SECP256R1, is_on_curve
from vanity_gen.wallet import (
    derive_address,
    generate_wallet,
    keccak256,
    to_alternate_address,
    to_checksum_address,
    wallet_from_private_key,
)


def test_keccak256_empty():
    assert keccak256(b'').hex() == 'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'


def test_known_private_key_address():
    wallet = wallet_from_private_key('0x' + '0' * 63 + '1', 'secp256k1')
    assert wallet.address_hex == '7e5f4552091a69125d5dfcb7b8c2659029395bdf'
    assert to_checksum_address(wallet.address_hex) == '7E5F4552091A69125d5DfCb7b8C2659029395Bdf'


def test_generate_wallet_layout():
    wallet = generate_wallet()
    assert len(wallet.private_key) == 32
    assert len(wallet.public_key) == 65
    assert wallet.public_key[0] == 4
    assert len(wallet.address) == 20
    assert len(wallet.private_key_hex) == 64

    point = (int.from_bytes(wallet.public_key[1:33], 'big'), int.from_bytes(wallet.public_key[33:], 'big'))
    assert is_on_curve(point, SECP256R1)


def test_generated_wallet_matches_its_private_key():
    wallet = generate_wallet()
    assert wallet_from_private_key(wallet.private_key_hex) == wallet


def test_derive_address_is_deterministic():
    wallet = generate_wallet()
    assert derive_address(wallet.public_key) == derive_address(wallet.public_key) == wallet.address


def test_wallets_differ():
    assert generate_wallet().private_key != generate_wallet().private_key


def test_private_key_out_of_range():
    with pytest.raises(ValueError):
        wallet_from_private_key('0' * 64)
    with pytest.raises(ValueError):
        wallet_from_private_key(hex(SECP256R1.n))


@pytest.mark.parametrize('checksummed', [
    '5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed',
    'fB6916095ca1df60bB79Ce92cE3Ea74c37c5d359',
    'dbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB',
    'D1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb',
])
def test_checksum_casing(checksummed):
    assert to_checksum_address(checksummed.lower()) == checksummed
    # Recomputing from the already-cased address gives the same result.
    assert to_checksum_address(checksummed) == checksummed


@pytest.mark.parametrize('raw', [bytes(20), b'\xff' * 20, bytes(range(20))])
def test_alternate_address(raw):
    address = to_alternate_address(raw)
    assert address.startswith('1')
    assert len(address[4:]) == 33
    assert base58check_decode(address) == bytes.fromhex('41f8') + raw


def test_alternate_address_version_prefix():
    assert to_alternate_address(bytes(20)) != to_alternate_address(bytes(20), b'\x41\xf9')


def test_alternate_address_rejects_wrong_length():
    with pytest.raises(ValueError):
        to_alternate_address(bytes(19))


def test_private_key_rejects_point_off_the_curve(monkeypatch):
    monkeypatch.setattr(wallet, 'scalar_multiply', lambda k, point, curve: (1, 1))
    with pytest.raises(ValueError):
        wallet.wallet_from_private_key('0' * 63 + '1')
    # Random generation skips the check.
    assert len(wallet.generate_wallet().address) == 20
