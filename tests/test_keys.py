from __future__ import annotations

import random

import pytest

from rsasig import config
from rsasig.crypto import keys
from rsasig.crypto.keys import RSAPrivate, RSAPublic, generate_keypair
from rsasig.crypto.primes import gcd
from rsasig.errors import KeyFormatError, KeyGenerationError


def test_keypair_invariants(keypair):
    assert keypair.p != keypair.q
    assert keypair.p.bit_length() == keypair.q.bit_length() == 512
    assert keypair.n == keypair.p * keypair.q
    assert keypair.e == 65537
    assert gcd(keypair.e, keypair.phi) == 1
    assert (keypair.e * keypair.d) % keypair.phi == 1


def test_public_and_private_share_modulus(keypair):
    assert keypair.public == RSAPublic(n=keypair.n, e=keypair.e)
    assert keypair.private == RSAPrivate(n=keypair.n, d=keypair.d)


def test_rsa_identity_on_small_modulus():
    pair = generate_keypair(64, rng=random.Random(7))
    for m in [0, 1, 2, 12345, pair.n // 3, pair.n - 1]:
        assert pow(pow(m, pair.e, pair.n), pair.d, pair.n) == m


def test_default_size_comes_from_config(monkeypatch):
    monkeypatch.setattr(config, "KEY_BITS", 64)
    pair = generate_keypair(rng=random.Random(3))
    assert pair.n.bit_length() <= 64
    assert pair.p.bit_length() == 32


def test_key_size_too_small():
    with pytest.raises(ValueError):
        generate_keypair(16)


def test_bounded_restart_when_exponent_never_fits():
    # phi is always even, so e = 2 never has an inverse
    with pytest.raises(KeyGenerationError):
        generate_keypair(32, e=2, rng=random.Random(1), max_attempts=3)


def test_equal_primes_count_against_attempts(monkeypatch):
    calls = []

    def same_prime(bits, rng):
        calls.append(bits)
        return 65521

    monkeypatch.setattr(keys, "generate_prime", same_prime)
    with pytest.raises(KeyGenerationError):
        generate_keypair(32, rng=random.Random(1), max_attempts=4)
    assert len(calls) == 8


def test_key_text_format(keypair):
    n_line, e_line = keypair.public.to_text().split("\n")
    assert n_line == format(keypair.n, "x")
    assert e_line == "10001"
    assert keypair.private.to_text().split("\n")[1] == format(keypair.d, "x")


def test_key_text_round_trip(keypair):
    assert RSAPublic.from_text(keypair.public.to_text()) == keypair.public
    assert RSAPrivate.from_text(keypair.private.to_text()) == keypair.private


def test_key_text_tolerates_whitespace_and_case():
    assert RSAPublic.from_text("  C5\n10001\n\n") == RSAPublic(n=0xC5, e=0x10001)


@pytest.mark.parametrize("text", ["", "abc", "a\nb\nc", "0xff\n10001", "zz\n10001", "ff\n-1"])
def test_malformed_key_text(text):
    with pytest.raises(KeyFormatError):
        RSAPublic.from_text(text)


def test_key_format_error_is_value_error():
    with pytest.raises(ValueError):
        RSAPrivate.from_text("nothex\nff")


def test_private_repr_hides_exponent(keypair):
    assert "d=" not in repr(keypair.private)
    assert "p=" not in repr(keypair)
