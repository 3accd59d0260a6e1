"""RSA key records, key generation and the two-line hex key-file format."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Tuple

from rsasig import config
from rsasig.crypto import entropy
from rsasig.crypto.primes import gcd, generate_prime, modinv
from rsasig.errors import KeyFormatError, KeyGenerationError

log = logging.getLogger(__name__)

_HEX = re.compile(r"[0-9a-fA-F]+")


def _parse_two_hex_lines(text: str, what: str) -> Tuple[int, int]:
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if len(lines) != 2:
        raise KeyFormatError(f"{what} key must have exactly two lines, got {len(lines)}")
    if not all(_HEX.fullmatch(line) for line in lines):
        raise KeyFormatError(f"{what} key holds a non-hexadecimal field")
    return int(lines[0], 16), int(lines[1], 16)


@dataclass(frozen=True)
class RSAPublic:
    n: int
    e: int

    @property
    def size_bytes(self) -> int:
        return (self.n.bit_length() + 7) // 8

    def to_text(self) -> str:
        return f"{self.n:x}\n{self.e:x}"

    @classmethod
    def from_text(cls, text: str) -> "RSAPublic":
        n, e = _parse_two_hex_lines(text, "public")
        return cls(n=n, e=e)


@dataclass(frozen=True)
class RSAPrivate:
    n: int
    d: int = field(repr=False)

    @property
    def size_bytes(self) -> int:
        return (self.n.bit_length() + 7) // 8

    def to_text(self) -> str:
        return f"{self.n:x}\n{self.d:x}"

    @classmethod
    def from_text(cls, text: str) -> "RSAPrivate":
        n, d = _parse_two_hex_lines(text, "private")
        return cls(n=n, d=d)


@dataclass(frozen=True)
class KeyPair:
    n: int
    e: int
    d: int = field(repr=False)
    # kept in memory only; key files carry (n, e) and (n, d)
    p: int = field(repr=False)
    q: int = field(repr=False)

    @property
    def public(self) -> RSAPublic:
        return RSAPublic(n=self.n, e=self.e)

    @property
    def private(self) -> RSAPrivate:
        return RSAPrivate(n=self.n, d=self.d)

    @property
    def phi(self) -> int:
        return (self.p - 1) * (self.q - 1)


def generate_keypair(
    bits: int | None = None,
    e: int | None = None,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
) -> KeyPair:
    """Generate n = p*q with p != q of bits // 2 each and d = e^-1 mod phi.

    A pair whose phi shares a factor with ``e`` is thrown away and the whole
    generation restarts, at most ``max_attempts`` times.
    """
    bits = config.KEY_BITS if bits is None else bits
    e = config.PUBLIC_EXPONENT if e is None else e
    if max_attempts is None:
        max_attempts = config.KEYGEN_MAX_ATTEMPTS
    if bits < 32:
        raise ValueError("RSA key size too small")
    rng = entropy.resolve(rng)
    half = bits // 2

    for attempt in range(1, max_attempts + 1):
        p = generate_prime(half, rng)
        q = generate_prime(half, rng)
        if q == p:
            log.info("attempt %d: q equals p, restarting", attempt)
            continue
        n = p * q
        phi = (p - 1) * (q - 1)
        if gcd(e, phi) != 1:
            log.info("attempt %d: e and phi are not coprime, restarting", attempt)
            continue
        try:
            d = modinv(e, phi)
        except ValueError:
            log.info("attempt %d: e has no inverse mod phi, restarting", attempt)
            continue
        return KeyPair(n=n, e=e, d=d, p=p, q=q)
    raise KeyGenerationError(f"no usable {bits}-bit key pair after {max_attempts} attempts")


__all__ = ["RSAPublic", "RSAPrivate", "KeyPair", "generate_keypair"]
