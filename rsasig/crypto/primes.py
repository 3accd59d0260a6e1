"""Miller–Rabin primality testing, prime generation and modular helpers."""

from __future__ import annotations

import logging
import random

from rsasig import config
from rsasig.crypto import entropy
from rsasig.errors import PrimeGenerationError

log = logging.getLogger(__name__)

_SMALL_PRIMES = [3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97]


def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return a


def modinv(a: int, n: int) -> int:
    """Modular inverse using extended Euclid."""
    t, new_t = 0, 1
    r, new_r = n, a % n
    while new_r:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r
    if r != 1:
        raise ValueError("a is not invertible")
    return t % n


def is_probable_prime(n: int, rounds: int | None = None, rng: random.Random | None = None) -> bool:
    """Probabilistic Miller–Rabin test with random witnesses in [2, n-1)."""
    if n == 2 or n == 3:
        return True
    if n <= 1 or n % 2 == 0:
        return False
    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False
    if rounds is None:
        rounds = config.MILLER_RABIN_ROUNDS
    rng = entropy.resolve(rng)

    # write n-1 as 2^r * d
    d = n - 1
    r = 0
    while d % 2 == 0:
        d //= 2
        r += 1

    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(
    bits: int,
    rng: random.Random | None = None,
    rounds: int | None = None,
    max_candidates: int | None = None,
) -> int:
    """Random probable prime of exactly ``bits`` bits (top and bottom bit forced)."""
    if bits < 2:
        raise ValueError("prime size must be at least 2 bits")
    if max_candidates is None:
        max_candidates = config.PRIME_MAX_CANDIDATES
    rng = entropy.resolve(rng)
    for tried in range(1, max_candidates + 1):
        candidate = rng.getrandbits(bits) | 1 | (1 << (bits - 1))
        if is_probable_prime(candidate, rounds, rng) and candidate.bit_length() == bits:
            log.debug("found %d-bit prime after %d candidates", bits, tried)
            return candidate
    raise PrimeGenerationError(f"no {bits}-bit prime within {max_candidates} candidates")


__all__ = ["gcd", "modinv", "is_probable_prime", "generate_prime"]
