"""RSA signatures over the SHA3-256 digest, padded with OAEP."""

from __future__ import annotations

import hmac
import logging
import random
from dataclasses import dataclass

from rsasig import config
from rsasig.crypto.keccak import sha3_256
from rsasig.crypto.keys import RSAPrivate, RSAPublic
from rsasig.crypto.oaep import oaep_decode, oaep_encode
from rsasig.errors import OAEPDecodeError

log = logging.getLogger(__name__)

OPAQUE_REASON = "invalid signature"


def i2osp(x: int, length: int | None = None) -> bytes:
    """Big-endian bytes of ``x``; minimal length unless ``length`` is given."""
    if length is None:
        length = (x.bit_length() + 7) // 8
    return x.to_bytes(length, "big")


def os2ip(data: bytes) -> int:
    return int.from_bytes(data, "big")


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.valid


def _invalid(reason: str) -> VerificationResult:
    log.debug("signature rejected: %s", reason)
    return VerificationResult(False, OPAQUE_REASON if config.OPAQUE_FAILURES else reason)


def sign(priv: RSAPrivate, data: bytes, rng: random.Random | None = None) -> bytes:
    encoded = oaep_encode(sha3_256(data), priv.size_bytes, rng=rng)
    return i2osp(pow(os2ip(encoded), priv.d, priv.n))


def verify(pub: RSAPublic, data: bytes, sig: bytes) -> VerificationResult:
    s = os2ip(sig)
    if s >= pub.n:
        return _invalid("signature out of range")
    k = pub.size_bytes
    # exponentiation drops leading zero bytes; OAEP offsets need all k of them
    block = i2osp(pow(s, pub.e, pub.n), k)
    try:
        recovered = oaep_decode(block, k)
    except OAEPDecodeError as exc:
        return _invalid(exc.reason)
    if not hmac.compare_digest(recovered, sha3_256(data)):
        return _invalid("digest mismatch")
    return VerificationResult(True)


__all__ = ["VerificationResult", "sign", "verify", "i2osp", "os2ip", "OPAQUE_REASON"]
