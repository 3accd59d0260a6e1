"""MGF1 and OAEP with SHA3-256 for both hashes and an empty label.

Encoded block layout (k bytes)::

    0x00 || maskedSeed (hLen) || maskedDB (k - hLen - 1)
    DB = lHash || 0x00 .. 0x00 || 0x01 || message
"""

from __future__ import annotations

import random

from rsasig.crypto import entropy
from rsasig.crypto.keccak import DIGEST_SIZE, sha3_256
from rsasig.errors import MessageTooLongError, ModulusTooSmallError, OAEPDecodeError

H_LEN = DIGEST_SIZE
L_HASH = sha3_256(b"")  # hash of the empty label


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def mgf1(seed: bytes, length: int) -> bytes:
    if length < 0 or length > (H_LEN << 32):
        raise ValueError("mask too long")
    out = bytearray()
    counter = 0
    while len(out) < length:
        out += sha3_256(seed + counter.to_bytes(4, "big"))
        counter += 1
    return bytes(out[:length])


def max_message_len(k: int) -> int:
    return k - 2 * H_LEN - 2


def oaep_encode(
    message: bytes,
    k: int,
    rng: random.Random | None = None,
    seed: bytes | None = None,
) -> bytes:
    if len(message) > max_message_len(k):
        raise MessageTooLongError(
            f"message too long: {len(message)} bytes, at most {max(0, max_message_len(k))} fit in {k}"
        )
    ps = b"\x00" * (k - len(message) - 2 * H_LEN - 2)
    db = L_HASH + ps + b"\x01" + message

    if seed is None:
        seed = entropy.resolve(rng).randbytes(H_LEN)
    elif len(seed) != H_LEN:
        raise ValueError(f"seed must be {H_LEN} bytes")

    masked_db = _xor(db, mgf1(seed, len(db)))
    masked_seed = _xor(seed, mgf1(masked_db, H_LEN))
    return b"\x00" + masked_seed + masked_db


def oaep_decode(block: bytes, k: int) -> bytes:
    if k < 2 * H_LEN + 2:
        raise ModulusTooSmallError(f"modulus too small for OAEP: {k} bytes")
    if len(block) != k:
        raise OAEPDecodeError("block length mismatch")
    if block[0] != 0:
        raise OAEPDecodeError("leading byte not zero")

    masked_seed = block[1 : 1 + H_LEN]
    masked_db = block[1 + H_LEN :]
    seed = _xor(masked_seed, mgf1(masked_db, H_LEN))
    db = _xor(masked_db, mgf1(seed, len(masked_db)))

    if db[:H_LEN] != L_HASH:
        raise OAEPDecodeError("label hash mismatch")
    idx = H_LEN
    while idx < len(db) and db[idx] == 0:
        idx += 1
    if idx == len(db) or db[idx] != 0x01:
        raise OAEPDecodeError("separator not found")
    return db[idx + 1 :]


__all__ = ["H_LEN", "L_HASH", "mgf1", "max_message_len", "oaep_encode", "oaep_decode"]
