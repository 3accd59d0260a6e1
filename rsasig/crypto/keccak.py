"""Keccak-f[1600] permutation and the SHA3-256 sponge, using numpy lanes.

The state is a 5x5 ``uint64`` matrix indexed ``[y, x]`` so that flattening it
gives the FIPS 202 lane order ``x + 5*y``.
"""

from __future__ import annotations

import numpy as np

RATE = 136  # bytes, 1088 bits
CAPACITY = 64
DIGEST_SIZE = 32
ROUNDS = 24

_RATE_LANES = RATE // 8

ROUND_CONSTANTS = np.array(
    [
        0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
        0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
        0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
        0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
        0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
        0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
    ],
    dtype=np.uint64,
)

# rho offsets, row y, column x
ROTATIONS = np.array(
    [
        [0, 1, 62, 28, 27],
        [36, 44, 6, 55, 20],
        [3, 10, 43, 25, 39],
        [41, 45, 15, 21, 8],
        [18, 2, 61, 56, 14],
    ],
    dtype=np.uint64,
)
# (64 - r) % 64 keeps the right shift below the lane width for r == 0
_ROTATIONS_RIGHT = (np.uint64(64) - ROTATIONS) % np.uint64(64)

# pi: lane (x, y) moves to (y, 2x + 3y); in [y, x] storage that is row (2x + 3y) % 5, column y
_Y, _X = np.indices((5, 5))
_PI_ROWS = (2 * _X + 3 * _Y) % 5
_PI_COLS = _Y

_ONE = np.uint64(1)
_SIXTY_THREE = np.uint64(63)


def _rotl(lanes: np.ndarray, left: np.ndarray, right: np.ndarray) -> np.ndarray:
    return (lanes << left) | (lanes >> right)


def keccak_f1600(state: np.ndarray) -> np.ndarray:
    """Apply the 24-round permutation to a 5x5 uint64 state; returns a new array."""
    a = np.array(state, dtype=np.uint64, copy=True).reshape(5, 5)
    for rc in ROUND_CONSTANTS:
        # theta
        c = np.bitwise_xor.reduce(a, axis=0)
        d = np.roll(c, 1) ^ _rotl(np.roll(c, -1), _ONE, _SIXTY_THREE)
        a ^= d[np.newaxis, :]
        # rho + pi
        b = np.empty_like(a)
        b[_PI_ROWS, _PI_COLS] = _rotl(a, ROTATIONS, _ROTATIONS_RIGHT)
        # chi
        a = b ^ (~np.roll(b, -1, axis=1) & np.roll(b, -2, axis=1))
        # iota
        a[0, 0] ^= rc
    return a


def _absorb_block(state: np.ndarray, block: bytes) -> np.ndarray:
    lanes = state.reshape(25).copy()
    lanes[:_RATE_LANES] ^= np.frombuffer(block, dtype="<u8").astype(np.uint64)
    return keccak_f1600(lanes.reshape(5, 5))


def _pad(tail: bytes) -> bytes:
    """SHA3 domain bits 01 plus pad10*1, filling ``tail`` to a full block."""
    padded = bytearray(tail)
    padded.append(0x06)
    padded.extend(b"\x00" * (RATE - len(padded)))
    padded[-1] |= 0x80
    return bytes(padded)


def _squeeze(state: np.ndarray) -> bytes:
    return state.reshape(25).astype("<u8").tobytes()[:DIGEST_SIZE]


class Sha3_256:
    """Incremental SHA3-256 with the hashlib calling convention."""

    name = "sha3_256"
    digest_size = DIGEST_SIZE
    block_size = RATE

    def __init__(self, data: bytes = b"") -> None:
        self._state = np.zeros((5, 5), dtype=np.uint64)
        self._buffer = b""
        if data:
            self.update(data)

    def update(self, data: bytes) -> None:
        buf = self._buffer + bytes(data)
        full = len(buf) - len(buf) % RATE
        for off in range(0, full, RATE):
            self._state = _absorb_block(self._state, buf[off : off + RATE])
        self._buffer = buf[full:]

    def digest(self) -> bytes:
        # finalize a copy so the running state can keep absorbing
        return _squeeze(_absorb_block(self._state, _pad(self._buffer)))

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "Sha3_256":
        other = Sha3_256()
        other._state = self._state.copy()
        other._buffer = self._buffer
        return other


def sha3_256(data: bytes) -> bytes:
    return Sha3_256(data).digest()


__all__ = ["Sha3_256", "sha3_256", "keccak_f1600", "RATE", "CAPACITY", "DIGEST_SIZE"]
