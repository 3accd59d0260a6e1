"""Randomness for witnesses, prime candidates and OAEP seeds.

Callers pass any ``random.Random``-compatible object as ``rng``; tests inject
``random.Random(seed)``. Without one, :func:`default_rng` hands out an
OS-backed generator.
"""

from __future__ import annotations

import logging
import os
import random
import time

from rsasig import config
from rsasig.errors import EntropyUnavailableError

log = logging.getLogger(__name__)


def default_rng() -> random.Random:
    try:
        os.urandom(1)
    except NotImplementedError as exc:
        if not config.ALLOW_WEAK_RNG:
            raise EntropyUnavailableError(
                "no OS entropy source; set RSASIG_ALLOW_WEAK_RNG=1 to accept a time-seeded generator"
            ) from exc
        log.warning("os.urandom unavailable, falling back to a time-seeded generator")
        return random.Random(time.time_ns())
    return random.SystemRandom()


def resolve(rng: random.Random | None) -> random.Random:
    return default_rng() if rng is None else rng


__all__ = ["default_rng", "resolve"]
