"""Runtime constants, overridable through RSASIG_* environment variables."""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"environment variable {name} must be an integer, got {raw!r}") from exc


KEY_BITS = _env_int("RSASIG_KEY_BITS", 2048)
MILLER_RABIN_ROUNDS = _env_int("RSASIG_MR_ROUNDS", 40)
PUBLIC_EXPONENT = _env_int("RSASIG_PUBLIC_EXPONENT", 65537)

# caps on the prime search and on whole key-pair restarts
KEYGEN_MAX_ATTEMPTS = _env_int("RSASIG_KEYGEN_MAX_ATTEMPTS", 64)
PRIME_MAX_CANDIDATES = _env_int("RSASIG_PRIME_MAX_CANDIDATES", 100000)

# RSASIG_ALLOW_WEAK_RNG=1 permits the time-seeded generator when os.urandom is missing
ALLOW_WEAK_RNG = os.environ.get("RSASIG_ALLOW_WEAK_RNG", "0") != "0"

# RSASIG_OPAQUE_FAILURES=0 reports the specific reason a signature was rejected
OPAQUE_FAILURES = os.environ.get("RSASIG_OPAQUE_FAILURES", "1") != "0"

PUBLIC_KEY_FILE = "public_key.txt"
PRIVATE_KEY_FILE = "private_key.txt"
SIGNED_SUFFIX = ".signed"
