"""Operations offered to front ends: keygen, sign, verify, extract."""

from __future__ import annotations

import logging
import random
from typing import Tuple

from rsasig import config
from rsasig.crypto import signature as rsa
from rsasig.crypto.keys import RSAPrivate, RSAPublic, generate_keypair
from rsasig.crypto.signature import VerificationResult
from rsasig.protocol.container import SignedContainer

log = logging.getLogger(__name__)


def generate_key_pair(bits: int | None = None, rng: random.Random | None = None) -> Tuple[RSAPublic, RSAPrivate]:
    bits = config.KEY_BITS if bits is None else bits
    log.info("generating %d-bit RSA key pair (Miller-Rabin rounds: %d)", bits, config.MILLER_RABIN_ROUNDS)
    pair = generate_keypair(bits, rng=rng)
    return pair.public, pair.private


def sign_file(data: bytes, private_key: RSAPrivate, rng: random.Random | None = None) -> str:
    sig = rsa.sign(private_key, data, rng=rng)
    return SignedContainer(message=data, signature=sig).to_text()


def verify_container(text: str, public_key: RSAPublic) -> VerificationResult:
    """Raises ContainerFormatError for a malformed container; a bad signature is a result."""
    container = SignedContainer.parse(text)
    return rsa.verify(public_key, container.message, container.signature)


def extract_message(text: str) -> bytes:
    return SignedContainer.parse(text, require_signature=False).message


__all__ = ["generate_key_pair", "sign_file", "verify_container", "extract_message"]
