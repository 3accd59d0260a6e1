"""Standard-alphabet Base64 with strict decoding for the signed container."""

from __future__ import annotations

import base64
import binascii

from rsasig.errors import ContainerFormatError


def b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def b64decode(text: str) -> bytes:
    """Decode padded Base64. Length must be a multiple of 4; at most two '='."""
    if len(text) % 4 != 0:
        raise ContainerFormatError(f"Base64 length {len(text)} is not a multiple of 4")
    stripped = text.rstrip("=")
    if len(text) - len(stripped) > 2 or "=" in stripped:
        raise ContainerFormatError("misplaced Base64 padding")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ContainerFormatError(f"invalid Base64: {exc}") from exc


__all__ = ["b64encode", "b64decode"]
