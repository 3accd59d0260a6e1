"""File-level wrappers around the service operations.

Every write goes to a temporary file in the target directory and is moved
into place with ``os.replace``, so an interrupted write leaves the old file
(or nothing) instead of a truncated one.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Tuple

from rsasig import config
from rsasig.crypto.keys import RSAPrivate, RSAPublic
from rsasig.crypto.signature import VerificationResult
from rsasig.errors import ContainerFormatError, KeyFormatError
from rsasig.protocol import service


def write_atomic(path: str | Path, data: bytes) -> Path:
    path = Path(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    return path


def save_keypair(
    pub: RSAPublic,
    priv: RSAPrivate,
    public_path: str | Path = config.PUBLIC_KEY_FILE,
    private_path: str | Path = config.PRIVATE_KEY_FILE,
) -> Tuple[Path, Path]:
    return (
        write_atomic(public_path, pub.to_text().encode("ascii")),
        write_atomic(private_path, priv.to_text().encode("ascii")),
    )


def _read_key_text(path: str | Path) -> str:
    try:
        return Path(path).read_bytes().decode("ascii")
    except UnicodeDecodeError as exc:
        raise KeyFormatError(f"key file {path} is not plain ASCII hex") from exc


def _read_container_text(path: str | Path) -> str:
    # any preamble before the first marker may be UTF-8 text; the sections themselves are Base64
    try:
        return Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ContainerFormatError(f"signed file {path} is not UTF-8 text") from exc


def load_public_key(path: str | Path) -> RSAPublic:
    return RSAPublic.from_text(_read_key_text(path))


def load_private_key(path: str | Path) -> RSAPrivate:
    return RSAPrivate.from_text(_read_key_text(path))


def signed_path_for(path: str | Path) -> Path:
    path = Path(path)
    return path.with_name(path.name + config.SIGNED_SUFFIX)


def sign_path(path: str | Path, private_key_path: str | Path) -> Path:
    """Sign ``path`` and write the container next to it as ``<path>.signed``."""
    data = Path(path).read_bytes()
    priv = load_private_key(private_key_path)
    text = service.sign_file(data, priv)
    return write_atomic(signed_path_for(path), text.encode("ascii"))


def verify_path(signed_path: str | Path, public_key_path: str | Path) -> VerificationResult:
    pub = load_public_key(public_key_path)
    return service.verify_container(_read_container_text(signed_path), pub)


def extract_path(signed_path: str | Path, output_path: str | Path | None = None) -> bytes:
    message = service.extract_message(_read_container_text(signed_path))
    if output_path is not None:
        write_atomic(output_path, message)
    return message


__all__ = [
    "write_atomic",
    "save_keypair",
    "load_public_key",
    "load_private_key",
    "signed_path_for",
    "sign_path",
    "verify_path",
    "extract_path",
]
