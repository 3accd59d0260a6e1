"""Exception hierarchy shared by the crypto and protocol layers."""

from __future__ import annotations


class RsaSigError(ValueError):
    """Base class for every error raised by rsasig."""


class FormatError(RsaSigError):
    pass


class KeyFormatError(FormatError):
    """A key file does not hold two hexadecimal lines."""


class ContainerFormatError(FormatError):
    """Signed container is missing markers, out of order, or not Base64."""


class CryptoConstraintError(RsaSigError):
    pass


class MessageTooLongError(CryptoConstraintError):
    pass


class ModulusTooSmallError(CryptoConstraintError):
    pass


class OAEPDecodeError(RsaSigError):
    """Encoded block failed OAEP validation.

    ``reason`` names the failed check. Callers that answer untrusted parties
    should not forward it.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class PrimeGenerationError(RsaSigError):
    pass


class KeyGenerationError(RsaSigError):
    pass


class EntropyUnavailableError(RsaSigError):
    pass


__all__ = [
    "RsaSigError",
    "FormatError",
    "KeyFormatError",
    "ContainerFormatError",
    "CryptoConstraintError",
    "MessageTooLongError",
    "ModulusTooSmallError",
    "OAEPDecodeError",
    "PrimeGenerationError",
    "KeyGenerationError",
    "EntropyUnavailableError",
]
