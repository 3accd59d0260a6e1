"""Text container carrying a Base64 message and its Base64 signature."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rsasig.crypto.base64codec import b64decode, b64encode
from rsasig.errors import ContainerFormatError

BEGIN_MESSAGE = "-----BEGIN SIGNED MESSAGE-----"
BEGIN_SIGNATURE = "-----BEGIN SIGNATURE-----"
END_SIGNATURE = "-----END SIGNATURE-----"

_MARKERS = (BEGIN_MESSAGE, BEGIN_SIGNATURE, END_SIGNATURE)


@dataclass(frozen=True)
class SignedContainer:
    message: bytes
    signature: Optional[bytes] = None

    def to_text(self) -> str:
        if self.signature is None:
            raise ContainerFormatError("container has no signature to render")
        return "\n".join(
            [
                BEGIN_MESSAGE,
                b64encode(self.message),
                BEGIN_SIGNATURE,
                b64encode(self.signature),
                END_SIGNATURE,
                "",
            ]
        )

    @classmethod
    def parse(cls, text: str, require_signature: bool = True) -> "SignedContainer":
        """Read the sections in order.

        With ``require_signature=False`` parsing stops at the signature marker,
        so only the message section has to be present and well formed.
        """
        sections: List[List[str]] = []
        expected = 0
        for raw in text.splitlines():
            line = raw.strip()
            if line in _MARKERS:
                if _MARKERS.index(line) != expected:
                    raise ContainerFormatError(f"marker {line!r} out of order")
                expected += 1
                if expected == 2 and not require_signature:
                    break
                if expected == 3:
                    break
                sections.append([])
            elif expected and line:
                sections[-1].append(line)

        if expected == 0:
            raise ContainerFormatError(f"missing {BEGIN_MESSAGE}")
        message = b64decode("".join(sections[0]))
        if not require_signature:
            return cls(message=message)
        if expected < 3:
            raise ContainerFormatError(f"missing {_MARKERS[expected]}")
        sig_b64 = "".join(sections[1])
        if not sig_b64:
            raise ContainerFormatError("empty signature section")
        return cls(message=message, signature=b64decode(sig_b64))


__all__ = ["SignedContainer", "BEGIN_MESSAGE", "BEGIN_SIGNATURE", "END_SIGNATURE"]
