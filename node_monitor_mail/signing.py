from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass, field

from .errors import InvalidHexEncoding


@dataclass(frozen=True)
class SigningKey:
    """HMAC-SHA256 key material shared read-only by everything that signs links."""

    material: bytes = field(repr=False)

    def sign(self, message: str | bytes) -> str:
        return hmac.new(self.material, _as_bytes(message), hashlib.sha256).hexdigest()

    def verify(self, message: str | bytes, signature: str) -> bool:
        if not signature.isascii():
            return False
        return hmac.compare_digest(self.sign(message), signature.lower())


def decode(hex_string: str) -> SigningKey:
    """Decode a hex-encoded secret into a signing key.

    Any length is accepted; HMAC hashes or pads the key itself.
    """
    # bytes.fromhex skips whitespace between byte pairs
    if any(ch.isspace() for ch in hex_string):
        raise InvalidHexEncoding("Signing key must not contain whitespace")
    try:
        material = bytes.fromhex(hex_string)
    except ValueError as exc:
        raise InvalidHexEncoding(f"Signing key is not valid hex: {exc}") from exc
    return SigningKey(material)


def encode(key: SigningKey) -> str:
    return key.material.hex()


def _as_bytes(message: str | bytes) -> bytes:
    if isinstance(message, bytes):
        return message
    return message.encode("utf-8")
