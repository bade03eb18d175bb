"""Built-in coders: byte payload <-> serialized string.

Each coder has two decode paths:

- ``decode``: untrusted input. Validates format and payload length and
  raises :class:`DecodeError` on anything else.
- ``decode_trusted``: input known to be well formed (e.g. read back from
  our own storage). Does the minimum work; malformed input is a caller
  bug and fails however the underlying conversion fails.

``encode`` checks the payload length; ``encode_trusted`` does not.
All coders are stateless.
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from abc import ABC, abstractmethod

from .errors import DecodeError, EncodeError
from .ids import PAYLOAD_SIZE


class _BaseCoder(ABC):
    name = ""

    def __init__(self, size: int = PAYLOAD_SIZE) -> None:
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def encode(self, payload: bytes) -> str:
        if len(payload) != self._size:
            raise EncodeError(
                f"{self.name} coder expects {self._size} bytes, got {len(payload)}"
            )
        return self.encode_trusted(payload)

    @abstractmethod
    def encode_trusted(self, payload: bytes) -> str:
        """Encode without checking the payload."""
        ...

    @abstractmethod
    def decode(self, value: str) -> bytes:
        """Validate and decode untrusted input, raising DecodeError."""
        ...

    @abstractmethod
    def decode_trusted(self, value: str) -> bytes:
        """Decode input already known to be well formed."""
        ...

    def _check_size(self, value: str, payload: bytes) -> bytes:
        if len(payload) != self._size:
            raise DecodeError(
                self.name, value, f"expected {self._size} bytes, got {len(payload)}"
            )
        return payload


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


class HexCoder(_BaseCoder):
    """Lowercase hex, two characters per byte, no separators."""

    name = "hex"

    def encode_trusted(self, payload: bytes) -> str:
        return payload.hex()

    def decode(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise DecodeError(self.name, repr(value), "not a string")
        text = value.strip()
        if not _HEX_RE.fullmatch(text):
            raise DecodeError(self.name, value, "non-hex characters")
        if len(text) % 2:
            raise DecodeError(self.name, value, "odd number of hex digits")
        return self._check_size(value, bytes.fromhex(text))

    def decode_trusted(self, value: str) -> bytes:
        return bytes.fromhex(value)


# ---------------------------------------------------------------------------
# UUID
# ---------------------------------------------------------------------------

_UUID_HEX = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
_UUID_RE = re.compile(rf"urn:uuid:({_UUID_HEX})|\{{({_UUID_HEX})\}}|({_UUID_HEX})")


class UuidCoder(_BaseCoder):
    """Hyphenated 8-4-4-4-12 lowercase UUID text.

    ``decode`` also accepts upper case and the ``{...}`` and
    ``urn:uuid:`` wrappings. Only meaningful for 16-byte payloads.
    """

    name = "uuid"

    def __init__(self) -> None:
        super().__init__(16)

    def encode_trusted(self, payload: bytes) -> str:
        return str(uuid.UUID(bytes=payload))

    def decode(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise DecodeError(self.name, repr(value), "not a string")
        match = _UUID_RE.fullmatch(value.strip())
        if match is None:
            raise DecodeError(self.name, value, "not an 8-4-4-4-12 hex UUID")
        return uuid.UUID(match.group(match.lastindex)).bytes

    def decode_trusted(self, value: str) -> bytes:
        return bytes.fromhex(value.replace("-", ""))


# ---------------------------------------------------------------------------
# URL-safe base64
# ---------------------------------------------------------------------------

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


class Base64UrlCoder(_BaseCoder):
    """URL-safe base64 without ``=`` padding (22 characters for 16 bytes)."""

    name = "base64url"

    def encode_trusted(self, payload: bytes) -> str:
        return base64.urlsafe_b64encode(payload).rstrip(b"=").decode("ascii")

    def decode(self, value: str) -> bytes:
        if not isinstance(value, str):
            raise DecodeError(self.name, repr(value), "not a string")
        text = value.strip()
        if not _B64URL_RE.fullmatch(text):
            raise DecodeError(self.name, value, "characters outside url-safe alphabet")
        if len(text) % 4 == 1:
            raise DecodeError(self.name, value, "impossible base64 length")
        try:
            payload = base64.urlsafe_b64decode(_pad(text))
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(self.name, value, str(exc)) from exc
        # One accepted spelling per payload: trailing pad bits must be zero.
        if self.encode_trusted(payload) != text:
            raise DecodeError(self.name, value, "non-canonical encoding")
        return self._check_size(value, payload)

    def decode_trusted(self, value: str) -> bytes:
        return base64.urlsafe_b64decode(_pad(value))


def _pad(text: str) -> str:
    return text + "=" * (-len(text) % 4)


CODERS: dict[str, type[_BaseCoder]] = {
    HexCoder.name: HexCoder,
    UuidCoder.name: UuidCoder,
    Base64UrlCoder.name: Base64UrlCoder,
}
