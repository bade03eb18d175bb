"""Built-in identifier type.

RandomId
--------
A 16-byte opaque identifier. Fresh identifiers are UUID v4 payloads;
the sentinels are the all-zero and all-0xff payloads, so every
generated identifier sorts strictly between MIN and MAX.

Instances are immutable once constructed. Payload length is not checked
here: coders own the wire format and validate untrusted input.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

PAYLOAD_SIZE = 16


def new_payload() -> bytes:
    """Generate a new random 16-byte payload (UUID v4 layout)."""
    return uuid.uuid4().bytes


@dataclass(frozen=True, order=True)
class RandomId:
    """Immutable identifier over a byte payload.

    Equal, ordered and hashed by payload. ``bytearray`` and
    ``memoryview`` payloads are copied into ``bytes``.
    """

    payload: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.payload, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"RandomId payload must be bytes-like, got {type(self.payload).__name__}"
            )
        if not isinstance(self.payload, bytes):
            object.__setattr__(self, "payload", bytes(self.payload))

    @classmethod
    def generate(cls) -> RandomId:
        return cls(new_payload())

    @classmethod
    def min_sentinel(cls) -> RandomId:
        return cls(b"\x00" * PAYLOAD_SIZE)

    @classmethod
    def max_sentinel(cls) -> RandomId:
        return cls(b"\xff" * PAYLOAD_SIZE)

    @property
    def bytes(self) -> bytes:
        return self.payload


ID_TYPES: dict[str, type] = {
    "random": RandomId,
}
