"""Protocol interfaces for the identifier factory.

The factory's collaborators are defined here as Protocol classes.
Identifier types and coders can be swapped without changing callers;
conformance is structural and is never checked at construction time.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Identifier
# ---------------------------------------------------------------------------

@runtime_checkable
class IIdentifier(Protocol):
    """An identifier instance: an immutable byte payload."""

    @property
    def bytes(self) -> bytes: ...


@runtime_checkable
class IIdType(Protocol):
    """An identifier type.

    Calling the type with a byte payload constructs an instance. The
    class-level operations mint fresh identifiers and the two sentinels.
    """

    def __call__(self, payload: bytes) -> IIdentifier: ...

    def generate(self) -> IIdentifier: ...

    def min_sentinel(self) -> IIdentifier: ...

    def max_sentinel(self) -> IIdentifier: ...


# ---------------------------------------------------------------------------
# Coder
# ---------------------------------------------------------------------------

@runtime_checkable
class ICoder(Protocol):
    """Converts between a byte payload and one serialized string format.

    ``decode`` validates its input and may raise; ``decode_trusted``
    assumes the input already conforms to the format.
    """

    def encode(self, payload: bytes) -> str: ...

    def encode_trusted(self, payload: bytes) -> str: ...

    def decode(self, value: str) -> bytes: ...

    def decode_trusted(self, value: str) -> bytes: ...
