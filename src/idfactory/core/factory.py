"""IdFactory: mints and reconstructs identifiers in two serialized forms.

Every identifier the factory hands out is *decorated*: it carries
zero-argument ``to_canonical()`` and ``to_raw()`` operations bound to
that one instance. The identifier type's own class is never modified,
so identifiers built without the factory do not expose them.

Decoding comes in two flavours per format:

- ``from_canonical`` / ``from_raw``: untrusted input, the coder validates.
- ``from_canonical_trusted`` / ``from_raw_trusted``: input from a trusted
  source (e.g. internal storage); the coder may skip validation.

Encoding always goes through the coder's trusted path, since an
identifier instance already holds a well-formed payload.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable

from .config import IdFactoryConfig
from .errors import DecorationError
from .interfaces import ICoder, IIdentifier, IIdType

logger = logging.getLogger(__name__)


class IdFactory:
    """Factory over one identifier type and a canonical/raw coder pair.

    Thread-safe. The two sentinels are resolved lazily, once per factory.

    Parameters
    ----------
    config:
        :class:`IdFactoryConfig` or a mapping with the keys ``id``,
        ``canonical_coder`` and ``raw_coder``.
    """

    def __init__(self, config: IdFactoryConfig | Mapping[str, Any]) -> None:
        if not isinstance(config, IdFactoryConfig):
            config = IdFactoryConfig.model_validate(dict(config))

        self._id_type: IIdType = config.id
        self._canonical_coder: ICoder = config.canonical_coder
        self._raw_coder: ICoder = config.raw_coder

        self._min_lock = threading.Lock()
        self._max_lock = threading.Lock()
        self._min: IIdentifier | None = None
        self._max: IIdentifier | None = None

        logger.debug(
            "IdFactory created: id=%s canonical=%s raw=%s",
            _name_of(self._id_type),
            _name_of(self._canonical_coder),
            _name_of(self._raw_coder),
        )

    @property
    def id_type(self) -> IIdType:
        return self._id_type

    # ------------------------------------------------------------------
    # Minting
    # ------------------------------------------------------------------

    def generate(self) -> IIdentifier:
        """Return a fresh identifier. Never cached."""
        return self.decorate(self._id_type.generate())

    def min_sentinel(self) -> IIdentifier:
        """Return this factory's MIN identifier (same object every call)."""
        if self._min is None:
            with self._min_lock:
                if self._min is None:
                    self._min = self._resolve_sentinel(
                        "min", self._id_type.min_sentinel
                    )
        return self._min

    def max_sentinel(self) -> IIdentifier:
        """Return this factory's MAX identifier (same object every call)."""
        if self._max is None:
            with self._max_lock:
                if self._max is None:
                    self._max = self._resolve_sentinel(
                        "max", self._id_type.max_sentinel
                    )
        return self._max

    def _resolve_sentinel(
        self, which: str, make: Callable[[], IIdentifier]
    ) -> IIdentifier:
        sentinel = self.decorate(make())
        logger.debug(
            "Sentinel resolved: %s for %s", which, _name_of(self._id_type)
        )
        return sentinel

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def from_canonical(self, value: str) -> IIdentifier:
        """Decode untrusted canonical input. Coder errors propagate."""
        return self._build(self._canonical_coder.decode(value))

    def from_canonical_trusted(self, value: str) -> IIdentifier:
        """Decode canonical input from a trusted source."""
        return self._build(self._canonical_coder.decode_trusted(value))

    def from_raw(self, value: str) -> IIdentifier:
        """Decode untrusted raw input. Coder errors propagate."""
        return self._build(self._raw_coder.decode(value))

    def from_raw_trusted(self, value: str) -> IIdentifier:
        """Decode raw input from a trusted source."""
        return self._build(self._raw_coder.decode_trusted(value))

    def _build(self, payload: bytes) -> IIdentifier:
        return self.decorate(self._id_type(payload))

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def to_canonical(self, identifier: IIdentifier) -> str:
        return self._canonical_coder.encode_trusted(identifier.bytes)

    def to_raw(self, identifier: IIdentifier) -> str:
        return self._raw_coder.encode_trusted(identifier.bytes)

    # ------------------------------------------------------------------
    # Decoration
    # ------------------------------------------------------------------

    def decorate(self, identifier: IIdentifier) -> IIdentifier:
        """Attach ``to_canonical()`` and ``to_raw()`` to *identifier* only.

        Writes go to the instance ``__dict__`` through
        ``object.__setattr__`` so frozen dataclasses can be decorated.
        A later decoration by another factory replaces this one.

        Returns the same object.

        Raises
        ------
        DecorationError
            If the instance has no per-instance attribute storage.
        """
        if not hasattr(identifier, "__dict__"):
            raise DecorationError(
                f"Cannot decorate {type(identifier).__name__} instance: "
                "no per-instance attribute storage (__slots__ without __dict__)"
            )
        object.__setattr__(
            identifier, "to_canonical", functools.partial(self.to_canonical, identifier)
        )
        object.__setattr__(
            identifier, "to_raw", functools.partial(self.to_raw, identifier)
        )
        return identifier


def _name_of(obj: Any) -> str:
    return getattr(obj, "__name__", None) or type(obj).__name__
