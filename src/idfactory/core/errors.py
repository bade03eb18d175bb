"""Custom exception hierarchy for the identifier factory."""


class IdFactoryError(Exception):
    """Base exception for all identifier factory errors."""


# --- Configuration ---
class ConfigError(IdFactoryError):
    """Invalid or missing configuration."""


# --- Coding ---
class DecodeError(IdFactoryError, ValueError):
    """Untrusted input could not be decoded into a byte payload."""

    def __init__(self, coder: str, value: str, reason: str):
        self.coder = coder
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot decode {value!r} as {coder}: {reason}")


class EncodeError(IdFactoryError, ValueError):
    """Byte payload is not encodable by the coder."""


# --- Decoration ---
class DecorationError(IdFactoryError, TypeError):
    """Identifier instance cannot carry per-instance operations."""
