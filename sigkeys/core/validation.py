from __future__ import annotations

from sigkeys.core.config import VERKEY_LENGTH
from sigkeys.core.errors import InvalidKeyLength


class Validatable:
    """Mixin for values that can check their own invariants."""

    def validate(self) -> None:
        raise NotImplementedError


def validate_verkey_length(key: bytes) -> None:
    """Raise InvalidKeyLength unless the raw verification key is 32 bytes."""
    if len(key) != VERKEY_LENGTH:
        raise InvalidKeyLength(
            f"verification key must be {VERKEY_LENGTH} bytes, got {len(key)}"
        )
