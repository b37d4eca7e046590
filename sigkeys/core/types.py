from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Union

from sigkeys.core.config import KEY_ENCODING_BASE58, KEY_TYPE_ED25519, KEY_TYPE_X25519


class KnownKeyType(enum.Enum):
    ED25519 = KEY_TYPE_ED25519
    X25519 = KEY_TYPE_X25519


class KnownKeyEncoding(enum.Enum):
    BASE58 = KEY_ENCODING_BASE58


@dataclass(frozen=True)
class _Tag:
    """String-backed identifier that keeps unrecognized values verbatim.

    `known` maps the value onto the enum of supported variants, or returns
    None for an opaque value. Callers branch on the known variants only and
    treat everything else as unsupported.
    """

    value: str

    _known: ClassVar[type[enum.Enum]]
    _default: ClassVar[str]

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"tag value must be a string, got {type(self.value).__name__}")

    @classmethod
    def default(cls):
        return cls(cls._default)

    @classmethod
    def unspecified(cls):
        """The empty tag that disposed keys are reset to."""
        return cls("")

    @classmethod
    def resolve(cls, tag):
        """Coerce None, a plain string or a tag into a tag, applying the default."""
        if tag is None:
            return cls.default()
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            return cls(tag)
        raise TypeError(f"cannot build {cls.__name__} from {type(tag).__name__}")

    @property
    def known(self):
        try:
            return self._known(self.value)
        except ValueError:
            return None

    @property
    def is_unspecified(self) -> bool:
        return self.value == ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KeyType(_Tag):
    """Signature algorithm of a key."""

    _known: ClassVar[type[enum.Enum]] = KnownKeyType
    _default: ClassVar[str] = KEY_TYPE_ED25519

    ED25519: ClassVar[KeyType]
    X25519: ClassVar[KeyType]


@dataclass(frozen=True)
class KeyEncoding(_Tag):
    """Textual encoding of a verification key."""

    _known: ClassVar[type[enum.Enum]] = KnownKeyEncoding
    _default: ClassVar[str] = KEY_ENCODING_BASE58

    BASE58: ClassVar[KeyEncoding]


KeyType.ED25519 = KeyType(KEY_TYPE_ED25519)
KeyType.X25519 = KeyType(KEY_TYPE_X25519)
KeyEncoding.BASE58 = KeyEncoding(KEY_ENCODING_BASE58)

KeyTypeLike = Union[KeyType, str, None]
KeyEncodingLike = Union[KeyEncoding, str, None]
