from __future__ import annotations

import logging

from sigkeys.core import base58
from sigkeys.core.config import (
    ENCODING_ERROR_MARKER,
    QUALIFIER_SEPARATOR,
    SEED_LENGTH,
    SHORT_KEY_PREFIX,
)
from sigkeys.core.crypto import get_engine, wipe
from sigkeys.core.errors import (
    EngineError,
    InvalidEncoding,
    KeyConversionError,
    KeyDerivationFailed,
    KeyExchangeConversionFailed,
    MissingDestination,
    SigningFailed,
    UnsupportedAlgorithm,
    UnsupportedEncoding,
    VerificationError,
)
from sigkeys.core.types import (
    KeyEncoding,
    KeyEncodingLike,
    KeyType,
    KeyTypeLike,
    KnownKeyEncoding,
    KnownKeyType,
)
from sigkeys.core.validation import Validatable, validate_verkey_length

logger = logging.getLogger(__name__)

_CODECS = {KnownKeyEncoding.BASE58: base58}


def _codec(enc: KeyEncoding):
    codec = _CODECS.get(enc.known)
    if codec is None:
        raise UnsupportedEncoding(f"unsupported key encoding: {enc.value!r}")
    return codec


def _require_ed25519(alg: KeyType, action: str) -> None:
    if alg.known is not KnownKeyType.ED25519:
        raise UnsupportedAlgorithm(f"unsupported key type for {action}: {alg.value!r}")


class Zeroizing:
    """Mixin for key types holding material that must be wiped on disposal.

    Instances are context managers: leaving the block zeroizes the key on
    every exit path. Instances that are never entered are zeroized when
    collected.
    """

    def zeroize(self) -> None:
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.zeroize()

    def __del__(self) -> None:
        self.zeroize()


class SigningKey(Zeroizing):
    """Secret signing key.

    For ed25519 the bytes are the 64-byte secret key: the 32-byte seed
    followed by the public key.
    """

    def __init__(self, key: bytes, alg: KeyTypeLike = None):
        self.key = bytearray(key)
        self.alg = KeyType.resolve(alg)

    @classmethod
    def generate(cls, alg: KeyTypeLike = None) -> SigningKey:
        """Create a random signing key. Only ed25519 is supported."""
        alg = KeyType.resolve(alg)
        _require_ed25519(alg, "key generation")
        try:
            _, secret = get_engine().generate_keypair()
        except EngineError as err:
            logger.debug(f"key generation failed: {err}")
            raise KeyDerivationFailed(f"error creating signing key: {err}") from err
        return cls(secret, KeyType.ED25519)

    @classmethod
    def from_seed(cls, seed: bytes) -> SigningKey:
        """Deterministically derive an ed25519 signing key from a seed."""
        try:
            _, secret = get_engine().generate_keypair(seed)
        except EngineError as err:
            logger.debug(f"key derivation failed: {err}")
            raise KeyDerivationFailed(f"error creating signing key: {err}") from err
        return cls(secret, KeyType.ED25519)

    def public_key(self) -> VerificationKey:
        _require_ed25519(self.alg, "public key derivation")
        return VerificationKey(self.key[SEED_LENGTH:], self.alg)

    def key_bytes(self) -> bytes:
        return bytes(self.key)

    def key_exchange(self) -> SigningKey:
        """Convert an ed25519 signing key into an x25519 private key."""
        _require_ed25519(self.alg, "key exchange")
        try:
            exchange_key = get_engine().secret_to_exchange_key(self.key)
        except EngineError as err:
            logger.debug(f"key exchange conversion failed: {err}")
            raise KeyExchangeConversionFailed(
                f"error converting to x25519 key: {err}"
            ) from err
        return SigningKey(exchange_key, KeyType.X25519)

    def sign(self, message: bytes) -> bytes:
        _require_ed25519(self.alg, "signing")
        try:
            return get_engine().sign(self.key, message)
        except EngineError as err:
            logger.debug(f"signing failed: {err}")
            raise SigningFailed(f"error signing payload: {err}") from err

    def zeroize(self) -> None:
        key = getattr(self, "key", None)
        if key is not None:
            wipe(key)
        self.key = bytearray()
        self.alg = KeyType.unspecified()

    def __bytes__(self) -> bytes:
        return self.key_bytes()

    def __eq__(self, other):
        if not isinstance(other, SigningKey):
            return NotImplemented
        return self.key == other.key and self.alg == other.alg

    def __repr__(self) -> str:
        return f"SigningKey(alg={self.alg.value!r})"


class VerificationKey(Zeroizing, Validatable):
    """Raw public key."""

    def __init__(self, key: bytes, alg: KeyTypeLike = None):
        self.key = bytearray(key)
        self.alg = KeyType.resolve(alg)

    def as_base58(self) -> EncodedVerificationKey:
        return self.encode(KeyEncoding.BASE58)

    def encode(self, enc: KeyEncodingLike) -> EncodedVerificationKey:
        enc = KeyEncoding.resolve(enc)
        codec = _codec(enc)
        return EncodedVerificationKey(codec.encode(self.key), self.alg, enc)

    def key_bytes(self) -> bytes:
        return bytes(self.key)

    def key_exchange(self) -> VerificationKey:
        """Convert an ed25519 public key into an x25519 public key."""
        _require_ed25519(self.alg, "key exchange")
        try:
            exchange_key = get_engine().public_to_exchange_key(self.key)
        except EngineError as err:
            logger.debug(f"key exchange conversion failed: {err}")
            raise KeyExchangeConversionFailed(
                f"error converting to x25519 key: {err}"
            ) from err
        return VerificationKey(exchange_key, KeyType.X25519)

    def verify_signature(self, message: bytes, signature: bytes) -> bool:
        """Check a signature over message.

        Returns False when the signature does not match. Raises
        VerificationError when the key or signature is malformed.
        """
        _require_ed25519(self.alg, "signature verification")
        try:
            return get_engine().verify(self.key, message, signature)
        except EngineError as err:
            raise VerificationError(
                f"error validating message signature: {err}"
            ) from err

    def validate(self) -> None:
        validate_verkey_length(self.key)

    def zeroize(self) -> None:
        key = getattr(self, "key", None)
        if key is not None:
            wipe(key)
        self.key = bytearray()
        self.alg = KeyType.unspecified()

    def __bytes__(self) -> bytes:
        return self.key_bytes()

    def __eq__(self, other):
        if not isinstance(other, VerificationKey):
            return NotImplemented
        return self.key == other.key and self.alg == other.alg

    def __str__(self) -> str:
        try:
            with self.as_base58() as encoded:
                return str(encoded)
        except KeyConversionError as err:
            return ENCODING_ERROR_MARKER.format(err)

    def __repr__(self) -> str:
        return f"VerificationKey({str(self)!r}, alg={self.alg.value!r})"


class EncodedVerificationKey(Zeroizing, Validatable):
    """Verification key in textual form, together with its algorithm and encoding.

    Construction does not check the key; call validate() for that.
    """

    def __init__(
        self,
        key: str,
        alg: KeyTypeLike = None,
        enc: KeyEncodingLike = None,
    ):
        self._key = bytearray(key.encode("utf-8"))
        self.alg = KeyType.resolve(alg)
        self.enc = KeyEncoding.resolve(enc)

    @property
    def key(self) -> str:
        return self._key.decode("utf-8")

    @classmethod
    def parse(cls, key: str) -> EncodedVerificationKey:
        return cls.parse_qualified(key)

    @classmethod
    def from_bytes(cls, buffer: bytes) -> EncodedVerificationKey:
        """Parse a key from UTF-8 encoded bytes."""
        try:
            text = bytes(buffer).decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidEncoding(f"key is not valid UTF-8: {err}") from err
        return cls.parse(text)

    @classmethod
    def parse_qualified(
        cls,
        key: str,
        dest: str | None = None,
        alg: KeyTypeLike = None,
        enc: KeyEncodingLike = None,
    ) -> EncodedVerificationKey:
        """Parse `<key>[:<algorithm>]`, expanding a short `~` key against dest.

        Only the first colon separates; everything after it is the algorithm
        tag. An empty tag keeps `alg`. A short key is the tail of the full
        key, whose head is the decoded destination.
        """
        if QUALIFIER_SEPARATOR in key:
            key, tail = key.split(QUALIFIER_SEPARATOR, 1)
            if tail:
                alg = tail

        if key.startswith(SHORT_KEY_PREFIX):
            if dest is None:
                raise MissingDestination("destination required for short verkey")
            codec = _codec(KeyEncoding.resolve(enc))
            full_key = bytearray(codec.decode(dest))
            try:
                full_key.extend(codec.decode(key[len(SHORT_KEY_PREFIX):]))
                key = codec.encode(full_key)
            finally:
                wipe(full_key)

        return cls(key, alg, enc)

    def long_form(self) -> str:
        return f"{self.key}{QUALIFIER_SEPARATOR}{self.alg.value}"

    def as_base58(self) -> EncodedVerificationKey:
        """Return this key in base58.

        A key that is already base58 is returned as-is, so disposing the
        result disposes this key too.
        """
        if self.enc.known is KnownKeyEncoding.BASE58:
            return self
        return EncodedVerificationKey(
            base58.encode(self.key_bytes()), self.alg, KeyEncoding.BASE58
        )

    def key_bytes(self) -> bytes:
        return _codec(self.enc).decode(self.key)

    def encoded_key_bytes(self) -> bytes:
        return bytes(self._key)

    def to_verification_key(self) -> VerificationKey:
        return VerificationKey(self.key_bytes(), self.alg)

    def key_exchange(self) -> VerificationKey:
        _require_ed25519(self.alg, "key exchange")
        with self.to_verification_key() as verkey:
            return verkey.key_exchange()

    def verify_signature(self, message: bytes, signature: bytes) -> bool:
        _require_ed25519(self.alg, "signature verification")
        with self.to_verification_key() as verkey:
            return verkey.verify_signature(message, signature)

    def validate(self) -> None:
        validate_verkey_length(self.key_bytes())

    def zeroize(self) -> None:
        key = getattr(self, "_key", None)
        if key is not None:
            wipe(key)
        self._key = bytearray()
        self.alg = KeyType.unspecified()
        self.enc = KeyEncoding.unspecified()

    def __eq__(self, other):
        if not isinstance(other, EncodedVerificationKey):
            return NotImplemented
        return (
            self._key == other._key
            and self.alg == other.alg
            and self.enc == other.enc
        )

    def __str__(self) -> str:
        if self.alg == KeyType.default():
            return self.key
        return self.long_form()

    def __repr__(self) -> str:
        return (
            f"EncodedVerificationKey({self.key!r}, alg={self.alg.value!r}, "
            f"enc={self.enc.value!r})"
        )


def build_full_verkey(dest: str, key: str) -> EncodedVerificationKey:
    """Expand a possibly short verkey against the destination it belongs to."""
    return EncodedVerificationKey.parse_qualified(key, dest)
