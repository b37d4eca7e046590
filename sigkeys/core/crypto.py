from __future__ import annotations

import logging
import threading

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)
from nacl import bindings
from nacl.exceptions import CryptoError

from sigkeys.core.config import (
    PUBLIC_KEY_LENGTH,
    SECRET_KEY_LENGTH,
    SEED_LENGTH,
    SIGNATURE_LENGTH,
)
from sigkeys.core.errors import EngineError

logger = logging.getLogger(__name__)


def wipe(buf: bytearray) -> None:
    """Overwrite a buffer with zeros in place."""
    buf[:] = bytes(len(buf))


class Ed25519Engine:
    """Ed25519 primitives over raw bytes.

    Secret keys use the libsodium layout: the 32-byte seed followed by the
    32-byte public key. The engine holds no mutable state, so one instance
    is shared by every caller (see get_engine).
    """

    __slots__ = ()

    def generate_keypair(self, seed: bytes | None = None) -> tuple[bytes, bytes]:
        """Generate a keypair, or expand one from a 32-byte seed. Returns (public, secret)."""
        if seed is None:
            private_key = Ed25519PrivateKey.generate()
        else:
            if len(seed) != SEED_LENGTH:
                raise EngineError(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
            private_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
        seed_bytes = private_key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )
        public_bytes = private_key.public_key().public_bytes(
            Encoding.Raw, PublicFormat.Raw
        )
        return public_bytes, seed_bytes + public_bytes

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        """Sign a message with a 64-byte secret key. Returns 64-byte signature."""
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise EngineError(
                f"secret key must be {SECRET_KEY_LENGTH} bytes, got {len(secret_key)}"
            )
        seed = bytearray(memoryview(secret_key)[:SEED_LENGTH])
        try:
            private_key = Ed25519PrivateKey.from_private_bytes(bytes(seed))
        except ValueError as err:
            raise EngineError(str(err)) from err
        finally:
            wipe(seed)
        return private_key.sign(bytes(message))

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Verify a signature.

        Returns False for a well-formed signature that does not match. A
        public key or signature of the wrong size raises EngineError.
        """
        if len(signature) != SIGNATURE_LENGTH:
            raise EngineError(
                f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
            )
        if len(public_key) != PUBLIC_KEY_LENGTH:
            raise EngineError(
                f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key)}"
            )
        try:
            verifier = Ed25519PublicKey.from_public_bytes(bytes(public_key))
        except ValueError as err:
            raise EngineError(str(err)) from err
        try:
            verifier.verify(bytes(signature), bytes(message))
            return True
        except InvalidSignature:
            return False

    def secret_to_exchange_key(self, secret_key: bytes) -> bytes:
        """Convert an Ed25519 secret key to an X25519 private key."""
        try:
            return bindings.crypto_sign_ed25519_sk_to_curve25519(bytes(secret_key))
        except CryptoError as err:
            raise EngineError(str(err)) from err

    def public_to_exchange_key(self, public_key: bytes) -> bytes:
        """Convert an Ed25519 public key to an X25519 public key."""
        try:
            return bindings.crypto_sign_ed25519_pk_to_curve25519(bytes(public_key))
        except CryptoError as err:
            raise EngineError(str(err)) from err


_engine: Ed25519Engine | None = None
_engine_lock = threading.Lock()


def get_engine() -> Ed25519Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = Ed25519Engine()
                logger.debug("ed25519 engine initialized")
    return _engine
