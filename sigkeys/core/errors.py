class KeyConversionError(Exception):
    """Base class for every failure raised by key operations."""


class UnsupportedAlgorithm(KeyConversionError):
    pass


class UnsupportedEncoding(KeyConversionError):
    pass


class InvalidEncoding(KeyConversionError):
    """Input is not valid UTF-8 or not valid in the key encoding alphabet."""


class KeyValidationError(KeyConversionError):
    pass


class InvalidKeyLength(KeyValidationError):
    pass


class MissingDestination(KeyConversionError):
    """A short-form key was parsed without the destination it extends."""


class KeyDerivationFailed(KeyConversionError):
    pass


class SigningFailed(KeyConversionError):
    pass


class VerificationError(KeyConversionError):
    """The key or signature is malformed, as opposed to the signature being wrong."""


class KeyExchangeConversionFailed(KeyConversionError):
    pass


class EngineError(Exception):
    """Raised by the signature engine when a primitive rejects its input."""
