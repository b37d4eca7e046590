import base58

from sigkeys.core.errors import InvalidEncoding

_ALPHABET = frozenset(base58.BITCOIN_ALPHABET.decode("ascii"))


def encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    return base58.b58encode(bytes(data)).decode("ascii")


def decode(text: str) -> bytes:
    """Decode a base58 string. Raises InvalidEncoding on characters outside the alphabet."""
    # b58decode strips trailing whitespace; keys must match exactly
    invalid = set(text) - _ALPHABET
    if invalid:
        raise InvalidEncoding(
            f"invalid base58 string: unexpected characters {sorted(invalid)!r}"
        )
    try:
        return base58.b58decode(text)
    except ValueError as err:
        raise InvalidEncoding(f"invalid base58 string: {err}") from err
