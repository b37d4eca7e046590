import pytest

from sigkeys.core.types import (
    KeyEncoding,
    KeyType,
    KnownKeyEncoding,
    KnownKeyType,
)


class TestKeyType:
    def test_default_is_ed25519(self):
        assert KeyType.default() == KeyType.ED25519
        assert KeyType.resolve(None) == KeyType.ED25519

    def test_known_values(self):
        assert KeyType("ed25519").known is KnownKeyType.ED25519
        assert KeyType("x25519").known is KnownKeyType.X25519

    def test_unknown_value_kept_verbatim(self):
        tag = KeyType("bar:baz")
        assert tag.known is None
        assert tag.value == "bar:baz"
        assert str(tag) == "bar:baz"

    def test_equality_is_string_equality(self):
        assert KeyType("ed25519") == KeyType.ED25519
        assert KeyType("ED25519") != KeyType.ED25519
        assert KeyType("ED25519").known is None

    def test_resolve_from_string(self):
        assert KeyType.resolve("x25519") == KeyType.X25519

    def test_resolve_keeps_instance(self):
        tag = KeyType("custom")
        assert KeyType.resolve(tag) is tag

    def test_resolve_rejects_other_types(self):
        with pytest.raises(TypeError):
            KeyType.resolve(25519)

    def test_value_must_be_string(self):
        with pytest.raises(TypeError):
            KeyType(b"ed25519")

    def test_unspecified(self):
        tag = KeyType.unspecified()
        assert tag.value == ""
        assert tag.is_unspecified
        assert tag.known is None
        assert tag != KeyType.default()

    def test_hashable(self):
        assert len({KeyType("ed25519"), KeyType.ED25519, KeyType.X25519}) == 2


class TestKeyEncoding:
    def test_default_is_base58(self):
        assert KeyEncoding.default() == KeyEncoding.BASE58
        assert KeyEncoding.resolve(None).known is KnownKeyEncoding.BASE58

    def test_unknown_encoding(self):
        assert KeyEncoding("base64").known is None

    def test_unspecified(self):
        assert KeyEncoding.unspecified().is_unspecified

    def test_distinct_from_key_type(self):
        assert KeyEncoding("ed25519") != KeyType("ed25519")
