import gc

import pytest

from sigkeys.core.errors import InvalidKeyLength, UnsupportedAlgorithm
from sigkeys.core.keys import EncodedVerificationKey, SigningKey, VerificationKey
from sigkeys.core.types import KeyEncoding, KeyType

VERKEY = "FVUhG3xbKJnECuKN3L73RV7MXUtB2TVHbpfoRYTkXQnE"


class TestSigningKeyDisposal:
    def test_wiped_on_block_exit(self):
        with SigningKey.generate() as sk:
            buf = sk.key
            assert any(buf)
        assert len(buf) == 64
        assert not any(buf)
        assert sk.key == bytearray()
        assert sk.alg == KeyType.unspecified()

    def test_wiped_when_block_raises(self):
        with pytest.raises(RuntimeError):
            with SigningKey.generate() as sk:
                buf = sk.key
                raise RuntimeError("boom")
        assert len(buf) == 64
        assert not any(buf)

    def test_wiped_when_operation_fails(self):
        with pytest.raises(UnsupportedAlgorithm):
            with SigningKey(b"\x07" * 64, "x25519") as sk:
                buf = sk.key
                sk.sign(b"hello")
        assert not any(buf)

    def test_wiped_when_collected(self):
        sk = SigningKey(b"\x07" * 64)
        buf = sk.key
        del sk
        gc.collect()
        assert len(buf) == 64
        assert not any(buf)

    def test_explicit_zeroize_is_repeatable(self):
        sk = SigningKey(b"\x07" * 64)
        buf = sk.key
        sk.zeroize()
        sk.zeroize()
        assert not any(buf)
        assert sk.key_bytes() == b""

    def test_unusable_after_disposal(self):
        with SigningKey.generate() as sk:
            pass
        with pytest.raises(UnsupportedAlgorithm):
            sk.sign(b"hello")
        with pytest.raises(UnsupportedAlgorithm):
            sk.public_key()

    def test_derived_keys_are_independent(self):
        with SigningKey.generate() as sk:
            vk = sk.public_key()
            expected = vk.key_bytes()
        assert vk.key_bytes() == expected
        assert any(expected)


class TestVerificationKeyDisposal:
    def test_wiped_on_block_exit(self):
        with VerificationKey(b"\x09" * 32) as vk:
            buf = vk.key
        assert len(buf) == 32
        assert not any(buf)
        assert vk.alg == KeyType.unspecified()

    def test_wiped_when_block_raises(self):
        with pytest.raises(InvalidKeyLength):
            with VerificationKey(b"\x09" * 31) as vk:
                buf = vk.key
                vk.validate()
        assert len(buf) == 31
        assert not any(buf)

    def test_wiped_when_collected(self):
        vk = VerificationKey(b"\x09" * 32)
        buf = vk.key
        del vk
        gc.collect()
        assert not any(buf)


class TestEncodedKeyDisposal:
    def test_wiped_on_block_exit(self):
        with EncodedVerificationKey.parse(VERKEY + ":x25519") as key:
            buf = key._key
            assert bytes(buf) == VERKEY.encode()
        assert len(buf) == len(VERKEY)
        assert not any(buf)
        assert key.key == ""
        assert key.alg == KeyType.unspecified()
        assert key.enc == KeyEncoding.unspecified()

    def test_wiped_when_block_raises(self):
        with pytest.raises(RuntimeError):
            with EncodedVerificationKey(VERKEY) as key:
                buf = key._key
                raise RuntimeError("boom")
        assert not any(buf)

    def test_wiped_when_collected(self):
        key = EncodedVerificationKey(VERKEY)
        buf = key._key
        del key
        gc.collect()
        assert not any(buf)

    def test_display_after_disposal(self):
        with EncodedVerificationKey(VERKEY) as key:
            pass
        assert str(key) == ":"

    def test_as_base58_result_shares_disposal(self):
        key = EncodedVerificationKey(VERKEY)
        buf = key._key
        with key.as_base58():
            pass
        assert not any(buf)
        assert key.key == ""
