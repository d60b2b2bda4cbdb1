import pytest

from lowapp.crypto import blake2b_hash, generate_enc_key, key_fingerprint, random_bytes


def test_random_bytes_length():
    assert len(random_bytes(16)) == 16
    assert random_bytes(0) == b""
    with pytest.raises(ValueError):
        random_bytes(-1)


def test_blake2b_digest_size():
    assert len(blake2b_hash(b"data")) == 32
    assert len(blake2b_hash(b"data", digest_size=8)) == 8
    assert blake2b_hash(b"data", 8) == blake2b_hash(b"data", 64)[:8]
    with pytest.raises(ValueError):
        blake2b_hash(b"data", digest_size=65)


def test_key_fingerprint_hides_key():
    key = bytes.fromhex("2B7E151628AED2A6ABF7158809CF4F3C")
    fingerprint = key_fingerprint(key)
    assert len(fingerprint) == 16
    assert fingerprint == key_fingerprint(key)
    assert key.hex() not in fingerprint
    assert fingerprint != key_fingerprint(bytes(16))


def test_generate_enc_key():
    key = generate_enc_key()
    assert len(key) == 16
    assert key != generate_enc_key()
