"""
LoWAPP Cryptographic Primitives

Low-level helpers wrapping the cryptography library.

SECURITY NOTES:
- All randomness from os.urandom (kernel CSPRNG)
- Encryption keys are never logged; use key_fingerprint() instead
"""

import os

from cryptography.hazmat.primitives import hashes

from .. import ENC_KEY_LENGTH


# Digest bytes kept for a key fingerprint
FINGERPRINT_LENGTH = 8  # bytes


def random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of random bytes to generate

    Returns:
        bytes: Random bytes from the kernel CSPRNG

    Raises:
        ValueError: If length is negative
    """
    if length < 0:
        raise ValueError("Length must be non-negative")
    return os.urandom(length)


def blake2b_hash(data: bytes, digest_size: int = 32) -> bytes:
    """
    Compute the BLAKE2b hash of data.

    The cryptography backend only exposes the full 64-byte BLAKE2b
    output, so shorter digests are truncated.

    Args:
        data: Data to hash
        digest_size: Output size in bytes (1-64)

    Returns:
        bytes: Hash digest
    """
    if not 1 <= digest_size <= 64:
        raise ValueError("Digest size must be 1-64 bytes")

    hasher = hashes.Hash(hashes.BLAKE2b(64))
    hasher.update(data)
    return hasher.finalize()[:digest_size]


def key_fingerprint(key: bytes) -> str:
    """
    Short, non-reversible identifier for an encryption key.

    Used wherever a key would otherwise appear in logs or console output.
    """
    return blake2b_hash(key, digest_size=FINGERPRINT_LENGTH).hex()


def generate_enc_key() -> bytes:
    """Generate a fresh AES-128 network key for a new node."""
    return random_bytes(ENC_KEY_LENGTH)
