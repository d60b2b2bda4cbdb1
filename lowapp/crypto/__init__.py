"""
LoWAPP Cryptographic Module

Randomness for node identities and keys, and key fingerprints for
logging. All implementations use python3-cryptography.
"""

from .primitives import (
    random_bytes,
    blake2b_hash,
    key_fingerprint,
    generate_enc_key,
)

__all__ = [
    'random_bytes',
    'blake2b_hash',
    'key_fingerprint',
    'generate_enc_key',
]
