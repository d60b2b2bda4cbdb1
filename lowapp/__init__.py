"""
LoWAPP Node - Simulated LoWAPP device configuration

Per-node configuration storage and identity resolution for the
LoWAPP network simulator.

This package contains:
- config/    : Field codec and fixed-width configuration record
- node/      : Configuration file discovery, parsing and writing
- crypto/    : Randomness and hashing primitives
"""

__version__ = "0.1.0"
__author__ = "LoWAPP Project"

# Core constants
UUID_STRING_LENGTH = 36  # canonical hyphenated form
ENC_KEY_LENGTH = 16  # bytes (AES-128)
DEFAULT_NODE_SUBDIR = "Nodes/"
