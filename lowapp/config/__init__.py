"""
LoWAPP Configuration Module

Fixed-width node configuration record and the codec converting its
fields between text and binary form.
"""

from .codec import (
    ConfigError,
    InvalidEncoding,
    decode_hex_field,
    encode_hex_field,
    decode_decimal_field,
    encode_decimal_field,
)

from .store import (
    ConfigStore,
    FieldDescriptor,
    FieldEncoding,
    UnknownKey,
    FIELDS,
    RECORD_SIZE,
)

__all__ = [
    # Codec
    'ConfigError',
    'InvalidEncoding',
    'decode_hex_field',
    'encode_hex_field',
    'decode_decimal_field',
    'encode_decimal_field',
    # Store
    'ConfigStore',
    'FieldDescriptor',
    'FieldEncoding',
    'UnknownKey',
    'FIELDS',
    'RECORD_SIZE',
]
