"""
LoWAPP Configuration Field Codec

Converts configuration fields between their ASCII text form (as found
in node configuration files) and their fixed-width binary form.

Encodings:
    hex      - 2 ASCII characters per byte, most significant byte first
    decimal  - unsigned big-endian integer written in base 10

Every conversion is bounded by the field width: nothing is read or
written past it. Malformed text raises InvalidEncoding instead of
producing partial output.
"""

from typing import Union


HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
DECIMAL_DIGITS = frozenset("0123456789")

# Decimal fields are counted in 16-bit words
WORD_SIZE = 2

Buffer = Union[bytes, bytearray, memoryview]


class ConfigError(Exception):
    """Base exception for configuration errors."""
    pass


class InvalidEncoding(ConfigError, ValueError):
    """Exception raised when field text or binary data is malformed."""
    pass


def decode_hex_field(data: Buffer, byte_length: int) -> str:
    """
    Convert a binary field to its hex text form.

    Args:
        data: Buffer holding at least byte_length bytes
        byte_length: Field width in bytes

    Returns:
        str: Uppercase hex string of exactly 2 * byte_length characters

    Raises:
        InvalidEncoding: If data is shorter than byte_length
    """
    if byte_length < 0:
        raise ValueError("Field width must be non-negative")
    if len(data) < byte_length:
        raise InvalidEncoding(
            f"Field too short: {len(data)} bytes (expected {byte_length})"
        )
    return bytes(data[:byte_length]).hex().upper()


def encode_hex_field(text: str, byte_length: int) -> bytes:
    """
    Parse hex text into a binary field.

    Only the first 2 * byte_length characters are significant; anything
    after them is ignored. Upper and lower case digits are accepted.

    Args:
        text: Hex text
        byte_length: Field width in bytes

    Returns:
        bytes: Exactly byte_length bytes, most significant first

    Raises:
        InvalidEncoding: If the text is too short or contains a non-hex digit
    """
    if byte_length < 0:
        raise ValueError("Field width must be non-negative")

    digits = text[:2 * byte_length]
    if len(digits) < 2 * byte_length:
        raise InvalidEncoding(
            f"Hex value {text!r} too short (expected {2 * byte_length} digits)"
        )

    for position, char in enumerate(digits):
        if char not in HEX_DIGITS:
            raise InvalidEncoding(
                f"Invalid hex digit {char!r} at position {position} in {text!r}"
            )

    return bytes.fromhex(digits)


def decode_decimal_field(data: Buffer, word_count: int = 1) -> str:
    """
    Convert an unsigned integer field to base-10 text.

    Args:
        data: Buffer holding at least word_count 16-bit words
        word_count: Field width in 16-bit words

    Returns:
        str: Decimal representation without leading zeros
    """
    byte_length = word_count * WORD_SIZE
    if len(data) < byte_length:
        raise InvalidEncoding(
            f"Field too short: {len(data)} bytes (expected {byte_length})"
        )
    return str(int.from_bytes(bytes(data[:byte_length]), "big"))


def encode_decimal_field(text: str, byte_length: int = WORD_SIZE) -> int:
    """
    Parse decimal text into an unsigned integer.

    The text may be of any length (leading zeros are allowed) but the
    value must fit in byte_length bytes.

    Args:
        text: Decimal digits
        byte_length: Width of the target field in bytes

    Returns:
        int: Parsed value

    Raises:
        InvalidEncoding: On empty text, non-digit characters or overflow
    """
    if not text:
        raise InvalidEncoding("Empty decimal value")

    for position, char in enumerate(text):
        if char not in DECIMAL_DIGITS:
            raise InvalidEncoding(
                f"Invalid decimal digit {char!r} at position {position} in {text!r}"
            )

    limit = 1 << (8 * byte_length)
    significant = text.lstrip("0") or "0"
    if len(significant) > len(str(limit)):
        raise InvalidEncoding(
            f"Decimal value {text!r} does not fit in {byte_length} bytes"
        )

    value = int(significant)
    if value >= limit:
        raise InvalidEncoding(
            f"Decimal value {value} does not fit in {byte_length} bytes"
        )
    return value
