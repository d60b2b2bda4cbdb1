"""
LoWAPP Configuration Store

In-memory record of a node's configuration parameters, addressed by
their textual keys.

Record Layout (27 bytes):
    deviceId      (1 byte)   - hex
    groupId       (2 bytes)  - hex
    gwMask        (4 bytes)  - hex
    rchanId       (1 byte)   - hex
    rsf           (1 byte)   - hex
    preambleTime  (2 bytes)  - unsigned big-endian, decimal
    encKey        (16 bytes) - hex

The key set is closed: a key outside the table is an UnknownKey error,
never a defaulted value. Writes are all-or-nothing per field.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Tuple

from .codec import (
    Buffer,
    ConfigError,
    InvalidEncoding,
    WORD_SIZE,
    decode_decimal_field,
    decode_hex_field,
    encode_decimal_field,
    encode_hex_field,
)


class UnknownKey(ConfigError, KeyError):
    """Exception raised for keys outside the configuration schema."""

    def __str__(self) -> str:
        return f"Unknown configuration key: {self.args[0]!r}" if self.args else "Unknown configuration key"


class FieldEncoding(Enum):
    """Text representation of a configuration field."""
    HEX = "hex"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class FieldDescriptor:
    """Location and encoding of one field inside the record."""
    key: str
    offset: int
    width: int  # bytes
    encoding: FieldEncoding

    @property
    def end(self) -> int:
        return self.offset + self.width

    @property
    def text_width(self) -> int:
        """Canonical text length (hex fields only)."""
        return 2 * self.width

    def decode(self, data: Buffer) -> str:
        """Binary field -> text."""
        if self.encoding is FieldEncoding.DECIMAL:
            return decode_decimal_field(data, self.width // WORD_SIZE)
        return decode_hex_field(data, self.width)

    def encode(self, text: str) -> bytes:
        """
        Text -> binary field of exactly self.width bytes.

        Hex values must have the canonical width; trailing text after the
        field is rejected rather than ignored.
        """
        if self.encoding is FieldEncoding.DECIMAL:
            return encode_decimal_field(text, self.width).to_bytes(self.width, "big")
        if len(text) > self.text_width:
            raise InvalidEncoding(
                f"Value {text!r} for {self.key} too long (expected {self.text_width} hex digits)"
            )
        return encode_hex_field(text, self.width)


def _build_schema(*entries: Tuple[str, int, FieldEncoding]) -> Dict[str, FieldDescriptor]:
    schema: Dict[str, FieldDescriptor] = {}
    offset = 0
    for key, width, encoding in entries:
        schema[key] = FieldDescriptor(key, offset, width, encoding)
        offset += width
    return schema


# Key -> field descriptor, in file order
FIELDS: Dict[str, FieldDescriptor] = _build_schema(
    ("deviceId", 1, FieldEncoding.HEX),
    ("groupId", 2, FieldEncoding.HEX),
    ("gwMask", 4, FieldEncoding.HEX),
    ("rchanId", 1, FieldEncoding.HEX),
    ("rsf", 1, FieldEncoding.HEX),
    ("preambleTime", 2, FieldEncoding.DECIMAL),
    ("encKey", 16, FieldEncoding.HEX),
)

RECORD_SIZE = sum(field.width for field in FIELDS.values())


def _lookup(key: str) -> FieldDescriptor:
    try:
        return FIELDS[key]
    except KeyError:
        raise UnknownKey(key) from None


class ConfigStore:
    """
    Fixed-width configuration record for one node.

    Usage:
        store = ConfigStore()
        store.set("deviceId", "AB")
        store.get("deviceId")      # "AB"
        store.device_id            # 0xAB

    All fields start zeroed.
    """

    def __init__(self):
        self._record = bytearray(RECORD_SIZE)

    def get(self, key: str) -> str:
        """
        Get a field's text value by key.

        Args:
            key: Configuration key (e.g. "deviceId")

        Returns:
            str: Canonical text form of the field

        Raises:
            UnknownKey: If key is not part of the schema
        """
        field = _lookup(key)
        return field.decode(memoryview(self._record)[field.offset:field.end])

    def set(self, key: str, value: str) -> None:
        """
        Set a field from its text value.

        The value is fully encoded before the record is touched, so a
        failed set leaves every field unchanged.

        Args:
            key: Configuration key
            value: Text value (hex or decimal depending on the field)

        Raises:
            UnknownKey: If key is not part of the schema
            InvalidEncoding: If value is malformed for the field
        """
        field = _lookup(key)
        data = field.encode(value)
        self._record[field.offset:field.end] = data

    def keys(self) -> List[str]:
        return list(FIELDS)

    def items(self) -> Iterator[Tuple[str, str]]:
        for key in FIELDS:
            yield key, self.get(key)

    def as_dict(self) -> Dict[str, str]:
        return dict(self.items())

    def __contains__(self, key: object) -> bool:
        return key in FIELDS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigStore):
            return NotImplemented
        return self._record == other._record

    def __repr__(self) -> str:
        return f"ConfigStore(device_id=0x{self.device_id:02X}, group_id=0x{self.group_id:04X})"

    def to_bytes(self) -> bytes:
        """Serialize the whole record (RECORD_SIZE bytes)."""
        return bytes(self._record)

    @classmethod
    def from_bytes(cls, data: Buffer) -> 'ConfigStore':
        """
        Load a record from its binary form.

        Raises:
            InvalidEncoding: If data is not exactly RECORD_SIZE bytes
        """
        if len(data) != RECORD_SIZE:
            raise InvalidEncoding(
                f"Invalid record length: {len(data)} (expected {RECORD_SIZE})"
            )
        store = cls()
        store._record[:] = data
        return store

    def _raw(self, key: str) -> bytes:
        field = FIELDS[key]
        return bytes(self._record[field.offset:field.end])

    def _int(self, key: str) -> int:
        return int.from_bytes(self._raw(key), "big")

    # Typed accessors

    @property
    def device_id(self) -> int:
        return self._int("deviceId")

    @property
    def group_id(self) -> int:
        return self._int("groupId")

    @property
    def gw_mask(self) -> int:
        return self._int("gwMask")

    @property
    def rchan_id(self) -> int:
        return self._int("rchanId")

    @property
    def rsf(self) -> int:
        return self._int("rsf")

    @property
    def preamble_time(self) -> int:
        return self._int("preambleTime")

    @property
    def enc_key(self) -> bytes:
        return self._raw("encKey")
