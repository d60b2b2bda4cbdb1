"""
LoWAPP Node Configuration Files

Reads and writes node configuration files.

File Format:
    One "key:value" pair per line, value in the field's text encoding.
    No comments, quoting or escaping. Only the first ':' separates key
    and value.

    deviceId:01
    groupId:00AB
    preambleTime:100

Error Policy:
- Lines are independent: a line without ':' or with an unknown key is
  logged and skipped
- A malformed value means the file is corrupt and is raised, unless
  the load is non-strict
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..config.codec import ConfigError, InvalidEncoding
from ..config.store import ConfigStore, UnknownKey, FIELDS


logger = logging.getLogger(__name__)

DELIMITER = ":"

PathLike = Union[str, Path]
Line = Union[str, bytes, bytearray]


class MalformedLine(ConfigError, ValueError):
    """Exception raised for a configuration line without a delimiter."""
    pass


@dataclass
class LoadResult:
    """Outcome of loading a configuration file."""
    applied: List[str] = field(default_factory=list)  # keys set, in order
    skipped: List[Tuple[int, str]] = field(default_factory=list)  # (line number, reason)

    @property
    def ok(self) -> bool:
        return not self.skipped


def _decode_line(line: Line) -> str:
    if isinstance(line, str):
        return line
    try:
        return bytes(line).decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(
            f"Non-ASCII byte 0x{line[e.start]:02X} at position {e.start} in line {bytes(line)!r}"
        ) from None


def parse_line(store: ConfigStore, line: Line) -> str:
    """
    Apply one configuration line to a store.

    Args:
        store: Store receiving the value
        line: "key:value" text or raw ASCII bytes, with or without its
            line terminator

    Returns:
        str: The key that was set

    Raises:
        MalformedLine: If the line has no delimiter
        UnknownKey: If the key is not part of the schema
        InvalidEncoding: If the line is not ASCII or the value is
            malformed for the field
    """
    line = _decode_line(line).rstrip("\r\n")
    key, sep, value = line.partition(DELIMITER)
    if not sep:
        raise MalformedLine(f"No '{DELIMITER}' delimiter in line {line!r}")

    store.set(key, value)
    return key


def load_lines(
    store: ConfigStore,
    lines: Iterable[Line],
    strict: bool = True,
) -> LoadResult:
    """
    Apply configuration lines to a store.

    Args:
        store: Store receiving the values
        lines: Configuration lines
        strict: Raise on malformed values instead of skipping them

    Returns:
        LoadResult: Keys applied and lines skipped

    Raises:
        InvalidEncoding: On a malformed value, if strict
    """
    result = LoadResult()

    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        try:
            key = parse_line(store, line)
        except (MalformedLine, UnknownKey) as e:
            logger.warning(f"Line {number}: {e}, skipped")
            result.skipped.append((number, str(e)))
            continue
        except InvalidEncoding as e:
            logger.error(f"Line {number}: {e}")
            if strict:
                raise
            result.skipped.append((number, str(e)))
            continue

        result.applied.append(key)

    logger.debug(
        f"Loaded {len(result.applied)} configuration values "
        f"({len(result.skipped)} lines skipped)"
    )
    return result


def load_config(
    store: ConfigStore,
    path: PathLike,
    strict: bool = True,
) -> LoadResult:
    """
    Load a configuration file into a store.

    The file is read as bytes and each line decoded on its own, so a
    non-ASCII line is handled like any other malformed value.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidEncoding: On a malformed value, if strict
    """
    with open(path, "rb") as f:
        return load_lines(store, f, strict=strict)


def format_config(store: ConfigStore) -> str:
    """Render a store in configuration file format."""
    return "".join(f"{key}{DELIMITER}{store.get(key)}\n" for key in FIELDS)


def save_config(store: ConfigStore, path: PathLike) -> Path:
    """
    Write a store to a configuration file.

    Parent directories are created as needed.

    Returns:
        Path: The file written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_config(store), encoding="ascii")
    logger.info(f"Wrote configuration file {path}")
    return path
