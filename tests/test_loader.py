import logging

import pytest

from lowapp.config import ConfigStore, InvalidEncoding, UnknownKey
from lowapp.node.loader import (
    MalformedLine,
    format_config,
    load_config,
    load_lines,
    parse_line,
    save_config,
)


SAMPLE = (
    "deviceId:01\n"
    "groupId:00AB\n"
    "gwMask:0000000F\n"
    "rchanId:02\n"
    "rsf:07\n"
    "preambleTime:100\n"
    "encKey:2B7E151628AED2A6ABF7158809CF4F3C\n"
)


def test_parse_line_sets_field():
    store = ConfigStore()
    assert parse_line(store, "deviceId:AB") == "deviceId"
    assert store.device_id == 0xAB


def test_parse_line_strips_line_terminator():
    store = ConfigStore()
    parse_line(store, "preambleTime:250\r\n")
    assert store.preamble_time == 250


def test_parse_line_splits_on_first_delimiter():
    store = ConfigStore()
    with pytest.raises(InvalidEncoding):
        parse_line(store, "deviceId:AB:extra")
    assert store.device_id == 0


def test_parse_line_without_delimiter():
    store = ConfigStore()
    with pytest.raises(MalformedLine):
        parse_line(store, "nocolonhere")
    assert store.to_bytes() == ConfigStore().to_bytes()


def test_parse_line_unknown_key():
    with pytest.raises(UnknownKey):
        parse_line(ConfigStore(), "channel:01")


def test_load_lines():
    store = ConfigStore()
    result = load_lines(store, SAMPLE.splitlines(keepends=True))
    assert result.ok
    assert len(result.applied) == 7
    assert store.group_id == 0xAB
    assert store.gw_mask == 0xF
    assert store.enc_key.hex().upper() == "2B7E151628AED2A6ABF7158809CF4F3C"


def test_load_lines_skips_bad_lines(caplog):
    store = ConfigStore()
    lines = ["deviceId:05", "garbage", "", "color:blue", "rsf:09"]
    with caplog.at_level(logging.WARNING):
        result = load_lines(store, lines)
    assert result.applied == ["deviceId", "rsf"]
    assert [number for number, _ in result.skipped] == [2, 4]
    assert not result.ok
    assert store.device_id == 5
    assert store.rsf == 9
    assert "Line 2" in caplog.text


def test_load_lines_strict_raises_on_bad_value():
    store = ConfigStore()
    with pytest.raises(InvalidEncoding):
        load_lines(store, ["deviceId:05", "groupId:XYZW", "rsf:09"])
    assert store.device_id == 5
    assert store.group_id == 0


def test_load_lines_non_strict_skips_bad_value():
    store = ConfigStore()
    result = load_lines(store, ["groupId:XYZW", "rsf:09"], strict=False)
    assert result.applied == ["rsf"]
    assert result.skipped[0][0] == 1
    assert store.group_id == 0


def test_load_config_file(tmp_path):
    path = tmp_path / "node.cfg"
    path.write_bytes(SAMPLE.replace("\n", "\r\n").encode("ascii"))
    store = ConfigStore()
    result = load_config(store, path)
    assert result.ok
    assert store.preamble_time == 100


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(ConfigStore(), tmp_path / "missing")


def test_format_config_order():
    store = ConfigStore()
    store.set("deviceId", "0A")
    lines = format_config(store).splitlines()
    assert lines[0] == "deviceId:0A"
    assert lines[5] == "preambleTime:0"
    assert len(lines) == 7


def test_save_then_load(tmp_path):
    original = ConfigStore()
    load_lines(original, SAMPLE.splitlines())
    path = save_config(original, tmp_path / "Nodes" / "node")
    assert path.exists()

    loaded = ConfigStore()
    load_config(loaded, path)
    assert loaded == original


def test_parse_line_accepts_ascii_bytes():
    store = ConfigStore()
    assert parse_line(store, b"rsf:0B\n") == "rsf"
    assert store.rsf == 0x0B


def test_parse_line_non_ascii_bytes():
    store = ConfigStore()
    with pytest.raises(InvalidEncoding):
        parse_line(store, b"rsf:\xff7\n")
    assert store.rsf == 0


def test_load_config_non_ascii_line_strict(tmp_path):
    path = tmp_path / "node.cfg"
    path.write_bytes(b"deviceId:01\nrsf:\xff7\n")
    store = ConfigStore()
    with pytest.raises(InvalidEncoding):
        load_config(store, path)
    assert store.device_id == 1


def test_load_config_non_ascii_line_non_strict(tmp_path):
    path = tmp_path / "node.cfg"
    path.write_bytes(b"deviceId:01\nrsf:\xff7\ngroupId:00AB\n")
    store = ConfigStore()
    result = load_config(store, path, strict=False)
    assert result.applied == ["deviceId", "groupId"]
    assert [number for number, _ in result.skipped] == [2]
    assert store.rsf == 0
    assert store.group_id == 0xAB
