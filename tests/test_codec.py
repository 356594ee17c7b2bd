from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from byteshift.codec import Direction, decode_byte, encode_byte, tail_hex, transform


def test_encode_wraps_high_byte() -> None:
    assert transform(bytes([0x00, 0xFF, 0x7F]), Direction.ENCODE) == bytes([0x01, 0x00, 0x80])


def test_decode_wraps_low_byte() -> None:
    assert transform(bytes([0x01, 0x00, 0x80]), Direction.DECODE) == bytes([0x00, 0xFF, 0x7F])


def test_every_byte_value_round_trips() -> None:
    for value in range(256):
        assert decode_byte(encode_byte(value)) == value
        assert encode_byte(value) != value


def test_encode_byte_is_a_permutation() -> None:
    assert sorted(encode_byte(v) for v in range(256)) == list(range(256))
    assert sorted(decode_byte(v) for v in range(256)) == list(range(256))


@pytest.mark.parametrize(
    "data",
    [b"", b"\x00", b"hello world", bytes(range(256)) * 3],
)
def test_round_trip_preserves_content_and_length(data: bytes) -> None:
    encoded = transform(data, Direction.ENCODE)
    assert len(encoded) == len(data)
    assert transform(encoded, Direction.DECODE) == data


def test_transform_accepts_bytearray_and_string_direction() -> None:
    assert transform(bytearray(b"abc"), "encode") == b"bcd"


def test_tail_hex_limits_to_last_bytes() -> None:
    data = bytes(range(20))
    assert tail_hex(data) == [f"{v:02x}" for v in range(4, 20)]
    assert tail_hex(b"\x0a\xff") == ["0a", "ff"]
    assert tail_hex(b"") == []
    assert tail_hex(data, count=0) == []
