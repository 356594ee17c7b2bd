"""Byte-shift transform: +1 per byte to encode, -1 per byte to decode (mod 256).

This is an obfuscation toy, not encryption.
"""

from __future__ import annotations

from enum import Enum

TAIL_BYTES = 16


class Direction(str, Enum):
    ENCODE = "encode"
    DECODE = "decode"


def encode_byte(value: int) -> int:
    return (value + 1) % 256


def decode_byte(value: int) -> int:
    return (value - 1) % 256


_TABLES = {
    Direction.ENCODE: bytes(encode_byte(v) for v in range(256)),
    Direction.DECODE: bytes(decode_byte(v) for v in range(256)),
}


def transform(data: bytes, direction: Direction) -> bytes:
    """Shift every byte of ``data`` one step in ``direction``.

    Output has the same length as the input; an empty buffer gives an empty buffer.
    """
    return bytes(data).translate(_TABLES[Direction(direction)])


def tail_hex(data: bytes, count: int = TAIL_BYTES) -> list[str]:
    # last `count` bytes as two-digit hex, oldest first
    if count <= 0:
        return []
    return [f"{b:02x}" for b in data[-count:]]
