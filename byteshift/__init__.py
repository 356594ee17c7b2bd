"""Shift every byte of a file by one to "encrypt" it, and back to restore it.

Not real encryption: anyone can reverse it without a key.
"""

from .codec import Direction, decode_byte, encode_byte, tail_hex, transform
from .models import RunOutcome
from .runner import (
    FileOpError,
    InvalidNameError,
    OpenForReadError,
    OpenForWriteError,
    OperationCancelled,
    WriteFailureError,
    decode_file,
    decoded_path,
    encode_file,
    encoded_path,
    run,
)

__version__ = "1.0.0"

__all__ = [
    "Direction",
    "FileOpError",
    "InvalidNameError",
    "OpenForReadError",
    "OpenForWriteError",
    "OperationCancelled",
    "RunOutcome",
    "WriteFailureError",
    "decode_byte",
    "decode_file",
    "decoded_path",
    "encode_byte",
    "encode_file",
    "encoded_path",
    "run",
    "tail_hex",
    "transform",
]
