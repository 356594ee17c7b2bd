from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Union

from .codec import Direction, tail_hex, transform
from .models import RunOutcome

logger = logging.getLogger(__name__)

# -------------------- Naming / limits --------------------
SUFFIX = ".encrypted"
FALLBACK_SUFFIX = ".decrypted"
CHUNK_SIZE = 1024 * 1024  # 1 MiB per progress step

PathLike = Union[str, Path]
ProgressCallback = Callable[[int, int], None]
DoneCallback = Callable[[RunOutcome], None]


# -------------------- Errors --------------------
class FileOpError(Exception):
    kind = "file_op"

    def __init__(self, path: PathLike, message: str):
        super().__init__(message)
        self.path = Path(path)


class OpenForReadError(FileOpError):
    kind = "open_for_read"

    def __init__(self, path: PathLike, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(path, f"Failed to open file for reading: {path}{detail}")


class OpenForWriteError(FileOpError):
    kind = "open_for_write"

    def __init__(self, path: PathLike, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(path, f"Failed to open output file for writing: {path}{detail}")


class WriteFailureError(FileOpError):
    kind = "write_failure"

    def __init__(self, path: PathLike, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(path, f"Failed while writing output file: {path}{detail}")


class InvalidNameError(FileOpError):
    kind = "invalid_name"

    def __init__(self, path: PathLike):
        name = Path(path).name
        if name == SUFFIX:
            message = f"File name is only the '{SUFFIX}' marker, nothing to restore: {path}"
        else:
            message = f"File name does not end with '{SUFFIX}': {path}"
        super().__init__(path, message)


class OperationCancelled(RuntimeError):
    pass


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


# -------------------- Path derivation --------------------
def has_marker(name: str) -> bool:
    # trailing marker with a non-empty stem in front of it
    return name.endswith(SUFFIX) and len(name) > len(SUFFIX)


def encoded_path(path: PathLike) -> Path:
    return Path(str(path) + SUFFIX)


def decoded_path(path: PathLike, strict: bool = True) -> Path:
    """Strip the trailing ``.encrypted`` marker from ``path``.

    Only a trailing marker counts; one in the middle of a name is left alone.
    Without the marker, strict mode raises :class:`InvalidNameError` and
    non-strict mode appends ``.decrypted`` instead.
    """
    path = Path(path)
    name = path.name
    if has_marker(name):
        return path.with_name(name[: -len(SUFFIX)])
    if strict:
        raise InvalidNameError(path)
    return Path(str(path) + FALLBACK_SUFFIX)


def output_path_for(
    in_path: PathLike,
    direction: Direction,
    out_dir: Optional[PathLike] = None,
    strict: bool = True,
) -> Path:
    if Direction(direction) is Direction.ENCODE:
        target = encoded_path(in_path)
    else:
        target = decoded_path(in_path, strict=strict)
    if out_dir is not None:
        target = Path(out_dir) / target.name
    return target


# -------------------- Runner --------------------
def _read_all(in_path: Path) -> bytes:
    try:
        with open(in_path, "rb") as fin:
            return fin.read()
    except OSError as exc:
        raise OpenForReadError(in_path, _reason(exc)) from exc


def _transform_chunks(
    data: bytes,
    direction: Direction,
    progress_cb: Optional[ProgressCallback],
    stop_flag: Optional[threading.Event],
) -> bytes:
    total = len(data)
    parts = []
    processed = 0
    for offset in range(0, total, CHUNK_SIZE):
        if stop_flag and stop_flag.is_set():
            raise OperationCancelled(f"{direction.value.capitalize()} cancelled by user")
        chunk = data[offset : offset + CHUNK_SIZE]
        parts.append(transform(chunk, direction))
        processed += len(chunk)
        if progress_cb:
            progress_cb(processed, total)
    return b"".join(parts)


def _write_all(out_path: Path, payload: bytes) -> None:
    try:
        fout = open(out_path, "wb")
    except OSError as exc:
        raise OpenForWriteError(out_path, _reason(exc)) from exc
    try:
        with fout:
            fout.write(payload)
    except OSError as exc:
        out_path.unlink(missing_ok=True)
        raise WriteFailureError(out_path, _reason(exc)) from exc


def run(
    in_path: PathLike,
    direction: Direction,
    *,
    out_dir: Optional[PathLike] = None,
    strict: bool = True,
    progress_cb: Optional[ProgressCallback] = None,
    done_cb: Optional[DoneCallback] = None,
    stop_flag: Optional[threading.Event] = None,
) -> Path:
    """Read ``in_path``, shift every byte in ``direction`` and write the sibling file.

    Returns the output path. Failures raise a :class:`FileOpError` subclass
    (or :class:`OperationCancelled`) after being reported to ``done_cb``;
    anything unexpected, such as ``MemoryError``, is reported the same way
    and re-raised unchanged.
    The output file is only opened once the whole buffer has been transformed,
    so a failed or cancelled run never leaves a partial file behind.
    """
    in_path = Path(in_path)
    direction = Direction(direction)
    size = 0
    try:
        data = _read_all(in_path)
        size = len(data)
        logger.debug("Last %d file bytes: %s", len(tail_hex(data)), " ".join(tail_hex(data)))

        out_path = output_path_for(in_path, direction, out_dir=out_dir, strict=strict)
        logger.info("%s %s -> %s", direction.value.capitalize(), in_path, out_path)

        result = _transform_chunks(data, direction, progress_cb, stop_flag)
        _write_all(out_path, result)
    except (FileOpError, OperationCancelled) as exc:
        logger.warning("%s", exc)
        if done_cb:
            done_cb(RunOutcome(direction, in_path, error=exc, size=size))
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while processing %s", in_path)
        if done_cb:
            done_cb(RunOutcome(direction, in_path, error=exc, size=size))
        raise

    logger.info("Wrote %d bytes to %s", size, out_path)
    if done_cb:
        done_cb(RunOutcome(direction, in_path, output_path=out_path, size=size))
    return out_path


def encode_file(in_path: PathLike, **kwargs) -> Path:
    return run(in_path, Direction.ENCODE, **kwargs)


def decode_file(in_path: PathLike, **kwargs) -> Path:
    return run(in_path, Direction.DECODE, **kwargs)
