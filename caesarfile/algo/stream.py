# caesarfile/algo/stream.py
"""Streaming application of the byte cipher from a source to a sink.

One linear pass, at most one block in memory. Failures surface as the typed
errors in caesarfile.algo.errors; partial output of a failed write is left
in the sink.
"""
import logging, os
from typing import BinaryIO, Optional, Union
from caesarfile.algo.caesar import Direction, normalize_key, transform_block
from caesarfile.algo.errors import (
    CipherError, InvalidStreamError, ReadError, SinkOpenError, SourceOpenError, WriteError,
)
from caesarfile.utils import settings

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

def _handle_name(handle) -> Optional[str]:
    name = getattr(handle, "name", None)
    return name if isinstance(name, str) else None

def process_stream(
    source: BinaryIO,
    sink: BinaryIO,
    key: int,
    direction: Direction = Direction.ENCRYPT,
    block_size: Optional[int] = None,
) -> int:
    """Transform every byte of source into sink, in order. Returns the byte count."""
    if source is None or sink is None:
        raise InvalidStreamError("source and sink are required")
    if source is sink:
        raise InvalidStreamError("source and sink must be distinct streams")
    if block_size is None:
        block_size = settings.BLOCK_SIZE
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    direction = Direction(direction)
    normalize_key(key)

    src_name, dst_name = _handle_name(source), _handle_name(sink)
    processed = 0
    while True:
        try:
            block = source.read(block_size)
        except OSError as e:
            raise ReadError(f"failed to read source after {processed} bytes", src_name) from e
        if not block:
            break
        if not isinstance(block, (bytes, bytearray, memoryview)):
            raise InvalidStreamError("source must be opened in binary mode")

        out = transform_block(block, key, direction)
        try:
            written = sink.write(out)
        except OSError as e:
            raise WriteError(
                f"failed to write output after {processed} bytes", dst_name, bytes_written=processed
            ) from e
        # non-blocking raw handles return None when nothing was written
        if written is None:
            raise WriteError(
                f"sink accepted none of {len(out)} bytes", dst_name, bytes_written=processed
            )
        # raw handles may accept fewer bytes than offered
        if written != len(out):
            raise WriteError(
                f"short write: {written} of {len(out)} bytes accepted",
                dst_name, bytes_written=processed + max(written, 0),
            )
        processed += len(out)

    try:
        sink.flush()
    except OSError as e:
        raise WriteError("failed to flush output", dst_name, bytes_written=processed) from e
    return processed

def process_file(
    input_path: PathLike,
    output_path: PathLike,
    key: int,
    direction: Direction = Direction.ENCRYPT,
    block_size: Optional[int] = None,
) -> int:
    if input_path is None or output_path is None or not os.fspath(input_path) or not os.fspath(output_path):
        raise InvalidStreamError("input and output paths are required")
    direction = Direction(direction)
    normalize_key(key)
    src_path, dst_path = os.fspath(input_path), os.fspath(output_path)

    logger.info("%s '%s' -> '%s' with key %d", direction.value, src_path, dst_path, key)
    processed = 0
    try:
        # source first: a missing input never creates the output file
        try:
            src = open(src_path, "rb")
        except OSError as e:
            raise SourceOpenError(f"could not open input file '{src_path}' for reading", src_path) from e
        with src:
            try:
                dst = open(dst_path, "wb")
            except OSError as e:
                raise SinkOpenError(f"could not open output file '{dst_path}' for writing", dst_path) from e
            try:
                processed = process_stream(src, dst, key, direction, block_size)
            except BaseException as e:
                # the processing error wins over a failing close
                try:
                    dst.close()
                except OSError as close_exc:
                    logger.warning("closing '%s' after %s also failed: %s", dst_path, e, close_exc)
                raise
            try:
                dst.close()
            except OSError as e:
                raise WriteError(f"failed to close output file '{dst_path}'", dst_path, bytes_written=processed) from e
    except CipherError as e:
        logger.error("%s failed: %s", direction.value, e)
        raise

    logger.info("%s completed, processed %d bytes", direction.value, processed)
    return processed

def encrypt_file(input_path: PathLike, output_path: PathLike, key: int) -> int:
    return process_file(input_path, output_path, key, Direction.ENCRYPT)

def decrypt_file(input_path: PathLike, output_path: PathLike, key: int) -> int:
    return process_file(input_path, output_path, key, Direction.DECRYPT)
