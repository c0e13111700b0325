"""
File streaming helpers: chunked reads, stream copies and gzip compression.

These work on arbitrary files and share nothing with the user store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator
import gzip
import logging
import shutil

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
PREVIEW_CHARS = 100
BIG_FILE_LINE = "This is test content for streams.\n"
SOURCE_FILE_TEXT = "This is the source file content for testing streams and compression."


class FileStreamError(Exception):
    """Raised when a streaming operation cannot read or write a file."""


def read_in_chunks(path: str | Path, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Yield the UTF-8 text of ``path`` in chunks of at most ``chunk_size`` characters."""
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error reading file %s: %s", path, exc)
        raise FileStreamError(f"Cannot read {path}") from exc


def describe_chunks(path: str | Path, chunk_size: int = CHUNK_SIZE) -> int:
    """Log a short preview of every chunk and return how many were read."""
    logger.info("Reading file in chunks: %s", path)
    count = 0
    for count, chunk in enumerate(read_in_chunks(path, chunk_size), start=1):
        logger.info("Chunk %d: %s...", count, chunk[:PREVIEW_CHARS])
    logger.info("Finished reading. Total chunks: %d", count)
    return count


def _pipe(source: str | Path, dest: str | Path, *, compress: bool = False, decompress: bool = False) -> None:
    opener_in = gzip.open if decompress else open
    opener_out = gzip.open if compress else open
    try:
        with opener_in(source, "rb") as src, opener_out(dest, "wb") as dst:
            shutil.copyfileobj(src, dst, CHUNK_SIZE)
    except (OSError, EOFError) as exc:
        logger.error("Streaming %s -> %s failed: %s", source, dest, exc)
        raise FileStreamError(f"Cannot stream {source} to {dest}") from exc


def copy_file(source: str | Path, dest: str | Path) -> None:
    _pipe(source, dest)
    logger.info("File copied using streams: %s -> %s", source, dest)


def compress_file(source: str | Path, dest: str | Path) -> None:
    """Gzip ``source`` into ``dest`` without loading it in memory."""
    _pipe(source, dest, compress=True)
    logger.info("File compressed successfully: %s -> %s", source, dest)


def decompress_file(source: str | Path, dest: str | Path) -> None:
    _pipe(source, dest, decompress=True)
    logger.info("File decompressed successfully: %s -> %s", source, dest)


def create_sample_files(directory: str | Path) -> tuple[Path, Path]:
    """Write ``big.txt`` and ``source.txt`` into ``directory``."""
    base = Path(directory)
    base.mkdir(parents=True, exist_ok=True)
    big = base / "big.txt"
    source = base / "source.txt"
    big.write_text(BIG_FILE_LINE * 1000, encoding="utf-8")
    source.write_text(SOURCE_FILE_TEXT, encoding="utf-8")
    logger.info("Test files created in %s", base)
    return big, source
