#!/usr/bin/env python3
"""
Chunked reads, stream copies and gzip compression from the command line.

Usage:
  python scripts/stream_files.py chunks big.txt [--chunk-size 65536]
  python scripts/stream_files.py copy source.txt dest.txt
  python scripts/stream_files.py compress source.txt data.txt.gz
  python scripts/stream_files.py decompress data.txt.gz restored.txt
  python scripts/stream_files.py demo ./sandbox
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from user_api.core.config import get_settings
from user_api.core.logging_config import setup_logging
from user_api.services.file_streams import (
    CHUNK_SIZE,
    FileStreamError,
    compress_file,
    copy_file,
    create_sample_files,
    decompress_file,
    describe_chunks,
)


def run_demo(directory: Path) -> None:
    """Create the sample files, then read, copy and compress them in turn."""
    big, source = create_sample_files(directory)
    describe_chunks(big)
    copy_file(source, directory / "dest.txt")
    compress_file(source, directory / "data.txt.gz")


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="File streaming helpers")
    sub = ap.add_subparsers(dest="command", required=True)

    chunks = sub.add_parser("chunks", help="Read a file in chunks and preview each one")
    chunks.add_argument("path")
    chunks.add_argument("--chunk-size", type=int, default=CHUNK_SIZE)

    for name, help_text in (
        ("copy", "Copy a file using streams"),
        ("compress", "Gzip a file"),
        ("decompress", "Gunzip a file"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("source")
        p.add_argument("dest")

    demo = sub.add_parser("demo", help="Create sample files and run every helper on them")
    demo.add_argument("directory", nargs="?", default=".")

    args = ap.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    if args.command == "chunks":
        if args.chunk_size <= 0:
            ap.error("--chunk-size must be positive")
        describe_chunks(args.path, args.chunk_size)
    elif args.command == "copy":
        copy_file(args.source, args.dest)
    elif args.command == "compress":
        compress_file(args.source, args.dest)
    elif args.command == "decompress":
        decompress_file(args.source, args.dest)
    else:
        run_demo(Path(args.directory))


if __name__ == "__main__":
    try:
        main()
    except FileStreamError as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
