from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .clean import clean_text
from .decoding import decode_bytes
from .models import CleaningOptions
from .serializer import serialize
from .setup_logging import setup_logging

EXIT_SUCCESS = 0
EXIT_NO_INPUT = 1
EXIT_READ_ERROR = 1  # unreadable input or unwritable output


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tidy-data",
        description="Clean a CSV file: trim whitespace, fix casing, drop empty and duplicate rows.",
    )
    parser.add_argument("input", nargs="?", default="-", help="CSV file to read (default: stdin)")
    parser.add_argument("-o", "--output", help="write the cleaned CSV here (default: stdout)")
    parser.add_argument("--no-header", action="store_true", help="treat the first row as data")
    parser.add_argument("--keep-whitespace", action="store_true", help="skip whitespace and casing cleanup")
    parser.add_argument("--keep-empty", action="store_true", help="keep rows that end up empty")
    parser.add_argument("--no-dedupe", action="store_true", help="keep duplicate rows")
    parser.add_argument("--dedupe-column", type=int, metavar="N", help="0-based column used as the identity key")
    parser.add_argument("--log-level", default="WARNING", help="log level for diagnostics on stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.dedupe_column is not None and args.dedupe_column < 0:
        parser.error("--dedupe-column must be 0 or greater")

    setup_logging(args.log_level, stream=sys.stderr)

    try:
        raw = _read(args.input)
    except OSError as exc:
        print(f"tidy-data: cannot read {args.input}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_READ_ERROR

    text, _ = decode_bytes(raw)
    if not text.strip():
        print("tidy-data: no input provided", file=sys.stderr)
        return EXIT_NO_INPUT

    options = CleaningOptions(
        trim_and_normalize_whitespace=not args.keep_whitespace,
        remove_empty_rows=not args.keep_empty,
        deduplicate=not args.no_dedupe,
        dedupe_column_index=args.dedupe_column,
    )
    result = clean_text(text, options, has_header=not args.no_header)
    out = serialize(result.rows)
    if out:
        out += "\n"

    if args.output:
        try:
            Path(args.output).write_text(out, encoding="utf-8")
        except OSError as exc:
            print(f"tidy-data: cannot write {args.output}: {exc.strerror or exc}", file=sys.stderr)
            return EXIT_READ_ERROR
    else:
        sys.stdout.write(out)

    print(f"Rows: {result.original_row_count} → {result.cleaned_row_count}", file=sys.stderr)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
