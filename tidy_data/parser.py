"""
Quote-aware CSV parsing.

A single left-to-right scan over the text. Quoted fields may hold
delimiters, newlines and doubled quotes; an unterminated quote is recovered
by flushing whatever is buffered at end of input.
"""

from __future__ import annotations

from typing import List

from .rules import DELIMITER, NEWLINE, QUOTE

Row = List[str]
Table = List[Row]


def normalize_newlines(text: str) -> str:
    """CRLF/CR -> LF."""
    return text.replace("\r\n", NEWLINE).replace("\r", NEWLINE)


def is_blank_row(row: Row) -> bool:
    return "".join(row).strip() == ""


def parse(text: str) -> Table:
    """
    Parse CSV text into rows of trimmed cells.

    Rules:
    - `""` inside a quoted field is one literal quote.
    - Delimiters and newlines inside quotes are kept verbatim.
    - Every field is trimmed when it is flushed (quoted or not).
    - Input without a trailing newline still yields its last row.
    - Rows with no content at all (blank lines, `,,,`) are dropped here,
      not in the cleaning pipeline.
    """
    text = normalize_newlines(text)

    rows: Table = []
    row: Row = []
    field: List[str] = []
    in_quotes = False

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == DELIMITER and not in_quotes:
            row.append("".join(field).strip())
            field = []
        elif ch == NEWLINE and not in_quotes:
            row.append("".join(field).strip())
            rows.append(row)
            row = []
            field = []
        else:
            field.append(ch)
        i += 1

    # Unterminated quotes end up here too; flush instead of failing.
    if field or row:
        row.append("".join(field).strip())
        rows.append(row)

    return [r for r in rows if not is_blank_row(r)]
