from __future__ import annotations

from typing import Iterable, Sequence

from .rules import DELIMITER, NEWLINE, QUOTE

_NEEDS_QUOTING = (DELIMITER, QUOTE, NEWLINE)


def quote_cell(cell: str) -> str:
    """Quote a cell only if it holds a delimiter, a quote or a newline."""
    if any(token in cell for token in _NEEDS_QUOTING):
        return QUOTE + cell.replace(QUOTE, QUOTE * 2) + QUOTE
    return cell


def serialize(rows: Iterable[Sequence[str]]) -> str:
    # no trailing newline; hosts add one when writing to a stream
    return NEWLINE.join(DELIMITER.join(quote_cell(c) for c in row) for row in rows)
