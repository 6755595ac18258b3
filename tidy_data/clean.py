"""
Cleaning pipeline: normalize -> drop empty rows -> deduplicate.

Whether row 0 is a header is the caller's call; `split_header` does the
split and `clean` only ever counts and filters body rows.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .dedupe import select_dedupe_strategy
from .models import CleaningOptions, CleaningResult
from .normalize import (
    DEFAULT_CELL_CHAIN,
    DEFAULT_COLUMN_RULES,
    ColumnRule,
    NormalizerChain,
    apply_column_normalizers,
    column_normalizers,
)
from .parser import is_blank_row, parse

logger = logging.getLogger(__name__)

Row = List[str]


def split_header(table: Sequence[Sequence[str]], has_header: bool) -> Tuple[Optional[Row], List[Row]]:
    rows = [list(r) for r in table]
    if has_header and rows:
        return rows[0], rows[1:]
    return None, rows


def clean(
    rows: Sequence[Sequence[str]],
    options: Optional[CleaningOptions] = None,
    header: Optional[Sequence[str]] = None,
    cell_chain: NormalizerChain = DEFAULT_CELL_CHAIN,
    column_rules: Sequence[ColumnRule] = DEFAULT_COLUMN_RULES,
) -> CleaningResult:
    """
    Clean body `rows` and reattach `header`.

    Steps, each gated by `options`:
    1. generic cell normalization (header too with `normalize_header`)
    2. column rules resolved from the header (country, occupation)
    3. empty row removal
    4. deduplication

    Counts exclude the header. Inputs are never mutated.
    """
    options = options or CleaningOptions()
    body: List[Row] = [list(r) for r in rows]
    head: Optional[Row] = list(header) if header is not None else None
    original = len(body)

    if options.trim_and_normalize_whitespace:
        body = [cell_chain.apply_row(r) for r in body]
        if head is not None and options.normalize_header:
            head = cell_chain.apply_row(head)

    if options.apply_column_rules and head is not None:
        chains = column_normalizers(head, column_rules)
        if chains:
            logger.debug("Column rules applied to columns %s", sorted(chains))
            body = [apply_column_normalizers(r, chains) for r in body]

    if options.remove_empty_rows:
        body = [r for r in body if not is_blank_row(r)]

    if options.deduplicate:
        strategy = select_dedupe_strategy(
            options.dedupe_column_index, head, options.detect_email_column
        )
        logger.debug("Deduplicating with %s key", strategy.name)
        body = strategy.apply(body)

    logger.info("Cleaned rows: %d -> %d", original, len(body))

    return CleaningResult(
        rows=([head] + body) if head is not None else body,
        header=head,
        original_row_count=original,
        cleaned_row_count=len(body),
    )


def clean_text(
    text: str,
    options: Optional[CleaningOptions] = None,
    has_header: bool = True,
) -> CleaningResult:
    """Parse, split off the header if asked to, and clean."""
    header, body = split_header(parse(text), has_header)
    return clean(body, options, header=header)
