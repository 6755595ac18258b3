"""
Duplicate row removal.

A key function maps each row to its identity; the first row seen for a key
is kept. An optional `prefer(kept, candidate)` rule may swap the kept row
for a later one. The only shipped rule is the lowercase-email tie-break.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from .rules import EMAIL_COLUMN, KEY_SEPARATOR

Row = List[str]
KeyFunc = Callable[[Sequence[str]], str]
PreferRule = Callable[[Sequence[str], Sequence[str]], bool]

_PUNCTUATION = re.compile(r"[^\w\s]+")
_WHITESPACE = re.compile(r"\s+")


def whole_row_key(row: Sequence[str]) -> str:
    return KEY_SEPARATOR.join(row).lower()


def _cell(row: Sequence[str], index: int) -> str:
    # Out-of-range columns read as "" so short rows share one key.
    return row[index] if 0 <= index < len(row) else ""


def column_key(index: int) -> KeyFunc:
    def key(row: Sequence[str]) -> str:
        return _cell(row, index).strip().lower()

    return key


def row_signature(row: Sequence[str]) -> str:
    """Loose whole-row identity: lowercased, punctuation and whitespace collapsed."""
    text = _PUNCTUATION.sub(" ", " ".join(row).lower())
    return _WHITESPACE.sub(" ", text).strip()


def email_key(index: int) -> KeyFunc:
    def key(row: Sequence[str]) -> str:
        email = _cell(row, index).strip().lower()
        return email if email else row_signature(row)

    return key


def find_email_column(header: Optional[Sequence[str]]) -> Optional[int]:
    if not header:
        return None
    for index, name in enumerate(header):
        if EMAIL_COLUMN.search(name):
            return index
    return None


def prefer_lowercase_email(index: int) -> PreferRule:
    """
    Tie-break for rows sharing an email key.

    The later row replaces the kept one only when both emails differ just in
    case and the later one is all lowercase while the kept one is not.
    """
    def prefer(kept: Sequence[str], candidate: Sequence[str]) -> bool:
        old = _cell(kept, index).strip()
        new = _cell(candidate, index).strip()
        if old == new or old.lower() != new.lower():
            return False
        return new == new.lower() and old != old.lower()

    return prefer


def deduplicate(
    rows: Sequence[Sequence[str]],
    key: KeyFunc = whole_row_key,
    prefer: Optional[PreferRule] = None,
) -> List[Row]:
    """
    Drop rows whose key was already seen.

    Order follows first occurrence; a row that replaced an earlier one takes
    the position of the replacing occurrence.
    """
    kept: Dict[str, Row] = {}
    for row in rows:
        k = key(row)
        if k not in kept:
            kept[k] = list(row)
        elif prefer is not None and prefer(kept[k], row):
            del kept[k]
            kept[k] = list(row)
    return list(kept.values())


@dataclass(frozen=True)
class DedupeStrategy:
    name: str
    key: KeyFunc
    prefer: Optional[PreferRule] = None

    def apply(self, rows: Sequence[Sequence[str]]) -> List[Row]:
        return deduplicate(rows, self.key, self.prefer)


def select_dedupe_strategy(
    dedupe_column_index: Optional[int],
    header: Optional[Sequence[str]] = None,
    detect_email_column: bool = True,
) -> DedupeStrategy:
    """
    Pick the identity key for a run.

    An explicit column wins. Otherwise a header column named like `email`
    becomes the key (with the lowercase-email tie-break), falling back to the
    case-insensitive whole row.
    """
    if dedupe_column_index is not None:
        return DedupeStrategy(f"column:{dedupe_column_index}", column_key(dedupe_column_index))

    if detect_email_column:
        email_index = find_email_column(header)
        if email_index is not None:
            return DedupeStrategy(
                f"email:{email_index}",
                email_key(email_index),
                prefer_lowercase_email(email_index),
            )

    return DedupeStrategy("row", whole_row_key)
