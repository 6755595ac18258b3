"""
Cell normalization.

Responsibilities:
- generic cell cleanup (whitespace collapsing, title casing of plain words)
- domain canonicalization for recognized columns (country, occupation)
- chaining: every normalizer is a plain `cell -> cell` function, and a
  NormalizerChain applies a list of them left-to-right

Lookup tables are parameters with defaults from `rules`, so the functions
have no hidden state and can be tested in isolation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .rules import ACRONYMS, COUNTRY_ALIASES, COUNTRY_COLUMN, OCCUPATION_COLUMN

CellNormalizer = Callable[[str], str]

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace to one space and trim the edges."""
    return _WHITESPACE.sub(" ", value).strip()


_PLAIN_WORDS = re.compile(r"[A-Za-z ]+")


def _is_plain_words(value: str) -> bool:
    # ASCII only; casing must be stable on a second pass
    return _PLAIN_WORDS.fullmatch(value) is not None


def title_case_words(value: str) -> str:
    """
    Title-case a cell made only of ASCII letters and spaces.

    Anything holding digits, punctuation or symbols (emails, ids, prices)
    is returned as is.
    """
    if not _is_plain_words(value):
        return value
    return " ".join(w.capitalize() for w in value.split(" "))


class NormalizerChain:
    """
    An ordered chain of cell normalizers.
    Each stage takes the output of the previous one, so new rules are
    added by building a new chain with `then` rather than editing this one.
    Stages are stored as a tuple, so shared chains cannot be altered.
    """

    def __init__(self, stages: Iterable[CellNormalizer]):
        self.stages: Tuple[CellNormalizer, ...] = tuple(stages)

    def __call__(self, value: str) -> str:
        for stage in self.stages:
            value = stage(value)
        return value

    def __len__(self) -> int:
        return len(self.stages)

    def then(self, *stages: CellNormalizer) -> "NormalizerChain":
        """Return a new chain with `stages` appended."""
        return NormalizerChain((*self.stages, *stages))

    def apply_row(self, row: Sequence[str]) -> List[str]:
        return [self(cell) for cell in row]


WHITESPACE_CHAIN = NormalizerChain([collapse_whitespace])
DEFAULT_CELL_CHAIN = WHITESPACE_CHAIN.then(title_case_words)


def normalize_cell(value: str, title_case: bool = True) -> str:
    """
    Collapse whitespace and, by default, title-case plain word cells.

    With the default `title_case=True`, `"  a   b  "` becomes `"A B"`; pass
    `title_case=False` for whitespace cleanup alone (`"a b"`).
    """
    chain = DEFAULT_CELL_CHAIN if title_case else WHITESPACE_CHAIN
    return chain(value)


# --- Domain normalizers ---

def normalize_country(value: str, aliases: Mapping[str, str] = COUNTRY_ALIASES) -> str:
    """Map common country spellings to a canonical label; unknown values are uppercased."""
    key = collapse_whitespace(value).upper()
    return aliases.get(key, key)


def normalize_occupation(value: str, acronyms: Iterable[str] = ACRONYMS) -> str:
    """Title-case a job title, keeping known acronyms (CEO, HR, UI/UX...) uppercase."""
    known = {a.upper() for a in acronyms}
    words = []
    for word in value.split():
        upper = word.upper()
        words.append(upper if upper in known else word.capitalize())
    return " ".join(words)


# --- Column rules ---

@dataclass(frozen=True)
class ColumnRule:
    name: str
    pattern: re.Pattern
    normalizer: CellNormalizer

    def matches(self, column_name: str) -> bool:
        return self.pattern.search(column_name) is not None


DEFAULT_COLUMN_RULES = (
    ColumnRule("country", COUNTRY_COLUMN, normalize_country),
    ColumnRule("occupation", OCCUPATION_COLUMN, normalize_occupation),
)


def build_column_rules(
    aliases: Mapping[str, str] = COUNTRY_ALIASES,
    acronyms: Iterable[str] = ACRONYMS,
) -> tuple:
    """Default column rules bound to custom lookup tables."""
    return (
        ColumnRule("country", COUNTRY_COLUMN, partial(normalize_country, aliases=aliases)),
        ColumnRule("occupation", OCCUPATION_COLUMN, partial(normalize_occupation, acronyms=frozenset(acronyms))),
    )


def column_normalizers(
    header: Optional[Sequence[str]],
    rules: Sequence[ColumnRule] = DEFAULT_COLUMN_RULES,
) -> Dict[int, NormalizerChain]:
    """
    Resolve header names to per-column chains.

    The first rule whose pattern matches a column name wins for that
    column. Without a header nothing is resolved.
    """
    resolved: Dict[int, NormalizerChain] = {}
    if not header:
        return resolved
    for index, name in enumerate(header):
        for rule in rules:
            if rule.matches(name):
                resolved[index] = NormalizerChain([rule.normalizer])
                break
    return resolved


def apply_column_normalizers(row: Sequence[str], chains: Mapping[int, NormalizerChain]) -> List[str]:
    out = list(row)
    for index, chain in chains.items():
        # ragged rows: columns past the end are simply absent
        if index < len(out):
            out[index] = chain(out[index])
    return out
