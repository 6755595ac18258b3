"""
Deterministic cleaning rules.

Static lookup tables and patterns shared by the parser, the normalizers and
the deduplicator. Everything here is immutable; callers that need different
rules pass their own tables in as parameters.
"""

import re
from types import MappingProxyType

TARGET_ENCODING = "utf-8"
DELIMITER = ","
QUOTE = '"'
NEWLINE = "\n"

# Canonical label -> accepted spellings (compared uppercased, whitespace collapsed)
_COUNTRY_VARIANTS = {
    "USA": ("US", "USA", "U.S.", "U.S.A.", "UNITED STATES", "UNITED STATES OF AMERICA"),
    "UK": ("UK", "U.K.", "UNITED KINGDOM", "ENGLAND", "GREAT BRITAIN"),
    "CANADA": ("CA", "CAN", "CANADA"),
}

COUNTRY_ALIASES = MappingProxyType({
    variant: label
    for label, variants in _COUNTRY_VARIANTS.items()
    for variant in variants
})

ACRONYMS = frozenset({"CEO", "CTO", "CFO", "UI/UX", "HR", "IT", "PM"})

# Header name patterns (case-insensitive substring search)
COUNTRY_COLUMN = re.compile(r"country", re.IGNORECASE)
OCCUPATION_COLUMN = re.compile(r"occupation|job|title", re.IGNORECASE)
EMAIL_COLUMN = re.compile(r"email", re.IGNORECASE)

# Whole-row identity keys join cells with the ASCII unit separator so that
# ["a,b", "c"] and ["a", "b,c"] never collide.
KEY_SEPARATOR = "\x1f"
