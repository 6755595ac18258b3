"""
tidy-data: local CSV cleanup.

    from tidy_data import clean_text, serialize

    result = clean_text(raw_text, has_header=True)
    print(serialize(result.rows))
"""

from .clean import clean, clean_text, split_header
from .dedupe import deduplicate
from .models import CleaningOptions, CleaningResult
from .normalize import NormalizerChain, normalize_cell, normalize_country, normalize_occupation
from .parser import parse
from .serializer import serialize

__version__ = "0.1.0"

__all__ = [
    "parse",
    "serialize",
    "clean",
    "clean_text",
    "split_header",
    "deduplicate",
    "normalize_cell",
    "normalize_country",
    "normalize_occupation",
    "NormalizerChain",
    "CleaningOptions",
    "CleaningResult",
]
