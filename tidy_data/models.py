from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class CleaningOptions(BaseModel):
    trim_and_normalize_whitespace: bool = True
    remove_empty_rows: bool = True
    deduplicate: bool = True
    dedupe_column_index: Optional[int] = Field(default=None, ge=0)
    # refinements on top of the four toggles above
    detect_email_column: bool = True
    apply_column_rules: bool = True
    normalize_header: bool = False


class CleaningResult(BaseModel):
    rows: List[List[str]] = Field(default_factory=list)
    header: Optional[List[str]] = None
    original_row_count: int = 0
    cleaned_row_count: int = 0

    @property
    def body(self) -> List[List[str]]:
        return self.rows[1:] if self.header is not None else self.rows

    @property
    def removed_row_count(self) -> int:
        return self.original_row_count - self.cleaned_row_count


# --- HTTP envelopes ---

class CleanedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content: str


class CleanStats(BaseModel):
    original_rows: int
    cleaned_rows: int
    removed_rows: int
    columns: Optional[int] = Field(default=None, examples=[None])


class CleanResponse(BaseModel):
    cleaned_csv: CleanedCsv
    preview: str
    preview_truncated: bool = False
    stats: CleanStats
    decoding: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    ok: bool = True
