import hashlib
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from .clean import clean_text
from .decoding import decode_bytes
from .models import CleanedCsv, CleaningOptions, CleaningResult, CleanResponse, CleanStats, HealthResponse
from .rules import TARGET_ENCODING
from .serializer import serialize
from .settings import Settings, get_settings
from .setup_logging import setup_logging

setup_logging(get_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="tidy-data",
    description="Local CSV cleanup: whitespace, casing, empty rows and duplicates",
    version="0.1.0",
)


def cleaning_form(
    has_header: bool = Form(True),
    trim_whitespace: bool = Form(True),
    remove_empty_rows: bool = Form(True),
    deduplicate: bool = Form(True),
    dedupe_column: Optional[int] = Form(None, ge=0),
) -> Tuple[bool, CleaningOptions]:
    options = CleaningOptions(
        trim_and_normalize_whitespace=trim_whitespace,
        remove_empty_rows=remove_empty_rows,
        deduplicate=deduplicate,
        dedupe_column_index=dedupe_column,
    )
    return has_header, options


async def read_input(
    file: Optional[UploadFile],
    text: Optional[str],
    settings: Settings,
) -> Tuple[str, Dict[str, Any]]:
    """Pick the uploaded file over pasted text; reject empty input."""
    decoding: Dict[str, Any] = {}
    if file is not None and file.filename:
        if not file.filename.lower().endswith(".csv"):
            raise HTTPException(status_code=422, detail="Only CSV files are supported")
        # limit + 1 bytes is enough to tell an oversized upload
        raw = await file.read(settings.MAX_UPLOAD_BYTES + 1)
        if len(raw) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(status_code=413, detail="Upload too large")
        text, decoding = decode_bytes(raw)

    if not text or not text.strip():
        raise HTTPException(status_code=400, detail="No input provided")
    return text, decoding


def _column_count(result: CleaningResult) -> Optional[int]:
    if result.header is not None:
        return len(result.header)
    if result.rows:
        return max(len(r) for r in result.rows)
    return None


def _preview(result: CleaningResult, limit: int) -> Tuple[str, bool]:
    # the header counts toward the limit
    return serialize(result.rows[:limit]), len(result.rows) > limit


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/clean", response_model=CleanResponse)
async def clean_csv(
    file: Optional[UploadFile] = File(None),
    text: Optional[str] = Form(None),
    form: Tuple[bool, CleaningOptions] = Depends(cleaning_form),
    settings: Settings = Depends(get_settings),
):
    has_header, options = form
    text, decoding = await read_input(file, text, settings)

    result = clean_text(text, options, has_header=has_header)
    content = serialize(result.rows)
    preview, truncated = _preview(result, settings.PREVIEW_ROWS)

    return CleanResponse(
        cleaned_csv=CleanedCsv(
            sha256=hashlib.sha256(content.encode(TARGET_ENCODING)).hexdigest(),
            encoding=TARGET_ENCODING,
            content=content,
        ),
        preview=preview,
        preview_truncated=truncated,
        stats=CleanStats(
            original_rows=result.original_row_count,
            cleaned_rows=result.cleaned_row_count,
            removed_rows=result.removed_row_count,
            columns=_column_count(result),
        ),
        decoding=decoding,
    )


@app.post("/clean/download")
async def download_csv(
    file: Optional[UploadFile] = File(None),
    text: Optional[str] = Form(None),
    form: Tuple[bool, CleaningOptions] = Depends(cleaning_form),
    settings: Settings = Depends(get_settings),
):
    has_header, options = form
    text, _ = await read_input(file, text, settings)

    result = clean_text(text, options, has_header=has_header)
    logger.info("Download: %d -> %d rows", result.original_row_count, result.cleaned_row_count)
    return Response(
        content=serialize(result.rows) + "\n" if result.rows else "",
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{settings.DOWNLOAD_FILENAME}"'},
    )
