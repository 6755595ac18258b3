"""
Byte input -> text.

Rules:
- Detect encoding best-effort via charset-normalizer.
- A UTF-8 BOM is stripped (decode as utf-8-sig).
- If the detected encoding fails, try utf-8, then decode with replacement
  characters so the pipeline always gets text.
- Newline styles are counted for the report; the parser does the actual
  CRLF/CR -> LF normalization.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def _is_utf8(name: str) -> bool:
    return name.lower().replace("-", "_") in ("utf_8", "utf8")


def newline_counts(text: str) -> Dict[str, int]:
    crlf = text.count("\r\n")
    return {
        "crlf": crlf,
        "cr": text.count("\r") - crlf,
        "lf": text.count("\n") - crlf,
    }


def decode_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and _is_utf8(decode_used):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        logger.warning("Decoding as %s failed, fell back to %s", detected, decode_used)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "newlines": newline_counts(text),
    }
    return text, report
