"""String helpers for accent-insensitive matching and spreadsheet clean-up."""
from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Optional

# Tokens produced by broken exports of the source spreadsheets.
CORRUPTED_TOKENS = (
    "MILÍMETROS",
    "MILIMETROS",
    "MILÃMETROS",
    "�",
)

_DISALLOWED_CHARS = re.compile(r"[^0-9A-Za-zÀ-ÖØ-öø-ÿ\s@.\-]")
_WHITESPACE = re.compile(r"\s+")
_MOJIBAKE_MARKERS = ("Ã", "Â")


def normalize_string(value: Optional[str]) -> str:
    """Lower-case ``value`` and strip diacritics and surrounding whitespace."""

    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    stripped = "".join(char for char in decomposed if unicodedata.category(char) != "Mn")
    return stripped.lower().strip()


def extract_city(location: Optional[str]) -> str:
    if not location or not location.strip():
        return "N/A"
    return location.strip().split(",")[0].strip() or "N/A"


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def fix_encoding(value: str) -> str:
    """Repair UTF-8 text that was decoded as Latin-1 (``SÃ£o`` -> ``São``)."""

    if not any(marker in value for marker in _MOJIBAKE_MARKERS):
        return value
    try:
        return value.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return value


def strip_tokens(value: str, tokens: Iterable[str] = CORRUPTED_TOKENS) -> str:
    for token in tokens:
        if token in value:
            value = value.replace(token, " ")
    return value


def sanitize_text(value: Optional[object], tokens: Iterable[str] = CORRUPTED_TOKENS) -> str:
    """Clean a spreadsheet cell for display and matching."""

    if value is None:
        return ""
    text = fix_encoding(str(value))
    text = strip_tokens(text, tokens)
    text = _DISALLOWED_CHARS.sub("", text)
    return collapse_whitespace(text)


__all__ = [
    "CORRUPTED_TOKENS",
    "collapse_whitespace",
    "extract_city",
    "fix_encoding",
    "normalize_string",
    "sanitize_text",
    "strip_tokens",
]
