"""Filter leads out of an uploaded spreadsheet without any network access."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .catalog import (
    ALL_BUCKETS,
    ALL_INDUSTRIES,
    ALL_LOCATIONS,
    INDUSTRY_NOT_SPECIFIED,
    LOCATION_NOT_AVAILABLE,
    NOT_AVAILABLE,
    Catalog,
)
from .ingestion.loaders import load_rows
from .models import Lead
from .synonyms import DEFAULT_SYNONYMS, SynonymTable
from .text import normalize_string, sanitize_text

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

NO_VALID_ROWS_MESSAGE = "No valid data found in the uploaded file."

HEADER_ALIASES: Mapping[str, Sequence[str]] = {
    "first_name": ("First Name", "Nome", "Primeiro Nome", "first_name", "firstname"),
    "last_name": ("Last Name", "Sobrenome", "Último Nome", "last_name", "lastname"),
    "title": ("Title", "Cargo", "Job Title", "Título", "position"),
    "company": ("Company", "Empresa", "Company Name", "organization"),
    "company_email_name": ("Company Name for Emails", "Empresa para Emails"),
    "email": ("Email", "E-mail", "Email Address"),
    "employees": ("# Employees", "Employees", "Funcionários", "Número de Funcionários", "FTEs"),
    "industry": ("Industry", "Setor", "Indústria", "Segmento"),
    "profile_url": ("Person Linkedin Url", "LinkedIn URL", "Linkedin", "LinkedIn Profile"),
    "city": ("City", "Cidade"),
    "state": ("State", "Estado", "UF"),
}

REQUIRED_FIELDS = ("first_name", "last_name", "title", "company")
# Addresses keep characters the cell sanitiser would strip.
_VERBATIM_FIELDS = frozenset({"email", "profile_url"})

_FIRST_NUMBER = re.compile(r"\d+")


class NoValidRowsError(ValueError):
    """Raised when an upload holds no row with the minimum fields."""

    def __init__(self, message: str = NO_VALID_ROWS_MESSAGE) -> None:
        super().__init__(message)


@dataclass(slots=True)
class OfflineRow:
    """One sanitised spreadsheet row in canonical field names."""

    first_name: str
    last_name: str
    title: str
    company: str
    company_email_name: str = ""
    email: str = ""
    employees: str = ""
    industry: str = ""
    profile_url: str = ""
    city: str = ""
    state: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"


@dataclass(slots=True)
class OfflineCriteria:
    job_title: str = ""
    location: str = ""
    industry: str = ""
    employees: str = ALL_BUCKETS
    limit: int = 10


def _alias_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for field_name, aliases in HEADER_ALIASES.items():
        for alias in aliases:
            index.setdefault(normalize_string(alias), field_name)
    return index


_ALIASES = _alias_index()


def canonicalize_row(raw: Mapping[str, Any]) -> Dict[str, str]:
    """Map known header aliases onto canonical field names; unknown headers are dropped."""

    canonical: Dict[str, str] = {}
    for header, value in raw.items():
        field_name = _ALIASES.get(normalize_string(str(header)))
        if field_name is None or field_name in canonical:
            continue
        text = "" if value is None else str(value).strip()
        if text:
            canonical[field_name] = text
    return canonical


def parse_row(raw: Mapping[str, Any]) -> Optional[OfflineRow]:
    """Return a sanitised row, or ``None`` when a required field is missing."""

    canonical = canonicalize_row(raw)
    values = {
        name: (value if name in _VERBATIM_FIELDS else sanitize_text(value))
        for name, value in canonical.items()
    }
    if not all(values.get(name) for name in REQUIRED_FIELDS):
        return None
    return OfflineRow(**values)


def parse_rows(rows: Iterable[Mapping[str, Any]]) -> List[OfflineRow]:
    parsed: List[OfflineRow] = []
    dropped = 0
    for raw in rows:
        row = parse_row(raw)
        if row is None:
            dropped += 1
            continue
        parsed.append(row)
    if dropped:
        LOGGER.warning("Dropped %s rows missing name, title or company", dropped)
    return parsed


def load_offline_file(path: PathLike) -> List[OfflineRow]:
    """Load and sanitise an upload; raise :class:`NoValidRowsError` when nothing is usable."""

    rows = parse_rows(load_rows(path))
    if not rows:
        raise NoValidRowsError()
    LOGGER.info("Loaded %s usable rows from %s", len(rows), path)
    return rows


def _all_words_in(term: str, text: str) -> bool:
    words = normalize_string(term).split()
    haystack = normalize_string(text)
    return bool(words) and all(word in haystack for word in words)


def first_number(value: str) -> Optional[int]:
    match = _FIRST_NUMBER.search(value or "")
    return int(match.group(0)) if match else None


class OfflineFilterEngine:
    """AND-combined title, location, industry and employee bucket filters."""

    def __init__(
        self,
        rows: Sequence[OfflineRow],
        *,
        synonyms: Optional[SynonymTable] = None,
        catalog: Optional[Catalog] = None,
    ) -> None:
        self.rows = list(rows)
        self._synonyms = synonyms or DEFAULT_SYNONYMS
        self._catalog = catalog or Catalog()

    def title_matches(self, row: OfflineRow, term: str) -> bool:
        if not term or not term.strip():
            return True
        if _all_words_in(term, row.title):
            return True
        return any(_all_words_in(equivalent, row.title) for equivalent in self._synonyms.equivalents(term))

    @staticmethod
    def location_matches(row: OfflineRow, term: str) -> bool:
        needle = normalize_string(term)
        if not needle or needle == normalize_string(ALL_LOCATIONS):
            return True
        return needle in normalize_string(row.location)

    @staticmethod
    def industry_matches(row: OfflineRow, term: str) -> bool:
        needle = normalize_string(term)
        if not needle or needle == normalize_string(ALL_INDUSTRIES):
            return True
        return needle in normalize_string(row.industry)

    def bucket_matches(self, row: OfflineRow, bucket: str) -> bool:
        if not bucket or bucket.strip().lower() == ALL_BUCKETS:
            return True
        count = first_number(row.employees)
        if count is None:
            return False
        return self._catalog.in_bucket(count, bucket.strip())

    def matches(self, row: OfflineRow, criteria: OfflineCriteria) -> bool:
        return (
            self.title_matches(row, criteria.job_title)
            and self.location_matches(row, criteria.location)
            and self.industry_matches(row, criteria.industry)
            and self.bucket_matches(row, criteria.employees)
        )

    def filter(self, criteria: OfflineCriteria) -> List[OfflineRow]:
        """Filter the full set first, then cut to ``criteria.limit``."""

        matched = [row for row in self.rows if self.matches(row, criteria)]
        LOGGER.info("%s of %s offline rows matched", len(matched), len(self.rows))
        return matched[: max(int(criteria.limit), 0)]

    def search(self, criteria: OfflineCriteria) -> List[Lead]:
        return rows_to_leads(self.filter(criteria))


def row_to_lead(row: OfflineRow) -> Lead:
    location = ", ".join(part for part in (row.city, row.state) if part) or LOCATION_NOT_AVAILABLE
    return Lead(
        id=uuid.uuid4().hex,
        first_name=row.first_name,
        last_name=row.last_name,
        job_title=row.title,
        company=row.company,
        location=location,
        industry=row.industry or INDUSTRY_NOT_SPECIFIED,
        employee_count=row.employees or NOT_AVAILABLE,
        email=row.email or None,
        profile_url=row.profile_url,
        city=row.city,
        state=row.state,
    )


def rows_to_leads(rows: Iterable[OfflineRow]) -> List[Lead]:
    """Convert rows to leads, each under a freshly generated id."""

    return [row_to_lead(row) for row in rows]


__all__ = [
    "HEADER_ALIASES",
    "NO_VALID_ROWS_MESSAGE",
    "NoValidRowsError",
    "OfflineCriteria",
    "OfflineFilterEngine",
    "OfflineRow",
    "canonicalize_row",
    "first_number",
    "load_offline_file",
    "parse_row",
    "parse_rows",
    "row_to_lead",
    "rows_to_leads",
]
