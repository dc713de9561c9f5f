"""Data models shared by the search, enrichment, offline and curation workflows."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from .catalog import (
    ALL_INDUSTRIES,
    ALL_LOCATIONS,
    INDUSTRY_NOT_SPECIFIED,
    LOCATION_NOT_AVAILABLE,
    NOT_AVAILABLE,
)

MAX_SEARCH_COUNT = 100


class InvalidQueryError(ValueError):
    """Raised when a search query is rejected before any network call."""


# --- Lead and nested records ---

@dataclass(slots=True)
class WorkHistoryEntry:
    """One position in a lead's employment history."""

    title: str = ""
    company: str = ""
    company_url: str = ""
    duration: str = ""
    description: str = ""
    location: str = ""
    skills: List[str] = field(default_factory=list)


@dataclass(slots=True)
class EducationEntry:
    school: str = ""
    degree: str = ""
    field_of_study: str = ""
    year: str = ""
    activities: str = ""


@dataclass(slots=True)
class Certification:
    name: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


@dataclass(slots=True)
class Lead:
    """Canonical contact and company record."""

    id: str
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    job_title: str = ""
    company: str = ""
    company_url: str = ""
    location: str = LOCATION_NOT_AVAILABLE
    industry: str = INDUSTRY_NOT_SPECIFIED
    employee_count: str = NOT_AVAILABLE
    email: Optional[str] = None
    email_status: Optional[str] = None
    email_verified: bool = False
    email_score: Optional[float] = None
    profile_url: str = ""
    headline: str = ""
    photo_url: str = ""
    organization_id: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    work_history: List[WorkHistoryEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    last_updated: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.full_name and (self.first_name or self.last_name):
            self.full_name = f"{self.first_name} {self.last_name}".strip()

    def display_name(self) -> str:
        """Return a readable name for tables and logs."""

        return self.full_name or "Name not available"

    def display_title(self) -> str:
        return self.job_title or "Job title not available"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lead":
        """Rebuild a lead from :meth:`to_dict` output, ignoring unknown keys."""

        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "id" not in values or not values["id"]:
            raise ValueError("Lead records require an 'id'")
        values["id"] = str(values["id"])
        values["work_history"] = [
            WorkHistoryEntry(**_known(WorkHistoryEntry, entry)) for entry in values.get("work_history") or []
        ]
        values["education"] = [
            EducationEntry(**_known(EducationEntry, entry)) for entry in values.get("education") or []
        ]
        values["certifications"] = [
            Certification(**_known(Certification, entry)) for entry in values.get("certifications") or []
        ]
        values["skills"] = list(values.get("skills") or [])
        return cls(**values)


def _known(record_cls: type, data: Mapping[str, Any]) -> Dict[str, Any]:
    names = {item.name for item in fields(record_cls)}
    return {key: value for key, value in dict(data).items() if key in names}


# --- Queries ---

@dataclass(slots=True)
class SearchQuery:
    """Parameters of one live search; never persisted."""

    job_title: str
    location: str = ""
    industry: str = ""
    count: int = 10
    company: str = ""

    def validate(self) -> "SearchQuery":
        """Return ``self`` or raise :class:`InvalidQueryError`."""

        if not self.job_title or not self.job_title.strip():
            raise InvalidQueryError("Please enter a job title to search")
        if not 1 <= int(self.count) <= MAX_SEARCH_COUNT:
            raise InvalidQueryError(f"Number of leads must be between 1 and {MAX_SEARCH_COUNT}")
        return self

    @property
    def location_filter(self) -> str:
        value = (self.location or "").strip()
        return "" if value.lower() == ALL_LOCATIONS.lower() else value

    @property
    def industry_filter(self) -> str:
        value = (self.industry or "").strip()
        return "" if value.lower() == ALL_INDUSTRIES.lower() else value


# --- Outcomes ---

@dataclass(slots=True)
class SaveOutcome:
    """Result of adding leads to the curation store."""

    added: List[Lead] = field(default_factory=list)
    duplicates: int = 0

    def message(self) -> str:
        if not self.added:
            return "All selected leads are already saved."
        text = f"{len(self.added)} lead(s) saved successfully!"
        if self.duplicates:
            text += f" {self.duplicates} already saved."
        return text


@dataclass(slots=True)
class Notification:
    """Inline, non-blocking message for the user."""

    message: str
    type: str = "success"

    @property
    def is_error(self) -> bool:
        return self.type == "error"


__all__ = [
    "Certification",
    "EducationEntry",
    "InvalidQueryError",
    "Lead",
    "MAX_SEARCH_COUNT",
    "Notification",
    "SaveOutcome",
    "SearchQuery",
    "WorkHistoryEntry",
]
