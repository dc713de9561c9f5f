"""Convert raw people search payloads into :class:`~lead_finder.models.Lead` records."""
from __future__ import annotations

import asyncio
import logging
import math
import re
import uuid
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence

from .catalog import (
    DEFAULT_HOME_COUNTRY,
    INDUSTRY_NOT_SPECIFIED,
    LOCATION_NOT_AVAILABLE,
    NOT_AVAILABLE,
    Catalog,
)
from .models import Certification, EducationEntry, Lead, WorkHistoryEntry

LOGGER = logging.getLogger(__name__)

IndustryLookup = Callable[[str], Awaitable[str]]

_YEAR = re.compile(r"\d{4}")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _records(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _strings(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_text(item) for item in value if _text(item)]


def _year(value: Any) -> str:
    match = _YEAR.search(_text(value))
    return match.group(0) if match else ""


def format_duration(start_date: Any, end_date: Any, current: bool) -> str:
    """Render ``"2019 - Present"`` style durations; blank without a start year."""

    start = _year(start_date)
    if not start:
        return ""
    end = "Present" if current else _year(end_date)
    return f"{start} - {end}"


def format_education_dates(start_date: Any, end_date: Any) -> str:
    start, end = _text(start_date), _text(end_date)
    if start and end:
        return f"{start} - {end}"
    return start or end


def format_location(person: Mapping[str, Any], home_country: str = DEFAULT_HOME_COUNTRY) -> str:
    parts = [_text(person.get("city")), _text(person.get("state"))]
    country = _text(person.get("country"))
    if country and country != home_country:
        parts.append(country)
    return ", ".join(part for part in parts if part) or LOCATION_NOT_AVAILABLE


def _employee_count(organization: Mapping[str, Any], catalog: Catalog) -> str:
    value = organization.get("employee_count")
    if value in (None, ""):
        value = organization.get("estimated_num_employees")
    if value in (None, ""):
        return NOT_AVAILABLE
    if isinstance(value, bool):
        return NOT_AVAILABLE
    if isinstance(value, float) and not math.isfinite(value):
        return NOT_AVAILABLE
    if isinstance(value, (int, float)):
        return catalog.bucket_for(int(value)) or NOT_AVAILABLE
    return _text(value) or NOT_AVAILABLE


def _score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


async def normalize_person(
    raw: Any,
    *,
    industry_lookup: Optional[IndustryLookup] = None,
    home_country: str = DEFAULT_HOME_COUNTRY,
    catalog: Optional[Catalog] = None,
) -> Lead:
    """Map one raw person payload to a :class:`Lead`; never raises."""

    catalog = catalog or Catalog()
    person = _mapping(raw)
    history = _records(person.get("employment_history"))
    current = next((job for job in history if job.get("current")), {})
    organization = _mapping(person.get("organization"))

    company = _text(current.get("organization_name")) or _text(organization.get("name"))
    industry = (
        _text(organization.get("industry"))
        or _text(current.get("industry"))
        or (_text(history[0].get("industry")) if history else "")
    )
    if not industry and company and industry_lookup is not None:
        try:
            industry = _text(await industry_lookup(company))
        except Exception:
            LOGGER.warning("Industry lookup failed for %s", company, exc_info=True)
            industry = ""
    if not industry:
        industry = INDUSTRY_NOT_SPECIFIED

    first_name = _text(person.get("first_name"))
    last_name = _text(person.get("last_name"))
    full_name = _text(person.get("name")) or f"{first_name} {last_name}".strip()
    email_status = _text(person.get("email_status")) or None
    organization_url = _text(organization.get("website_url")) or _text(organization.get("website"))

    work_history = [
        WorkHistoryEntry(
            title=_text(job.get("title")),
            company=_text(job.get("organization_name")),
            company_url=_text(job.get("organization_website")) or organization_url,
            duration=format_duration(job.get("start_date"), job.get("end_date"), bool(job.get("current"))),
            description=_text(job.get("description")),
            location=_text(job.get("raw_address")),
            skills=_strings(job.get("skills")),
        )
        for job in history
    ]
    education = [
        EducationEntry(
            school=_text(entry.get("school")) or _text(entry.get("school_name")),
            degree=_text(entry.get("degree")),
            field_of_study=_text(entry.get("major")),
            year=format_education_dates(entry.get("start_date"), entry.get("end_date")),
            activities=_text(entry.get("activities")),
        )
        for entry in _records(person.get("education"))
    ]
    certifications = [
        Certification(
            name=_text(entry.get("name")),
            issuer=_text(entry.get("issuer")),
            date=_text(entry.get("date")),
            description=_text(entry.get("description")),
        )
        for entry in _records(person.get("certifications"))
    ]
    return Lead(
        id=_text(person.get("id")) or uuid.uuid4().hex,
        first_name=first_name,
        last_name=last_name,
        full_name=full_name,
        job_title=_text(current.get("title")) or _text(person.get("title")),
        company=company,
        company_url=organization_url or _text(current.get("organization_website")),
        location=format_location(person, home_country),
        industry=industry,
        employee_count=_employee_count(organization, catalog),
        email=_text(person.get("email")) or None,
        email_status=email_status,
        email_verified=email_status == "verified",
        email_score=_score(person.get("extrapolated_email_confidence")),
        profile_url=_text(person.get("linkedin_url")),
        headline=_text(person.get("headline")),
        photo_url=_text(person.get("photo_url")),
        organization_id=_text(organization.get("id")) or _text(current.get("organization_id")),
        city=_text(person.get("city")),
        state=_text(person.get("state")),
        country=_text(person.get("country")),
        work_history=work_history,
        education=education,
        skills=_strings(person.get("skills")),
        certifications=certifications,
    )


async def normalize_people(
    people: Sequence[Any],
    *,
    industry_lookup: Optional[IndustryLookup] = None,
    home_country: str = DEFAULT_HOME_COUNTRY,
    catalog: Optional[Catalog] = None,
) -> List[Lead]:
    """Normalise all payloads concurrently, preserving input order."""

    return list(
        await asyncio.gather(
            *(
                normalize_person(
                    person,
                    industry_lookup=industry_lookup,
                    home_country=home_country,
                    catalog=catalog,
                )
                for person in people
            )
        )
    )


__all__ = [
    "IndustryLookup",
    "format_duration",
    "format_education_dates",
    "format_location",
    "normalize_people",
    "normalize_person",
]
