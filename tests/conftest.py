from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from lead_finder.models import Lead, WorkHistoryEntry


def _person(**overrides: Any) -> Dict[str, Any]:
    person: Dict[str, Any] = {
        "id": "p-1",
        "first_name": "Ana",
        "last_name": "Silva",
        "title": "Chief Information Officer",
        "email": "ana@acme.com",
        "email_status": "verified",
        "linkedin_url": "https://www.linkedin.com/in/ana-silva",
        "city": "São Paulo",
        "state": "SP",
        "country": "Brazil",
        "organization": {
            "id": "org-1",
            "name": "Acme",
            "industry": "Technology",
            "estimated_num_employees": 120,
            "website_url": "https://acme.com",
        },
        "employment_history": [
            {
                "title": "Chief Information Officer",
                "organization_name": "Acme",
                "start_date": "2019-03-01",
                "current": True,
            },
            {
                "title": "IT Manager",
                "organization_name": "Globex",
                "start_date": "2012-01-01",
                "end_date": "2018-12-31",
                "current": False,
            },
        ],
    }
    person.update(overrides)
    return person


@pytest.fixture
def make_person() -> Callable[..., Dict[str, Any]]:
    return _person


@pytest.fixture
def make_lead() -> Callable[..., Lead]:
    def factory(lead_id: str = "lead-1", **overrides: Any) -> Lead:
        values: Dict[str, Any] = {
            "first_name": "Ana",
            "last_name": "Silva",
            "job_title": "CIO",
            "company": "Acme",
            "location": "São Paulo, SP",
            "industry": "Technology",
            "employee_count": "51-200",
            "email": "ana@acme.com",
            "email_status": "verified",
            "email_verified": True,
            "profile_url": "https://www.linkedin.com/in/ana-silva",
            "work_history": [WorkHistoryEntry(title="CIO", company="Acme", duration="2019 - Present")],
        }
        values.update(overrides)
        return Lead(id=lead_id, **values)

    return factory
