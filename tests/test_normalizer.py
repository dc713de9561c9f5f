import asyncio

import pytest

from lead_finder.catalog import INDUSTRY_NOT_SPECIFIED, LOCATION_NOT_AVAILABLE, NOT_AVAILABLE
from lead_finder.normalizer import format_duration, format_location, normalize_people, normalize_person


def test_normalize_full_payload(make_person) -> None:
    lead = asyncio.run(normalize_person(make_person()))

    assert lead.id == "p-1"
    assert lead.full_name == "Ana Silva"
    assert lead.job_title == "Chief Information Officer"
    assert lead.company == "Acme"
    assert lead.company_url == "https://acme.com"
    assert lead.industry == "Technology"
    assert lead.employee_count == "51-200"
    assert lead.location == "São Paulo, SP, Brazil"
    assert lead.email_verified is True
    assert [job.duration for job in lead.work_history] == ["2019 - Present", "2012 - 2018"]
    assert lead.work_history[1].company == "Globex"


def test_home_country_is_omitted_from_location(make_person) -> None:
    person = make_person(city="Austin", state="Texas", country="United States")
    assert format_location(person) == "Austin, Texas"
    assert format_location({}) == LOCATION_NOT_AVAILABLE


def test_missing_fields_resolve_to_sentinels() -> None:
    lead = asyncio.run(normalize_person({"first_name": "Solo"}))

    assert lead.id
    assert lead.full_name == "Solo"
    assert lead.industry == INDUSTRY_NOT_SPECIFIED
    assert lead.employee_count == NOT_AVAILABLE
    assert lead.location == LOCATION_NOT_AVAILABLE
    assert lead.email is None
    assert lead.email_verified is False
    assert lead.work_history == []


def test_non_mapping_payload_does_not_raise() -> None:
    lead = asyncio.run(normalize_person(None))
    assert lead.display_name() == "Name not available"


def test_industry_falls_back_to_history_then_lookup(make_person) -> None:
    person = make_person(organization={"name": "Acme"})
    person["employment_history"][1]["industry"] = "Banking"
    person["employment_history"] = list(reversed(person["employment_history"]))
    assert asyncio.run(normalize_person(person)).industry == "Banking"

    calls = []

    async def lookup(company: str) -> str:
        calls.append(company)
        return "Retail"

    bare = make_person(organization={"name": "Acme"})
    lead = asyncio.run(normalize_person(bare, industry_lookup=lookup))
    assert lead.industry == "Retail"
    assert calls == ["Acme"]


def test_failing_industry_lookup_yields_sentinel(make_person) -> None:
    async def lookup(company: str) -> str:
        raise RuntimeError("AI down")

    lead = asyncio.run(normalize_person(make_person(organization={}), industry_lookup=lookup))
    assert lead.industry == INDUSTRY_NOT_SPECIFIED


def test_normalising_twice_is_structurally_identical(make_person) -> None:
    first, second = asyncio.run(normalize_people([make_person(), make_person()]))
    assert first == second


def test_generated_ids_differ_without_source_id(make_person) -> None:
    first, second = asyncio.run(normalize_people([make_person(id=None), make_person(id=None)]))
    assert first.id != second.id
    assert first.full_name == second.full_name


def test_format_duration() -> None:
    assert format_duration("2020-05-01", None, True) == "2020 - Present"
    assert format_duration(None, "2020", False) == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "x", "employment_history": [{"title": "CIO", "skills": 5}]},
        {"id": "x", "employment_history": [{"title": "CIO", "skills": "python"}]},
        {"id": "x", "employment_history": ["CIO at Acme", None, {"title": "CIO"}]},
        {"id": "x", "employment_history": "CIO", "education": 3, "certifications": "AWS"},
        {"id": "x", "skills": "python", "organization": ["Acme"]},
        {"id": "x", "organization": {"employee_count": float("nan")}},
        {"id": "x", "organization": {"employee_count": float("inf")}},
        {"id": "x", "organization": {"estimated_num_employees": True}},
    ],
)
def test_malformed_payload_fields_do_not_raise(payload) -> None:
    lead = asyncio.run(normalize_person(payload))

    assert lead.id == "x"
    assert lead.skills == []
    assert lead.employee_count == NOT_AVAILABLE
    assert all(job.skills == [] for job in lead.work_history)


def test_history_skills_keep_only_list_items() -> None:
    payload = {"employment_history": [{"title": "CIO", "skills": ["Python", " ", None, "SQL"]}]}

    lead = asyncio.run(normalize_person(payload))

    assert lead.work_history[0].skills == ["Python", "SQL"]


def test_one_malformed_person_does_not_sink_the_batch(make_person) -> None:
    broken = {"id": "bad", "employment_history": [{"skills": 5}], "organization": {"employee_count": float("nan")}}

    leads = asyncio.run(normalize_people([make_person(), broken]))

    assert [lead.id for lead in leads] == ["p-1", "bad"]
