import asyncio

import pytest

from lead_finder.catalog import INDUSTRY_NOT_SPECIFIED, URL_NOT_FOUND
from lead_finder.providers import AILookupError, CompanyIntelligence, StaticCompletionProvider
from lead_finder.providers.intelligence import DESCRIPTION_UNAVAILABLE


def _intel(answer="", **kwargs) -> CompanyIntelligence:
    return CompanyIntelligence(StaticCompletionProvider(answer, **kwargs))


def test_industry_answer_is_validated_against_catalog() -> None:
    assert asyncio.run(_intel('"Healthcare".').company_industry("Mercy")) == "Healthcare"
    assert asyncio.run(_intel("Space mining").company_industry("Mercy")) == INDUSTRY_NOT_SPECIFIED
    assert asyncio.run(_intel("All Industries").company_industry("Mercy")) == INDUSTRY_NOT_SPECIFIED


def test_industry_lookup_never_raises() -> None:
    intel = _intel(error=RuntimeError("quota"))
    assert asyncio.run(intel.company_industry("Mercy")) == INDUSTRY_NOT_SPECIFIED


def test_industry_prompt_lists_catalog_options() -> None:
    completion = StaticCompletionProvider("Retail")
    asyncio.run(CompanyIntelligence(completion).company_industry("Walmart"))
    assert "Telecommunications" in completion.prompts[0]
    assert "Company name: Walmart" in completion.prompts[0]


@pytest.mark.parametrize(
    "answer, bucket",
    [
        ("201-500", "201-500"),
        ("Roughly 1001-5000 employees", "1001-5000"),
        ("About 1,500 people", "1001-5000"),
        ("7", "1-10"),
        ("I do not know", None),
    ],
)
def test_employee_count_answers_map_to_buckets(answer, bucket) -> None:
    assert asyncio.run(_intel(answer).company_employee_count("Acme", "Technology")) == bucket


def test_employee_count_errors_propagate() -> None:
    with pytest.raises(RuntimeError):
        asyncio.run(_intel(error=RuntimeError("quota")).company_employee_count("Acme"))


def test_company_url_and_domain() -> None:
    assert asyncio.run(_intel("https://www.acme.com").company_url("Acme")) == "https://www.acme.com"
    assert asyncio.run(_intel("Not sure").company_url("Acme")) == URL_NOT_FOUND
    assert asyncio.run(_intel(" https://www.acme.com/ ").company_domain("Acme")) == "acme.com"
    assert asyncio.run(_intel("unknown").company_domain("Acme")) == ""
    assert asyncio.run(_intel("acme.com").company_domain("  ")) == ""


def test_description_falls_back_on_failure() -> None:
    assert asyncio.run(_intel("Acme builds anvils.").company_description("acme.com")) == "Acme builds anvils."
    assert asyncio.run(_intel(error=RuntimeError()).company_description("acme.com")) == DESCRIPTION_UNAVAILABLE
    improved = asyncio.run(_intel(error=RuntimeError()).improve_description("Anvils."))
    assert improved.startswith("Anvils.")


def test_profile_analysis_raises_typed_error(make_lead) -> None:
    assert asyncio.run(_intel("Report").analyze_profile(make_lead())) == "Report"
    with pytest.raises(AILookupError):
        asyncio.run(_intel(error=RuntimeError()).analyze_profile(make_lead()))
