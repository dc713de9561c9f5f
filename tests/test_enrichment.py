import asyncio
import time

from lead_finder.catalog import NOT_AVAILABLE
from lead_finder.models import Lead
from lead_finder.orchestrator.enrichment import EnrichmentOrchestrator


def _lead(lead_id: str, *, industry: str = "Technology", employee_count: str = NOT_AVAILABLE) -> Lead:
    return Lead(id=lead_id, company=f"Company {lead_id}", industry=industry, employee_count=employee_count)


def test_timed_out_lookup_uses_industry_fallback() -> None:
    async def slow_lookup(company: str, industry: str):
        await asyncio.sleep(5)
        return "1-10"

    orchestrator = EnrichmentOrchestrator(slow_lookup, per_call_timeout=0.05)
    (lead,) = asyncio.run(orchestrator.enrich([_lead("a", industry="Healthcare")]))

    assert lead.employee_count == "201-500"


def test_successful_failed_and_invalid_lookups_keep_input_order() -> None:
    answers = {"Company ok": "1001-5000", "Company bad": None}

    async def lookup(company: str, industry: str):
        if company == "Company boom":
            raise RuntimeError("rate limited")
        await asyncio.sleep(0.01 if company == "Company ok" else 0)
        return answers[company]

    leads = [
        _lead("ok"),
        _lead("boom", industry="Banking"),
        _lead("bad", industry="Unknown Sector"),
        _lead("known", employee_count="11-50"),
    ]
    result = asyncio.run(EnrichmentOrchestrator(lookup).enrich(leads))

    assert [lead.id for lead in result] == ["ok", "boom", "bad", "known"]
    assert [lead.employee_count for lead in result] == ["1001-5000", "501-1000", "11-50", "11-50"]


def test_leads_with_counts_are_not_looked_up() -> None:
    calls = []

    async def lookup(company: str, industry: str):
        calls.append(company)
        return "51-200"

    asyncio.run(EnrichmentOrchestrator(lookup).enrich([_lead("a", employee_count="201-500")]))

    assert calls == []


def test_batch_deadline_resolves_every_pending_lead() -> None:
    async def slow_lookup(company: str, industry: str):
        await asyncio.sleep(5)
        return "1-10"

    orchestrator = EnrichmentOrchestrator(slow_lookup, per_call_timeout=10, batch_timeout=0.1)
    leads = [_lead(str(index), industry="Technology") for index in range(20)]

    started = time.monotonic()
    result = asyncio.run(orchestrator.enrich(leads))

    assert time.monotonic() - started < 2
    assert len(result) == 20
    assert {lead.employee_count for lead in result} == {"51-200"}


def test_lookups_run_concurrently() -> None:
    async def lookup(company: str, industry: str):
        await asyncio.sleep(0.2)
        return "11-50"

    started = time.monotonic()
    result = asyncio.run(EnrichmentOrchestrator(lookup).enrich([_lead(str(index)) for index in range(10)]))

    assert time.monotonic() - started < 1.5
    assert all(lead.employee_count == "11-50" for lead in result)


def test_each_pass_gets_a_new_marker_and_inputs_are_untouched() -> None:
    async def lookup(company: str, industry: str):
        return "11-50"

    orchestrator = EnrichmentOrchestrator(lookup)
    original = _lead("a")
    (first,) = asyncio.run(orchestrator.enrich([original]))
    (second,) = asyncio.run(orchestrator.enrich([original]))

    assert first.last_updated is not None
    assert second.last_updated > first.last_updated
    assert original.employee_count == NOT_AVAILABLE
    assert original.last_updated is None


def test_empty_input() -> None:
    async def lookup(company: str, industry: str):
        raise AssertionError("not called")

    assert asyncio.run(EnrichmentOrchestrator(lookup).enrich([])) == []


def test_batch_deadline_collects_cancelled_lookups_before_returning() -> None:
    cancelled = []

    async def slow_lookup(company: str, industry: str):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(company)
            raise
        return "1-10"

    async def scenario():
        orchestrator = EnrichmentOrchestrator(slow_lookup, per_call_timeout=10, batch_timeout=0.05)
        result = await orchestrator.enrich([_lead("a"), _lead("b")])
        return result, sorted(cancelled)

    result, seen = asyncio.run(scenario())

    assert seen == ["Company a", "Company b"]
    assert [lead.employee_count for lead in result] == ["51-200", "51-200"]
