"""Factory helpers for constructing providers and the session from settings."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .orchestrator.enrichment import EnrichmentOrchestrator
from .orchestrator.search import SearchOrchestrator
from .providers.apollo import ApolloClient
from .providers.base import CompletionProvider, SearchProvider
from .providers.intelligence import CompanyIntelligence
from .providers.openai_client import OpenAICompletionProvider
from .rate_limit import RateLimiter
from .session import LeadFinderSession
from .store import CurationStore, JsonFileStorage
from .synonyms import JOB_TITLE_SYNONYMS, SynonymTable


def build_synonyms(settings: Settings) -> SynonymTable:
    table = SynonymTable(JOB_TITLE_SYNONYMS)
    if settings.synonyms:
        table.extend(settings.synonyms)
    return table


def build_search_provider(settings: Settings) -> ApolloClient:
    calls_per_minute = settings.search_calls_per_minute
    return ApolloClient(
        settings.require_search_key(),
        base_url=settings.apollo_base_url,
        rate_limiter=RateLimiter(float(calls_per_minute)) if calls_per_minute else RateLimiter(None),
    )


def build_intelligence(settings: Settings, completion: Optional[CompletionProvider] = None) -> Optional[CompanyIntelligence]:
    """Return AI lookups, or ``None`` when no completion provider can be built."""

    if completion is None:
        if not settings.openai_api_key:
            return None
        completion = OpenAICompletionProvider(settings.openai_api_key, model=settings.openai_model)
    return CompanyIntelligence(completion, catalog=settings.catalog)


def build_store(settings: Settings) -> CurationStore:
    return CurationStore(JsonFileStorage(settings.storage_path))


async def _no_employee_count(company_name: str, industry: str = "") -> Optional[str]:
    # Without an AI provider every lead gets the industry fallback bucket.
    return None


@dataclass
class Application:
    """Everything a front end needs; close it to release HTTP connections."""

    session: LeadFinderSession
    provider: Optional[SearchProvider]
    intelligence: Optional[CompanyIntelligence]

    async def aclose(self) -> None:
        for resource in (self.provider, getattr(self.intelligence, "completion", None)):
            close = getattr(resource, "aclose", None)
            if close is not None:
                await close()


def build_session(
    settings: Settings,
    *,
    provider: Optional[SearchProvider] = None,
    completion: Optional[CompletionProvider] = None,
    store: Optional[CurationStore] = None,
) -> Application:
    """Wire providers, orchestrators and the store described by ``settings``."""

    provider = provider if provider is not None else build_search_provider(settings)
    intelligence = build_intelligence(settings, completion)
    synonyms = build_synonyms(settings)
    searcher = SearchOrchestrator(
        provider,
        synonyms=synonyms,
        industry_lookup=intelligence.company_industry if intelligence else None,
        home_country=settings.home_country,
        catalog=settings.catalog,
    )
    enricher = EnrichmentOrchestrator(
        intelligence.company_employee_count if intelligence else _no_employee_count,
        catalog=settings.catalog,
        per_call_timeout=settings.per_call_timeout,
        batch_timeout=settings.batch_timeout,
    )
    session = LeadFinderSession(
        store if store is not None else build_store(settings),
        searcher=searcher,
        enricher=enricher,
        provider=provider,
        intelligence=intelligence,
        synonyms=synonyms,
        catalog=settings.catalog,
        home_country=settings.home_country,
    )
    return Application(session=session, provider=provider, intelligence=intelligence)


def build_offline_session(settings: Settings, *, store: Optional[CurationStore] = None) -> LeadFinderSession:
    """Session for offline filtering and saved leads; needs no API keys."""

    return LeadFinderSession(
        store if store is not None else build_store(settings),
        synonyms=build_synonyms(settings),
        catalog=settings.catalog,
        home_country=settings.home_country,
    )


__all__ = [
    "Application",
    "build_intelligence",
    "build_offline_session",
    "build_search_provider",
    "build_session",
    "build_store",
    "build_synonyms",
]
