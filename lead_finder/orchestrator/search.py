"""Tiered people search with title fallbacks."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from ..catalog import DEFAULT_HOME_COUNTRY, Catalog
from ..models import Lead, SearchQuery
from ..normalizer import IndustryLookup, normalize_people
from ..providers.apollo import SearchProviderError
from ..providers.base import PeopleSearchParams, SearchProvider
from ..synonyms import DEFAULT_SYNONYMS, SynonymTable
from ..titles import variations

LOGGER = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to fetch leads. Please check your connection and try again."


class LeadSearchError(RuntimeError):
    """The single failure surfaced by :class:`SearchOrchestrator`."""

    def __init__(self, message: str = SEARCH_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.user_message = message


@dataclass
class TierResult:
    """Raw outcome of the tier walk: which tier and term matched, and the payloads."""

    tier: Optional[int] = None
    term: Optional[str] = None
    people: List[Dict[str, Any]] = field(default_factory=list)
    attempted: List[str] = field(default_factory=list)


class SearchOrchestrator:
    """Try the preferred title, then its variations, then its equivalents.

    Tiers run strictly in order and stop at the first non-empty answer. Only
    empty answers fall through; a transport failure ends the search.
    """

    def __init__(
        self,
        provider: SearchProvider,
        *,
        synonyms: Optional[SynonymTable] = None,
        industry_lookup: Optional[IndustryLookup] = None,
        home_country: str = DEFAULT_HOME_COUNTRY,
        catalog: Optional[Catalog] = None,
        max_equivalents: int = 5,
    ) -> None:
        self._provider = provider
        self._synonyms = synonyms or DEFAULT_SYNONYMS
        self._industry_lookup = industry_lookup
        self._home_country = home_country
        self._catalog = catalog or Catalog()
        self._max_equivalents = max_equivalents

    async def search(self, query: SearchQuery) -> List[Lead]:
        """Return normalised leads for ``query``; an empty list is a valid answer."""

        outcome = await self.find_people(query)
        if not outcome.people:
            LOGGER.info("No leads found for %r after %s attempts", query.job_title, len(outcome.attempted))
            return []
        LOGGER.info(
            "Found %s leads for %r at tier %s using %r",
            len(outcome.people),
            query.job_title,
            outcome.tier,
            outcome.term,
        )
        return await normalize_people(
            outcome.people,
            industry_lookup=self._industry_lookup,
            home_country=self._home_country,
            catalog=self._catalog,
        )

    async def find_people(self, query: SearchQuery) -> TierResult:
        query.validate()
        title = query.job_title.strip()
        outcome = TierResult()
        tiers = (
            (0, [self._synonyms.best_english_title(title)]),
            (1, variations(title)),
            (2, self._synonyms.enhanced_equivalents(title)[: self._max_equivalents]),
        )
        tried: Set[str] = set()
        for tier, terms in tiers:
            people = await self._run_tier(query, tier, terms, tried, outcome)
            if people:
                return outcome
        return outcome

    async def _run_tier(
        self,
        query: SearchQuery,
        tier: int,
        terms: Iterable[str],
        tried: Set[str],
        outcome: TierResult,
    ) -> List[Dict[str, Any]]:
        for term in terms:
            if term in tried:
                continue
            tried.add(term)
            outcome.attempted.append(term)
            LOGGER.debug("Tier %s: searching title %r", tier, term)
            people = await self._search_once(query, term)
            if people:
                outcome.tier, outcome.term, outcome.people = tier, term, people
                return people
        return []

    async def _search_once(self, query: SearchQuery, title: str) -> List[Dict[str, Any]]:
        params = PeopleSearchParams(
            titles=[title],
            locations=[query.location_filter] if query.location_filter else [],
            industries=[query.industry_filter] if query.industry_filter else [],
            organization_names=[query.company.strip()] if query.company and query.company.strip() else [],
            page=1,
            per_page=int(query.count),
        )
        try:
            return list(await self._provider.search_people(params) or [])
        except SearchProviderError as exc:
            LOGGER.error("Lead search aborted while trying %r: %s", title, exc)
            raise LeadSearchError() from exc


__all__ = ["LeadSearchError", "SEARCH_FAILED_MESSAGE", "SearchOrchestrator", "TierResult"]
