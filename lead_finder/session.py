"""Application session tying search, enrichment, offline filtering and saved leads together.

Every public coroutine and method returns a :class:`~lead_finder.models.Notification`
instead of raising, so one failed action never leaves the session unusable.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .catalog import Catalog, DEFAULT_HOME_COUNTRY
from .ingestion.exporters import default_export_name
from .ingestion.loaders import UnsupportedFileTypeError
from .models import InvalidQueryError, Lead, Notification, SearchQuery
from .normalizer import normalize_person
from .offline import NoValidRowsError, OfflineCriteria, OfflineFilterEngine, load_offline_file
from .orchestrator.enrichment import EnrichmentOrchestrator, has_employee_count
from .orchestrator.search import LeadSearchError, SearchOrchestrator
from .providers.apollo import SearchProviderError, clean_domain
from .providers.base import SearchProvider
from .providers.intelligence import AILookupError, CompanyIntelligence
from .qualify import qualify_leads
from .store import CurationStore
from .synonyms import DEFAULT_SYNONYMS, SynonymTable

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class PersonLookup:
    """Outcome of a specific person lookup."""

    notification: Notification
    lead: Optional[Lead] = None
    organization: Dict[str, Any] = field(default_factory=dict)
    description: Optional[str] = None


class CompanyDescriptionHandler:
    """Fetch a company description when the domain field changes.

    A lookup fires only when the domain is non-empty, differs from the last
    domain looked up, no lookup is in flight and the organisation is not
    already known.
    """

    def __init__(self, intelligence: CompanyIntelligence) -> None:
        self._intelligence = intelligence
        self.last_domain = ""
        self.in_flight = False
        self.description: Optional[str] = None

    def should_fire(self, domain: str, *, organization_known: bool = False) -> bool:
        domain = (domain or "").strip()
        return bool(domain) and domain != self.last_domain and not self.in_flight and not organization_known

    async def on_domain_changed(self, domain: str, *, organization_known: bool = False) -> Optional[str]:
        if not self.should_fire(domain, organization_known=organization_known):
            return None
        self.last_domain = domain.strip()
        self.in_flight = True
        try:
            self.description = await self._intelligence.company_description(self.last_domain)
        finally:
            self.in_flight = False
        return self.description


class LeadFinderSession:
    """Holds the current result list and the saved-lead store for one user."""

    def __init__(
        self,
        store: CurationStore,
        *,
        searcher: Optional[SearchOrchestrator] = None,
        enricher: Optional[EnrichmentOrchestrator] = None,
        provider: Optional[SearchProvider] = None,
        intelligence: Optional[CompanyIntelligence] = None,
        synonyms: Optional[SynonymTable] = None,
        catalog: Optional[Catalog] = None,
        home_country: str = DEFAULT_HOME_COUNTRY,
    ) -> None:
        self._searcher = searcher
        self._enricher = enricher
        self._provider = provider
        self._intelligence = intelligence
        self._synonyms = synonyms or DEFAULT_SYNONYMS
        self._catalog = catalog or Catalog()
        self._home_country = home_country
        self.store = store
        self.results: List[Lead] = []
        self.offline: Optional[OfflineFilterEngine] = None
        self.description_handler = CompanyDescriptionHandler(intelligence) if intelligence is not None else None

    # --- live search ---

    async def search(self, query: SearchQuery, *, enrich: bool = True) -> Notification:
        if self._searcher is None:
            return Notification("Live search is not configured", "error")
        try:
            leads = await self._searcher.search(query)
        except InvalidQueryError as exc:
            return Notification(str(exc), "error")
        except LeadSearchError as exc:
            return Notification(exc.user_message, "error")

        self.results = leads
        if not leads:
            return Notification("No leads found with these criteria", "warning")
        if enrich:
            await self.enrich_results()
        return Notification(f"{len(leads)} leads found!")

    async def enrich_results(self) -> int:
        """Enrich the current results and merge them back; returns how many were merged."""

        if self._enricher is None or not self.results:
            return 0
        enriched = await self._enricher.enrich(list(self.results))
        return self.apply_enrichment(enriched)

    def apply_enrichment(self, enriched: Iterable[Lead]) -> int:
        """Merge enriched copies into results; saved leads only gain a missing employee count."""

        by_id = {lead.id: lead for lead in enriched}
        merged = 0
        results: List[Lead] = []
        for lead in self.results:
            replacement = by_id.get(lead.id)
            if replacement is not None:
                merged += 1
            results.append(replacement or lead)
        self.results = results
        for lead in by_id.values():
            stored = self.store.get(lead.id)
            if stored is None:
                continue
            count = stored.employee_count if has_employee_count(stored) else lead.employee_count
            self.store.update(replace(stored, employee_count=count, last_updated=lead.last_updated))
        LOGGER.debug("Merged %s enriched leads", merged)
        return merged

    def remove_result(self, lead_id: str) -> None:
        self.results = [lead for lead in self.results if lead.id != lead_id]

    def qualified_results(self) -> List[Lead]:
        return qualify_leads(self.results)

    # --- offline ---

    def load_offline(self, path: PathLike) -> Notification:
        try:
            rows = load_offline_file(path)
        except (NoValidRowsError, UnsupportedFileTypeError) as exc:
            return Notification(str(exc), "error")
        except (OSError, ValueError) as exc:
            LOGGER.exception("Could not read offline file %s", path)
            return Notification(f"Error processing the file: {exc}", "error")
        self.offline = OfflineFilterEngine(rows, synonyms=self._synonyms, catalog=self._catalog)
        return Notification(f"{len(rows)} rows loaded from {Path(path).name}")

    def offline_search(self, criteria: OfflineCriteria) -> Notification:
        if self.offline is None:
            return Notification("Please upload a file first", "error")
        self.results = self.offline.search(criteria)
        if not self.results:
            return Notification("No leads found matching your criteria", "warning")
        return Notification(f"{len(self.results)} leads found!")

    # --- saved leads ---

    def save_selected(self, lead_ids: Iterable[str]) -> Notification:
        wanted = set(lead_ids)
        selected = [lead for lead in self.results if lead.id in wanted]
        if not selected:
            return Notification("Select at least one lead to save", "error")
        outcome = self.store.add(selected)
        return Notification(outcome.message(), "success" if outcome.added else "warning")

    def remove_saved(self, lead_id: str) -> Notification:
        if not self.store.remove(lead_id):
            return Notification(f"Lead {lead_id} is not saved", "warning")
        return Notification("Lead removed successfully")

    def clear_saved(self, *, confirmed: bool) -> Notification:
        if not confirmed:
            return Notification("Clearing saved leads needs confirmation", "warning")
        self.store.clear()
        return Notification("All saved leads removed")

    def export_saved(self, path: Optional[PathLike] = None) -> Notification:
        if not len(self.store):
            return Notification("No leads to export", "warning")
        target = Path(path) if path else Path(default_export_name())
        try:
            self.store.export_to(target)
        except (OSError, ValueError) as exc:
            LOGGER.exception("Export to %s failed", target)
            return Notification(f"Export failed: {exc}", "error")
        return Notification("Leads exported successfully!")

    # --- specific person lookup ---

    async def lookup_person(
        self,
        first_name: str,
        last_name: str,
        organization_name: str = "",
        organization_domain: str = "",
    ) -> PersonLookup:
        if self._provider is None:
            return PersonLookup(Notification("Person lookup is not configured", "error"))
        domain = clean_domain(organization_domain)
        try:
            person = await self._provider.match_person(
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                organization_name=organization_name.strip(),
            )
            if not person:
                return PersonLookup(Notification("No results found for the given criteria", "warning"))
            organization = (await self._provider.enrich_organization(domain) or {}) if domain else {}
        except SearchProviderError as exc:
            # An AI description stands in for the organisation when the search API fails.
            if domain and self._intelligence is not None:
                LOGGER.warning("Person lookup failed (%s); falling back to an AI description of %s", exc, domain)
                description = await self._intelligence.company_description(domain)
                return PersonLookup(
                    Notification("Search failed; showing an AI generated company description instead", "warning"),
                    description=description,
                )
            return PersonLookup(Notification(f"Search failed: {exc}", "error"))

        payload = dict(person)
        if organization:
            payload["organization"] = {**(payload.get("organization") or {}), **organization}
        lead = await normalize_person(
            payload,
            industry_lookup=self._intelligence.company_industry if self._intelligence else None,
            home_country=self._home_country,
            catalog=self._catalog,
        )
        self.results = [lead]
        return PersonLookup(Notification(f"Found {lead.display_name()}"), lead=lead, organization=organization)

    async def analyze_profile(self, lead: Lead) -> Notification:
        if self._intelligence is None:
            return Notification("Profile analysis is not configured", "error")
        try:
            return Notification(await self._intelligence.analyze_profile(lead))
        except AILookupError as exc:
            return Notification(str(exc), "error")


__all__ = ["CompanyDescriptionHandler", "LeadFinderSession", "PersonLookup"]
