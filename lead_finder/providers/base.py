"""Interfaces shared by the remote people search and AI completion providers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol


@dataclass
class PeopleSearchParams:
    """Query sent to the people search API; only ``titles`` varies between tiers."""

    titles: List[str] = field(default_factory=list)
    locations: List[str] = field(default_factory=list)
    industries: List[str] = field(default_factory=list)
    organization_names: List[str] = field(default_factory=list)
    organization_domains: List[str] = field(default_factory=list)
    page: int = 1
    per_page: int = 10


class SearchProvider(Protocol):
    """Remote people search service."""

    async def search_people(self, params: PeopleSearchParams) -> List[Dict[str, Any]]:  # pragma: no cover - protocol
        """Return raw person payloads, or an empty list when nothing matched."""

    async def match_person(
        self,
        *,
        first_name: str,
        last_name: str,
        organization_name: str = "",
    ) -> Optional[Dict[str, Any]]:  # pragma: no cover - protocol
        """Return the single best matching person payload."""

    async def enrich_organization(self, domain: str) -> Optional[Dict[str, Any]]:  # pragma: no cover - protocol
        """Return the organisation payload for ``domain``."""


class CompletionProvider(Protocol):
    """Large language model that turns a prompt into free-form text."""

    async def complete(
        self, prompt: str, *, max_tokens: int, temperature: float = 0.2
    ) -> str:  # pragma: no cover - protocol
        """Return the completion text for ``prompt``."""
