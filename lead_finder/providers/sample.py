"""In-memory providers that answer from local data instead of remote services."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .base import PeopleSearchParams


class StaticSearchProvider:
    """Answer people searches from a title -> payloads mapping."""

    name = "static"

    def __init__(
        self,
        people_by_title: Optional[Mapping[str, Sequence[Dict[str, Any]]]] = None,
        *,
        persons: Optional[Sequence[Dict[str, Any]]] = None,
        organizations: Optional[Mapping[str, Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._people_by_title = {key: list(value) for key, value in (people_by_title or {}).items()}
        self._persons = list(persons or [])
        self._organizations = dict(organizations or {})
        self._error = error
        self.calls: List[PeopleSearchParams] = []

    @property
    def searched_titles(self) -> List[str]:
        return [title for params in self.calls for title in params.titles]

    async def search_people(self, params: PeopleSearchParams) -> List[Dict[str, Any]]:
        self.calls.append(params)
        if self._error is not None:
            raise self._error
        results: List[Dict[str, Any]] = []
        for title in params.titles:
            results.extend(self._people_by_title.get(title, []))
        return results[: params.per_page]

    async def match_person(
        self,
        *,
        first_name: str,
        last_name: str,
        organization_name: str = "",
    ) -> Optional[Dict[str, Any]]:
        if self._error is not None:
            raise self._error
        for person in self._persons:
            if person.get("first_name") == first_name and person.get("last_name") == last_name:
                return person
        return None

    async def enrich_organization(self, domain: str) -> Optional[Dict[str, Any]]:
        if self._error is not None:
            raise self._error
        return self._organizations.get(domain)


class StaticCompletionProvider:
    """Return canned completions chosen by a prompt-matching callable."""

    def __init__(
        self,
        answer: Callable[[str], str] | str = "",
        *,
        delay: float = 0.0,
        error: Optional[Exception] = None,
    ) -> None:
        self._answer = answer
        self._delay = delay
        self._error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str, *, max_tokens: int, temperature: float = 0.2) -> str:
        self.prompts.append(prompt)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if callable(self._answer):
            return self._answer(prompt)
        return self._answer


__all__ = ["StaticCompletionProvider", "StaticSearchProvider"]
