"""Async client for the Apollo.io people search API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..rate_limit import RateLimiter
from .base import PeopleSearchParams

LOGGER = logging.getLogger(__name__)


class SearchProviderError(RuntimeError):
    """Raised when the search API is unreachable or answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def clean_domain(value: str) -> str:
    """Strip scheme, ``www.``, trailing slash and whitespace from a domain."""

    domain = "".join((value or "").split())
    for prefix in ("https://", "http://"):
        if domain.lower().startswith(prefix):
            domain = domain[len(prefix):]
            break
    if domain.lower().startswith("www."):
        domain = domain[4:]
    return domain.rstrip("/")


class ApolloClient:
    """Thin wrapper over the three Apollo endpoints used by the application."""

    BASE_URL = "https://api.apollo.io"
    SEARCH_PATH = "/api/v1/mixed_people/search"
    MATCH_PATH = "/api/v1/people/match"
    ORGANIZATION_PATH = "/api/v1/organizations/enrich"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url or self.BASE_URL
        self._timeout = timeout
        self._rate_limiter = rate_limiter or RateLimiter(None)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ApolloClient":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Cache-Control": "no-cache",
                    "Accept": "application/json",
                    "X-Api-Key": self._api_key,
                },
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search_people(self, params: PeopleSearchParams) -> List[Dict[str, Any]]:
        payload: Dict[str, Any] = {
            "q_organization_domains": list(params.organization_domains),
            "page": params.page,
            "per_page": params.per_page,
            "person_titles": list(params.titles),
            "person_locations": list(params.locations),
            "organization_industries": list(params.industries),
        }
        if params.organization_names:
            payload["q_organization_name"] = params.organization_names[0]

        data = await self._request("POST", self.SEARCH_PATH, json=payload)
        people = data.get("people") or []
        LOGGER.debug("Search for %s returned %s people", params.titles, len(people))
        return [person for person in people if isinstance(person, dict)]

    async def match_person(
        self,
        *,
        first_name: str,
        last_name: str,
        organization_name: str = "",
    ) -> Optional[Dict[str, Any]]:
        payload = {
            "first_name": first_name,
            "last_name": last_name,
            "organization_name": organization_name,
            "reveal_personal_emails": False,
            "reveal_phone_number": False,
        }
        data = await self._request("POST", self.MATCH_PATH, json=payload)
        person = data.get("person")
        return person if isinstance(person, dict) else None

    async def enrich_organization(self, domain: str) -> Optional[Dict[str, Any]]:
        cleaned = clean_domain(domain)
        if not cleaned:
            return None
        data = await self._request("GET", self.ORGANIZATION_PATH, params={"domain": cleaned})
        organization = data.get("organization")
        return organization if isinstance(organization, dict) else None

    async def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        client = self._ensure_client()
        await self._rate_limiter.acquire()
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            LOGGER.error(
                "Apollo request %s %s failed with status %s: %s",
                method,
                path,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise SearchProviderError(
                f"Apollo responded with status {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            LOGGER.exception("Apollo request %s %s failed", method, path)
            raise SearchProviderError(f"Could not reach Apollo: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise SearchProviderError("Apollo returned a response that is not JSON") from exc
        return data if isinstance(data, dict) else {}


__all__ = ["ApolloClient", "SearchProviderError", "clean_domain"]
