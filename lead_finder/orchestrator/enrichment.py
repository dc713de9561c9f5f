"""Concurrent, deadline-bounded employee count enrichment."""
from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from ..catalog import NOT_AVAILABLE, Catalog
from ..models import Lead

LOGGER = logging.getLogger(__name__)

EmployeeCountLookup = Callable[[str, str], Awaitable[Optional[str]]]

PER_CALL_TIMEOUT = 8.0
BATCH_TIMEOUT = 30.0

_PASS_COUNTER = itertools.count(1)


def has_employee_count(lead: Lead) -> bool:
    value = (lead.employee_count or "").strip()
    return bool(value) and value != NOT_AVAILABLE


class EnrichmentOrchestrator:
    """Fill missing employee counts with one AI lookup per lead.

    Lookups run concurrently. Each has its own deadline and the whole batch has
    an outer deadline; anything unresolved by then gets the industry fallback.
    The returned list always has one lead per input, in input order, each
    tagged with the pass number in ``last_updated``.
    """

    def __init__(
        self,
        lookup: EmployeeCountLookup,
        *,
        catalog: Optional[Catalog] = None,
        per_call_timeout: float = PER_CALL_TIMEOUT,
        batch_timeout: float = BATCH_TIMEOUT,
    ) -> None:
        self._lookup = lookup
        self._catalog = catalog or Catalog()
        self._per_call_timeout = per_call_timeout
        self._batch_timeout = batch_timeout

    async def enrich(self, leads: Sequence[Lead]) -> List[Lead]:
        marker = next(_PASS_COUNTER)
        enriched: List[Optional[Lead]] = [None] * len(leads)
        tasks: Dict[asyncio.Task, int] = {}

        for index, lead in enumerate(leads):
            if has_employee_count(lead):
                LOGGER.debug("Lead %s already has employee count %s", lead.id, lead.employee_count)
                enriched[index] = replace(lead, last_updated=marker)
            else:
                tasks[asyncio.ensure_future(self._resolve(lead))] = index

        if tasks:
            done, pending = await asyncio.wait(tasks, timeout=self._batch_timeout)
            for task in done:
                index = tasks[task]
                enriched[index] = replace(leads[index], employee_count=task.result(), last_updated=marker)
            if pending:
                LOGGER.warning(
                    "Enrichment batch deadline of %ss reached; %s lookups fall back",
                    self._batch_timeout,
                    len(pending),
                )
            for task in pending:
                task.cancel()
                index = tasks[task]
                enriched[index] = replace(
                    leads[index],
                    employee_count=self.fallback(leads[index]),
                    last_updated=marker,
                )
            await asyncio.gather(*pending, return_exceptions=True)

        LOGGER.info("Enrichment pass %s finished for %s leads (%s looked up)", marker, len(leads), len(tasks))
        return [lead for lead in enriched if lead is not None]

    def fallback(self, lead: Lead) -> str:
        return self._catalog.fallback_bucket(lead.industry)

    async def _resolve(self, lead: Lead) -> str:
        if not lead.company:
            return self.fallback(lead)
        try:
            value = await asyncio.wait_for(
                self._lookup(lead.company, lead.industry),
                timeout=self._per_call_timeout,
            )
        except asyncio.TimeoutError:
            LOGGER.warning("Employee count lookup for %s timed out after %ss", lead.company, self._per_call_timeout)
            return self.fallback(lead)
        except Exception:
            LOGGER.warning("Employee count lookup for %s failed", lead.company, exc_info=True)
            return self.fallback(lead)
        if not value:
            LOGGER.debug("No usable employee count for %s; using fallback", lead.company)
            return self.fallback(lead)
        return value


__all__ = [
    "BATCH_TIMEOUT",
    "EmployeeCountLookup",
    "EnrichmentOrchestrator",
    "PER_CALL_TIMEOUT",
    "has_employee_count",
]
