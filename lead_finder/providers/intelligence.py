"""Company and profile lookups answered by a language model.

Answers are heuristics: every closed-vocabulary response is checked against the
:class:`~lead_finder.catalog.Catalog` and replaced when it does not match.
"""
from __future__ import annotations

import logging
import re
from textwrap import dedent
from typing import Optional

from ..catalog import ALL_INDUSTRIES, INDUSTRY_NOT_SPECIFIED, URL_NOT_FOUND, Catalog
from ..models import Lead
from .apollo import clean_domain
from .base import CompletionProvider

LOGGER = logging.getLogger(__name__)

DESCRIPTION_UNAVAILABLE = "Could not generate a company description."

_NUMBER = re.compile(r"\d[\d,.]*")


class AILookupError(RuntimeError):
    """Raised when a user-requested analysis cannot be produced."""


def _clean_answer(text: str) -> str:
    return text.strip().strip("\"'`. ")


class CompanyIntelligence:
    """Prompts and answer validation for every AI-backed lookup."""

    def __init__(self, completion: CompletionProvider, catalog: Optional[Catalog] = None) -> None:
        self._completion = completion
        self._catalog = catalog or Catalog()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def completion(self) -> CompletionProvider:
        return self._completion

    async def company_industry(self, company_name: str) -> str:
        """Return an industry from the catalog, or the not-specified sentinel."""

        if not company_name or not company_name.strip():
            return INDUSTRY_NOT_SPECIFIED
        options = [item for item in self._catalog.industries if item != ALL_INDUSTRIES]
        prompt = "\n".join(
            [
                "You are a market data specialist. Given only a company name, answer with the",
                "company's main industry using exactly one of these options:",
                "",
                *options,
                "",
                "Rules:",
                "1. Answer ONLY with the exact industry name from the list above",
                "2. If there is no exact match, choose the closest industry",
                f'3. If you cannot identify the industry, answer "{INDUSTRY_NOT_SPECIFIED}"',
                "4. Do not add explanations",
                "",
                f"Company name: {company_name}",
            ]
        )
        try:
            answer = _clean_answer(await self._completion.complete(prompt, max_tokens=50, temperature=0.2))
        except Exception:
            LOGGER.warning("Industry lookup failed for %s", company_name, exc_info=True)
            return INDUSTRY_NOT_SPECIFIED
        if self._catalog.is_industry(answer):
            return answer
        LOGGER.debug("Discarding industry answer %r for %s", answer, company_name)
        return INDUSTRY_NOT_SPECIFIED

    async def company_employee_count(self, company_name: str, industry: str = "") -> Optional[str]:
        """Return an employee bucket label or ``None`` for an unusable answer.

        Provider failures propagate so the caller can apply its own fallback.
        """

        buckets = ", ".join(self._catalog.employee_buckets)
        prompt = dedent(
            f"""
            Estimate how many employees the company below has. Answer ONLY with one of
            these ranges: {buckets}. Do not add explanations.

            Company name: {company_name}
            Industry: {industry or INDUSTRY_NOT_SPECIFIED}
            """
        ).strip()
        answer = _clean_answer(await self._completion.complete(prompt, max_tokens=20, temperature=0.2))
        return self.parse_bucket(answer)

    def parse_bucket(self, answer: str) -> Optional[str]:
        if self._catalog.is_bucket(answer):
            return answer
        for label in sorted(self._catalog.employee_buckets, key=len, reverse=True):
            if label in answer:
                return label
        match = _NUMBER.search(answer)
        if match:
            digits = re.sub(r"[,.]", "", match.group(0))
            if digits:
                return self._catalog.bucket_for(int(digits))
        return None

    async def company_url(self, company_name: str) -> str:
        prompt = dedent(
            f"""
            You are a data assistant. Given only a company name, answer with the URL of the
            company's official website.

            Rules:
            1. Answer ONLY with the official URL (e.g. https://www.company.com)
            2. Do not add explanations
            3. If you cannot find it, answer "{URL_NOT_FOUND}"

            Company name: {company_name}
            """
        ).strip()
        try:
            answer = _clean_answer(await self._completion.complete(prompt, max_tokens=60, temperature=0.2))
        except Exception:
            LOGGER.warning("Company URL lookup failed for %s", company_name, exc_info=True)
            return URL_NOT_FOUND
        return answer if answer.startswith("http") else URL_NOT_FOUND

    async def company_domain(self, company_name: str) -> str:
        """Return the bare website domain of ``company_name`` or an empty string."""

        if not company_name.strip():
            return ""
        prompt = (
            f"What is the official website domain of the company named '{company_name}'? "
            "Answer only with the domain, without any extra text."
        )
        try:
            answer = await self._completion.complete(prompt, max_tokens=20, temperature=0.2)
        except Exception:
            LOGGER.warning("Company domain lookup failed for %s", company_name, exc_info=True)
            return ""
        domain = clean_domain(answer)
        return domain if "." in domain else ""

    async def company_description(self, domain: str) -> str:
        prompt = f"Briefly describe the company whose website is {domain}."
        try:
            answer = await self._completion.complete(prompt, max_tokens=300, temperature=0.7)
        except Exception:
            LOGGER.warning("Company description lookup failed for %s", domain, exc_info=True)
            return DESCRIPTION_UNAVAILABLE
        return answer or DESCRIPTION_UNAVAILABLE

    async def improve_description(self, description: str) -> str:
        prompt = f"Improve and expand the following company description: {description}"
        try:
            answer = await self._completion.complete(prompt, max_tokens=120, temperature=0.7)
        except Exception:
            LOGGER.warning("Description improvement failed", exc_info=True)
            return f"{description}\n\n(Could not improve the description.)"
        return answer or description

    async def analyze_profile(self, lead: Lead) -> str:
        """Return a marketing-oriented analysis of ``lead``'s profile."""

        history = [
            f"- {job.title} at {job.company} ({job.duration}): {job.description}" for job in lead.work_history
        ]
        prompt = "\n".join(
            [
                "Analyse the professional profile below and write a detailed, analytical report.",
                "",
                f"Name: {lead.full_name}",
                f"Current role: {lead.job_title}",
                f"Company: {lead.company}",
                f"Location: {lead.location}",
                f"Industry: {lead.industry}",
                "",
                "Work history:",
                *(history or ["- not available"]),
                "",
                "Structure the report in four sections: profile overview, experience analysis,",
                "marketing persona (pains, goals, preferred channels, engaging content, decision",
                "triggers) and recommended approach.",
            ]
        )
        try:
            answer = await self._completion.complete(prompt, max_tokens=800, temperature=0.7)
        except Exception as exc:
            LOGGER.exception("Profile analysis failed for %s", lead.id)
            raise AILookupError("Failed to analyse the profile. Please try again.") from exc
        return answer or "Could not generate the analysis."


__all__ = ["AILookupError", "CompanyIntelligence", "DESCRIPTION_UNAVAILABLE"]
