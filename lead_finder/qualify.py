"""Quality gate deciding which search results are worth outreach."""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

from .catalog import LOCATION_NOT_AVAILABLE, NOT_AVAILABLE
from .models import Lead

LOGGER = logging.getLogger(__name__)

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(slots=True)
class QualificationChecks:
    basic_info: bool
    email: bool
    linkedin: bool
    company: bool
    location: bool
    work_history: bool

    @property
    def passed(self) -> bool:
        return all(asdict(self).values())

    def failed(self) -> List[str]:
        return [name for name, ok in asdict(self).items() if not ok]


def check_lead(lead: Lead) -> QualificationChecks:
    return QualificationChecks(
        basic_info=bool(lead.first_name and lead.last_name and lead.job_title and lead.company),
        email=bool(lead.email and _EMAIL.match(lead.email) and lead.email_verified),
        linkedin="linkedin.com/in/" in (lead.profile_url or "").lower(),
        company=bool(lead.company and lead.industry and lead.employee_count and lead.employee_count != NOT_AVAILABLE),
        location=bool(lead.location and lead.location != LOCATION_NOT_AVAILABLE),
        work_history=bool(lead.work_history),
    )


def qualify_lead(lead: Lead) -> bool:
    checks = check_lead(lead)
    if not checks.passed:
        LOGGER.debug("Lead %s failed qualification: %s", lead.id, ", ".join(checks.failed()))
    return checks.passed


def qualify_leads(leads: Sequence[Lead]) -> List[Lead]:
    """Keep the leads that pass every check, in their original order."""

    qualified = [lead for lead in leads if qualify_lead(lead)]
    LOGGER.info("%s of %s leads qualified", len(qualified), len(leads))
    return qualified


def qualification_report(leads: Sequence[Lead]) -> Dict[str, QualificationChecks]:
    return {lead.id: check_lead(lead) for lead in leads}


__all__ = ["QualificationChecks", "check_lead", "qualification_report", "qualify_lead", "qualify_leads"]
