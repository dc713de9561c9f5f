"""Lead search, enrichment, offline filtering and curation toolkit."""

from . import models  # noqa: F401
from .catalog import Catalog
from .models import Lead, Notification, SaveOutcome, SearchQuery
from .offline import OfflineCriteria, OfflineFilterEngine
from .orchestrator import EnrichmentOrchestrator, LeadSearchError, SearchOrchestrator
from .session import LeadFinderSession
from .store import CurationStore
from .synonyms import SynonymTable
from .titles import variations

__all__ = [
    "Catalog",
    "CurationStore",
    "EnrichmentOrchestrator",
    "Lead",
    "LeadFinderSession",
    "LeadSearchError",
    "Notification",
    "OfflineCriteria",
    "OfflineFilterEngine",
    "SaveOutcome",
    "SearchOrchestrator",
    "SearchQuery",
    "SynonymTable",
    "variations",
    "ingestion",
    "orchestrator",
    "providers",
]
