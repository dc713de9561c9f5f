"""Search and enrichment orchestration."""

from .enrichment import EnrichmentOrchestrator
from .search import LeadSearchError, SearchOrchestrator

__all__ = ["EnrichmentOrchestrator", "LeadSearchError", "SearchOrchestrator"]
