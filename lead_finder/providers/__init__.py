"""Adapters for the remote people search and AI completion services."""

from .apollo import ApolloClient, SearchProviderError, clean_domain  # noqa: F401
from .base import CompletionProvider, PeopleSearchParams, SearchProvider  # noqa: F401
from .intelligence import AILookupError, CompanyIntelligence  # noqa: F401
from .openai_client import OpenAICompletionProvider  # noqa: F401
from .sample import StaticCompletionProvider, StaticSearchProvider  # noqa: F401

__all__ = [
    "AILookupError",
    "ApolloClient",
    "CompanyIntelligence",
    "CompletionProvider",
    "OpenAICompletionProvider",
    "PeopleSearchParams",
    "SearchProvider",
    "SearchProviderError",
    "StaticCompletionProvider",
    "StaticSearchProvider",
    "clean_domain",
]
