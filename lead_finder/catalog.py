"""Closed vocabularies shared by the search, enrichment and offline workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

INDUSTRY_NOT_SPECIFIED = "Industry not specified"
LOCATION_NOT_AVAILABLE = "Location not available"
NOT_AVAILABLE = "N/A"
URL_NOT_FOUND = "URL not found"

ALL_LOCATIONS = "All Locations"
ALL_INDUSTRIES = "All Industries"
ALL_BUCKETS = "all"

DEFAULT_HOME_COUNTRY = "United States"
DEFAULT_EMPLOYEE_BUCKET = "11-50"

INDUSTRIES: List[str] = [
    ALL_INDUSTRIES,
    "Accounting",
    "Agriculture",
    "Automotive",
    "Banking",
    "Construction",
    "Consulting",
    "Education",
    "Energy",
    "Entertainment",
    "Finance",
    "Government",
    "Healthcare",
    "Hospitality",
    "Information Technology",
    "Insurance",
    "Legal",
    "Logistics",
    "Manufacturing",
    "Marketing",
    "Media",
    "Non-profit",
    "Pharmaceuticals",
    "Real Estate",
    "Retail",
    "Technology",
    "Telecommunications",
    "Transportation",
]

# Upper bound of ``None`` means open ended.
EMPLOYEE_RANGES: Dict[str, Tuple[int, Optional[int]]] = {
    "1-10": (1, 10),
    "11-50": (11, 50),
    "51-200": (51, 200),
    "201-500": (201, 500),
    "501-1000": (501, 1000),
    "1001-5000": (1001, 5000),
    "5001+": (5001, None),
}

EMPLOYEE_FALLBACK_BY_INDUSTRY: Dict[str, str] = {
    "technology": "51-200",
    "information technology": "51-200",
    "healthcare": "201-500",
    "finance": "201-500",
    "banking": "501-1000",
    "insurance": "201-500",
    "manufacturing": "201-500",
    "retail": "51-200",
    "education": "51-200",
    "consulting": "11-50",
    "marketing": "11-50",
    "government": "501-1000",
    "telecommunications": "501-1000",
    "default": DEFAULT_EMPLOYEE_BUCKET,
}

LOCATIONS: List[str] = [
    ALL_LOCATIONS,
    "São Paulo",
    "Rio de Janeiro",
    "Belo Horizonte",
    "Curitiba",
    "Porto Alegre",
    "New York",
    "San Francisco",
    "London",
]


@dataclass
class Catalog:
    """Configurable copy of the vocabularies used at runtime."""

    industries: List[str] = field(default_factory=lambda: list(INDUSTRIES))
    employee_ranges: Dict[str, Tuple[int, Optional[int]]] = field(
        default_factory=lambda: dict(EMPLOYEE_RANGES)
    )
    employee_fallbacks: Dict[str, str] = field(
        default_factory=lambda: dict(EMPLOYEE_FALLBACK_BY_INDUSTRY)
    )
    default_bucket: str = DEFAULT_EMPLOYEE_BUCKET

    @property
    def employee_buckets(self) -> List[str]:
        return list(self.employee_ranges)

    @classmethod
    def from_config(cls, data: Optional[Mapping[str, Any]]) -> "Catalog":
        catalog = cls()
        if not data:
            return catalog
        if data.get("industries"):
            catalog.industries = [str(item) for item in data["industries"]]
        if data.get("employee_ranges"):
            ranges: Dict[str, Tuple[int, Optional[int]]] = {}
            for label, bounds in data["employee_ranges"].items():
                low, high = (list(bounds) + [None])[:2]
                ranges[str(label)] = (int(low), int(high) if high is not None else None)
            catalog.employee_ranges = ranges
        if data.get("employee_fallbacks"):
            catalog.employee_fallbacks.update(
                {str(key).lower(): str(value) for key, value in data["employee_fallbacks"].items()}
            )
        if data.get("default_bucket"):
            catalog.default_bucket = str(data["default_bucket"])
        return catalog

    def is_industry(self, value: Optional[str]) -> bool:
        return bool(value) and value in self.industries and value != ALL_INDUSTRIES

    def is_bucket(self, value: Optional[str]) -> bool:
        return bool(value) and value in self.employee_ranges

    def bucket_for(self, count: int) -> Optional[str]:
        """Return the bucket label containing ``count`` or ``None``."""

        for label, (low, high) in self.employee_ranges.items():
            if count >= low and (high is None or count <= high):
                return label
        return None

    def in_bucket(self, count: int, bucket: str) -> bool:
        bounds = self.employee_ranges.get(bucket)
        if bounds is None:
            return False
        low, high = bounds
        return count >= low and (high is None or count <= high)

    def fallback_bucket(self, industry: Optional[str]) -> str:
        """Deterministic employee bucket used when the AI lookup is unavailable."""

        if not industry or industry == INDUSTRY_NOT_SPECIFIED:
            return self.default_bucket
        key = industry.strip().lower()
        if key in self.employee_fallbacks:
            return self.employee_fallbacks[key]
        for name, bucket in self.employee_fallbacks.items():
            if name != "default" and name in key:
                return bucket
        return self.employee_fallbacks.get("default", self.default_bucket)


__all__ = [
    "ALL_BUCKETS",
    "ALL_INDUSTRIES",
    "ALL_LOCATIONS",
    "Catalog",
    "DEFAULT_EMPLOYEE_BUCKET",
    "DEFAULT_HOME_COUNTRY",
    "EMPLOYEE_FALLBACK_BY_INDUSTRY",
    "EMPLOYEE_RANGES",
    "INDUSTRIES",
    "INDUSTRY_NOT_SPECIFIED",
    "LOCATIONS",
    "LOCATION_NOT_AVAILABLE",
    "NOT_AVAILABLE",
    "URL_NOT_FOUND",
]
