"""Configuration helpers for the lead finder."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .catalog import DEFAULT_HOME_COUNTRY, Catalog
from .orchestrator.enrichment import BATCH_TIMEOUT, PER_CALL_TIMEOUT
from .providers.openai_client import DEFAULT_MODEL

LOGGER = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".lead_finder" / "saved_leads.json"


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' could not be parsed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


@dataclass
class Settings:
    """Everything needed to wire providers, orchestrators and the saved-lead store."""

    apollo_api_key: str = ""
    openai_api_key: str = ""
    apollo_base_url: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    search_calls_per_minute: Optional[float] = None
    per_call_timeout: float = PER_CALL_TIMEOUT
    batch_timeout: float = BATCH_TIMEOUT
    home_country: str = DEFAULT_HOME_COUNTRY
    storage_path: Path = DEFAULT_STORAGE_PATH
    catalog: Catalog = field(default_factory=Catalog)
    synonyms: Dict[str, List[str]] = field(default_factory=dict)

    def require_search_key(self) -> str:
        if not self.apollo_api_key:
            raise ConfigurationError("An Apollo API key is required (set APOLLO_API_KEY or apollo.api_key)")
        return self.apollo_api_key


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping")
    return value


def _number(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Configuration value '{name}' must be a number, got {value!r}") from exc


def load_settings(path: str | Path | None = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from an optional config file and the environment.

    Environment variables win over file values so that keys never need to be
    written to disk.
    """

    environ = os.environ if environ is None else environ
    data = load_configuration(path) if path else {}
    apollo = _section(data, "apollo")
    openai = _section(data, "openai")
    enrichment = _section(data, "enrichment")
    storage = _section(data, "storage")

    settings = Settings(
        apollo_api_key=environ.get("APOLLO_API_KEY") or str(apollo.get("api_key") or ""),
        openai_api_key=environ.get("OPENAI_API_KEY") or str(openai.get("api_key") or ""),
        apollo_base_url=apollo.get("base_url") or None,
        openai_model=environ.get("OPENAI_MODEL") or str(openai.get("model") or DEFAULT_MODEL),
        home_country=str(data.get("home_country") or DEFAULT_HOME_COUNTRY),
        storage_path=Path(environ.get("LEAD_FINDER_STORAGE") or storage.get("path") or DEFAULT_STORAGE_PATH).expanduser(),
        catalog=Catalog.from_config(_section(data, "catalog")),
    )
    if apollo.get("calls_per_minute"):
        settings.search_calls_per_minute = _number(apollo["calls_per_minute"], "apollo.calls_per_minute")
    if "per_call_timeout" in enrichment:
        settings.per_call_timeout = _number(enrichment["per_call_timeout"], "enrichment.per_call_timeout")
    if "batch_timeout" in enrichment:
        settings.batch_timeout = _number(enrichment["batch_timeout"], "enrichment.batch_timeout")
    for term, values in _section(data, "synonyms").items():
        if isinstance(values, str):
            values = [values]
        settings.synonyms[str(term)] = [str(value) for value in values]

    LOGGER.debug("Loaded settings (storage=%s, model=%s)", settings.storage_path, settings.openai_model)
    return settings


__all__ = ["ConfigurationError", "DEFAULT_STORAGE_PATH", "Settings", "load_configuration", "load_settings"]
