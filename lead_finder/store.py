"""Curation store for saved leads and the storage ports it persists through."""
from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union

from .models import Lead, SaveOutcome

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

STORAGE_KEY = "savedLeads"
EXPORT_HEADERS = ("Name", "Job Title", "Company", "Location", "Email", "LinkedIn URL")


class StoragePort(Protocol):
    """Key/value persistence holding serialised strings."""

    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStorage:
    """Keep every key in a single JSON document on disk.

    An unreadable document is treated as empty; the next write replaces it.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def read(self, key: str) -> Optional[str]:
        document = self._load()
        value = document.get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        document = self._load()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            LOGGER.warning("Storage file %s is unreadable; starting empty", self.path)
            return {}
        return document if isinstance(document, dict) else {}


class CurationStore:
    """The user's saved leads, written through to ``storage`` after every change."""

    def __init__(self, storage: Optional[StoragePort] = None, *, key: str = STORAGE_KEY) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._key = key
        self._leads: List[Lead] = self._restore()

    @property
    def leads(self) -> List[Lead]:
        return list(self._leads)

    def __len__(self) -> int:
        return len(self._leads)

    def __contains__(self, lead_id: object) -> bool:
        return any(lead.id == lead_id for lead in self._leads)

    def get(self, lead_id: str) -> Optional[Lead]:
        return next((lead for lead in self._leads if lead.id == lead_id), None)

    def add(self, leads: Iterable[Lead]) -> SaveOutcome:
        """Append leads whose ids are not stored yet; existing entries are never replaced."""

        known = {lead.id for lead in self._leads}
        outcome = SaveOutcome()
        for lead in leads:
            if lead.id in known:
                outcome.duplicates += 1
                continue
            known.add(lead.id)
            outcome.added.append(lead)
        if outcome.added:
            self._commit(self._leads + outcome.added)
        LOGGER.info("Saved %s leads (%s duplicates)", len(outcome.added), outcome.duplicates)
        return outcome

    def remove(self, lead_id: str) -> bool:
        remaining = [lead for lead in self._leads if lead.id != lead_id]
        if len(remaining) == len(self._leads):
            return False
        self._commit(remaining)
        return True

    def clear(self) -> None:
        self._commit([])

    def update(self, lead: Lead) -> bool:
        """Replace the stored lead with the same id; a removed lead stays removed."""

        if lead.id not in self:
            LOGGER.debug("Ignoring update for lead %s which is no longer saved", lead.id)
            return False
        self._commit([lead if stored.id == lead.id else stored for stored in self._leads])
        return True

    def export(self) -> str:
        """Return the saved leads as CSV text: a plain header row, then every cell quoted."""

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        buffer.write(",".join(EXPORT_HEADERS) + "\n")
        writer.writerows(export_row(lead) for lead in self._leads)
        return buffer.getvalue()

    def export_to(self, path: PathLike) -> Path:
        """Write :meth:`export` to a ``.csv`` file, or a spreadsheet for other suffixes."""

        output_path = Path(path)
        if output_path.suffix.lower() == ".csv":
            output_path.write_text(self.export(), encoding="utf-8")
            return output_path

        from .ingestion.exporters import export_leads

        return export_leads(self._leads, output_path)

    def _commit(self, leads: Sequence[Lead]) -> None:
        self._leads = list(leads)
        payload = json.dumps([lead.to_dict() for lead in self._leads], ensure_ascii=False)
        self._storage.write(self._key, payload)

    def _restore(self) -> List[Lead]:
        raw = self._storage.read(self._key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("saved leads must be a list")
            leads = [Lead.from_dict(record) for record in records]
        except (TypeError, ValueError, AttributeError):
            LOGGER.warning("Saved leads under %r are corrupt; starting with an empty store", self._key, exc_info=True)
            return []
        LOGGER.debug("Restored %s saved leads", len(leads))
        return leads


def export_row(lead: Lead) -> List[str]:
    return [
        lead.full_name,
        lead.job_title,
        lead.company,
        lead.location,
        lead.email or "",
        lead.profile_url,
    ]


__all__ = [
    "CurationStore",
    "EXPORT_HEADERS",
    "JsonFileStorage",
    "MemoryStorage",
    "STORAGE_KEY",
    "StoragePort",
    "export_row",
]
