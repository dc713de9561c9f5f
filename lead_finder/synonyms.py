"""Bilingual job title equivalents used to widen live and offline searches."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .titles import normalize_title, variations

JOB_TITLE_SYNONYMS: Dict[str, List[str]] = {
    "cio": ["chief information officer", "diretor de ti", "diretor de tecnologia", "gerente de ti"],
    "cto": ["chief technology officer", "diretor de tecnologia"],
    "ceo": ["chief executive officer", "presidente", "diretor executivo"],
    "cfo": ["chief financial officer", "diretor financeiro"],
    "coo": ["chief operating officer", "diretor de operações"],
    "cmo": ["chief marketing officer", "diretor de marketing"],
    "chro": ["chief human resources officer", "diretor de rh", "diretor de recursos humanos"],
    "ciso": ["chief information security officer", "diretor de segurança da informação"],
    "diretor ti": ["it director", "chief information officer"],
    "diretor tecnologia": ["technology director", "chief technology officer"],
    "diretor financeiro": ["chief financial officer", "finance director"],
    "diretor executivo": ["chief executive officer", "executive director"],
    "diretor operações": ["chief operating officer", "operations director"],
    "diretor marketing": ["marketing director", "chief marketing officer"],
    "diretor comercial": ["sales director", "chief commercial officer"],
    "diretor rh": ["hr director", "chief human resources officer"],
    "presidente": ["president", "chief executive officer"],
    "gerente ti": ["it manager", "information technology manager"],
    "gerente projetos": ["project manager"],
    "gerente vendas": ["sales manager"],
    "gerente marketing": ["marketing manager"],
    "gerente rh": ["hr manager", "human resources manager"],
    "gerente operações": ["operations manager"],
    "coordenador ti": ["it coordinator", "it manager"],
    "coordenador marketing": ["marketing coordinator"],
    "coordenador projetos": ["project coordinator"],
    "analista sistemas": ["systems analyst"],
    "analista dados": ["data analyst"],
    "cientista dados": ["data scientist"],
    "engenheiro software": ["software engineer"],
    "desenvolvedor": ["developer", "software developer"],
    "chief information officer": ["cio", "diretor de ti"],
    "chief technology officer": ["cto", "diretor de tecnologia"],
    "chief executive officer": ["ceo", "presidente"],
    "chief financial officer": ["cfo", "diretor financeiro"],
    "it manager": ["gerente de ti"],
    "it coordinator": ["coordenador de ti"],
}


def _key(term: str) -> str:
    return term.strip().lower()


class SynonymTable:
    """Lookup over a static term -> equivalents mapping."""

    def __init__(self, mapping: Optional[Mapping[str, Sequence[str]]] = None) -> None:
        source = JOB_TITLE_SYNONYMS if mapping is None else mapping
        self._mapping: Dict[str, List[str]] = {_key(term): list(values) for term, values in source.items()}

    def extend(self, mapping: Mapping[str, Iterable[str]]) -> None:
        for term, values in mapping.items():
            existing = self._mapping.setdefault(_key(term), [])
            existing.extend(value for value in values if value not in existing)

    def equivalents(self, term: str) -> List[str]:
        return list(self._mapping.get(_key(term), []))

    def best_english_title(self, term: str) -> str:
        """Return the preferred equivalent of ``term`` or ``term`` itself."""

        equivalents = self.equivalents(term)
        return equivalents[0] if equivalents else term

    def enhanced_equivalents(self, term: str) -> List[str]:
        """Equivalents of ``term``, its normalised form and all its variations.

        Falls back to the variations themselves so callers always receive at
        least one candidate.
        """

        term_variations = variations(term)
        candidates: List[str] = []
        for source in [term, normalize_title(term), *term_variations]:
            for value in self.equivalents(source):
                if value not in candidates:
                    candidates.append(value)
        return candidates or term_variations


DEFAULT_SYNONYMS = SynonymTable()


def equivalents(term: str) -> List[str]:
    return DEFAULT_SYNONYMS.equivalents(term)


def best_english_title(term: str) -> str:
    return DEFAULT_SYNONYMS.best_english_title(term)


def enhanced_equivalents(term: str) -> List[str]:
    return DEFAULT_SYNONYMS.enhanced_equivalents(term)


__all__ = [
    "DEFAULT_SYNONYMS",
    "JOB_TITLE_SYNONYMS",
    "SynonymTable",
    "best_english_title",
    "enhanced_equivalents",
    "equivalents",
]
