"""Lexical variants of free-text job titles.

The people search API matches titles by keyword, so a Portuguese query such as
``"Coordenador de TI"`` misses records stored as ``"Coordenador TI"`` or
``"COORDENADOR DE TI"``. :func:`variations` widens a query into the variants
worth trying, in the order they should be tried.
"""
from __future__ import annotations

from typing import Iterable, List

PREPOSITIONS = frozenset(
    {
        "de",
        "da",
        "do",
        "das",
        "dos",
        "em",
        "na",
        "no",
        "nas",
        "nos",
        "para",
        "pela",
        "pelo",
        "com",
        "sem",
        "sob",
        "sobre",
    }
)


def title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split())


def _dedupe(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def normalize_title(title: str) -> str:
    """Drop interior prepositions/articles; the first and last tokens are kept."""

    tokens = title.split()
    kept = [
        token
        for index, token in enumerate(tokens)
        if index in (0, len(tokens) - 1) or token.lower() not in PREPOSITIONS
    ]
    return " ".join(kept)


def _interior_de_index(tokens: List[str]) -> int:
    for index, token in enumerate(tokens):
        if 0 < index < len(tokens) - 1 and token.lower() == "de":
            return index
    return -1


def variations(title: str) -> List[str]:
    """Return the de-duplicated variants of ``title`` in generation order.

    The raw input is always the first entry, so the result is never empty.
    """

    base: List[str] = [title]
    tokens = title.split()

    normalized = normalize_title(title)
    if len(normalized.split()) != len(tokens):
        base.append(normalized)

    de_index = _interior_de_index(tokens)
    if de_index >= 0:
        base.append(" ".join(token for token in tokens if token.lower() != "de"))
        base.append(" ".join(tokens[:de_index] + tokens[de_index + 1:]))

    variants: List[str] = []
    for value in _dedupe(base):
        variants.extend([value, title_case(value), value.upper()])
    return _dedupe(variants) or [title]


__all__ = ["PREPOSITIONS", "normalize_title", "title_case", "variations"]
