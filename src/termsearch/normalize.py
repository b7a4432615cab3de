from __future__ import annotations
from typing import Iterable, List


def canonical(term: str) -> str:
    """Canonical form used for every stored or compared term (case-folded)."""
    return term.casefold()


def canonical_all(terms: Iterable[str]) -> List[str]:
    return [canonical(t) for t in terms]


def _split_camel(name: str) -> List[str]:
    """Cut before every uppercase letter (any script): 'KarteÜbersicht' -> ['Karte', 'Übersicht']."""
    parts: List[str] = []
    cur = ""
    for ch in name:
        if ch.isupper() and cur:
            parts.append(cur)
            cur = ""
        cur += ch
    if cur:
        parts.append(cur)
    return [p.strip() for p in parts if p.strip()]


def generate_search_terms(name: str) -> List[str]:
    """
    Split an identifier on uppercase boundaries and build its search terms:
      - every part, lower-cased
      - the cumulative concatenation of the first 2..N parts
    Example: ThisIsAnExample -> this, is, an, example, thisis, thisisan, thisisanexample
    """
    parts = [p.lower() for p in _split_camel(name.strip())]
    terms = list(parts)
    for i in range(2, len(parts) + 1):
        terms.append("".join(parts[:i]))
    return terms


def build_namespace(parts: Iterable[str], separator: str) -> str:
    """Join namespace segments, skipping blanks ('Settings', 'Map' -> 'Settings>Map')."""
    return separator.join(p for p in parts if p)
