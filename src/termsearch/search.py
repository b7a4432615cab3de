from __future__ import annotations
import logging
import time
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence

from .config import Category, SearchMode, SearchSettings, SortingOption, NAMESPACE_SEPARATOR
from .distance import levenshtein
from .models import SearchResult
from .normalize import canonical

if TYPE_CHECKING:  # pragma: no cover
    from .engine import SearchEngine

log = logging.getLogger(__name__)


# ---------- closest term (highlighting) ----------

def get_closest_match(query: str, terms: Sequence[str]) -> str:
    """
    Return the term nearest to query by edit distance, or "" for no terms.
    Ties keep the earliest term (strict < while scanning).
    """
    if not terms:
        return ""
    q = canonical(query)
    closest = terms[0]
    best = levenshtein(q, canonical(closest))
    for term in terms[1:]:
        d = levenshtein(q, canonical(term))
        if d < best:
            best, closest = d, term
    return closest


# ---------- relevance ----------

def _terms_of(item: Any) -> List[str]:
    return list(getattr(item, "search_terms", ()) or ())


def relevance(item: Any, query: str) -> float:
    """
    Relevance of item for query. Uses the item's own relevance_score() when it has
    one; otherwise items whose nearest term is closer to the query score higher.
    """
    score = getattr(item, "relevance_score", None)
    if callable(score):
        return float(score(query))
    terms = _terms_of(item)
    if not terms:
        return float("-inf")
    nearest = get_closest_match(query, terms)
    return -float(levenshtein(canonical(query), canonical(nearest)))


def sort_search_results(results: Iterable[Any], query: str,
                        ascending: bool = False) -> List[SearchResult]:
    """Order results by relevance (stable) and pair each with its closest term."""
    items = list(results)
    if not items or not query or not query.strip():
        return []
    ordered = sorted(items, key=lambda it: relevance(it, query), reverse=not ascending)
    return [SearchResult(get_closest_match(query, _terms_of(it)), it) for it in ordered]


# ---------- caller-side options ----------

def _namespace_key(item: Any) -> List[str]:
    sep = getattr(item, "namespace_separator", NAMESPACE_SEPARATOR) or NAMESPACE_SEPARATOR
    return str(getattr(item, "namespace", "")).split(sep)


def apply_sorting(items: Iterable[Any], query: str, option: SortingOption) -> List[Any]:
    """
    RELEVANCE    -> highest relevance first
    NAMESPACE    -> segment by segment (ordinal), a shorter path before its extensions
    ALPHABETICAL -> ordinal on result_name
    """
    items = list(items)
    if not items or not query or not query.strip():
        return []
    if option is SortingOption.RELEVANCE:
        return sorted(items, key=lambda it: relevance(it, query), reverse=True)
    if option is SortingOption.NAMESPACE:
        return sorted(items, key=_namespace_key)
    if option is SortingOption.ALPHABETICAL:
        return sorted(items, key=lambda it: str(getattr(it, "result_name", "")))
    raise ValueError(f"unsupported sorting option: {option!r}")


def filter_by_category(items: Iterable[Any], category: Category) -> List[Any]:
    if category == Category.ALL:
        return list(items)
    return [it for it in items if getattr(it, "category", Category.NONE) & category]


def _dedupe(items: Iterable[Any]) -> List[Any]:
    return list(dict.fromkeys(items))


def run_query(engine: "SearchEngine", query: str,
              settings: Optional[SearchSettings] = None,
              top_k: Optional[int] = None) -> List[SearchResult]:
    """
    Apply a SearchSettings object on top of the engine's core operations:
      1) collect candidates (exact / fuzzy / fuzzy per query word)
      2) keep the requested categories
      3) sort by the configured option
      4) cut to top_k and attach the closest matching term to every row
    """
    if not query or not query.strip():
        return []
    settings = (settings or SearchSettings()).validate()
    t0 = time.perf_counter()

    mode = settings.search_mode
    if mode is SearchMode.EXACT_MATCH or settings.whole_word:
        found = _dedupe(engine.search_exact(query.strip()))
    elif mode is SearchMode.FUZZY:
        found = engine.search(query.strip(), settings.max_edit_distance)
    else:
        found = list(engine.search(query.strip(), settings.max_edit_distance))
        parts = query.split()
        if len(parts) > 1:
            for part in parts:
                found.extend(engine.search(part, settings.max_edit_distance))
        found = _dedupe(found)

    kept = filter_by_category(found, settings.category)
    ordered = apply_sorting(kept, query, settings.sorting_option)
    if top_k is not None:
        ordered = ordered[:max(0, int(top_k))]

    rows = [SearchResult(get_closest_match(query, _terms_of(it)), it) for it in ordered]
    log.debug("run_query(%r) mode=%s: %d candidates, %d after filter, %.2f ms",
              query, mode.value, len(found), len(kept), (time.perf_counter() - t0) * 1000)
    return rows
