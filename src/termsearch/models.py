# src/termsearch/models.py
"""
Data models for the search engine.

- Searchable: the contract every indexed object satisfies. The engine only
  reads it; the owning object may change its search_terms at any time and
  tell the engine via SearchEngine.modify_in_index().
- SearchItem: a ready-made Searchable for catalogs, commands and tests.
- SearchResult: one ranked row (matched term + item) for display/highlighting.

These classes carry no indexing logic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Protocol, runtime_checkable

from .config import Category, NAMESPACE_SEPARATOR


@runtime_checkable
class Searchable(Protocol):
    search_terms: List[str]
    result_name: str
    namespace: str
    namespace_separator: str
    category: Category

    def relevance_score(self, query: str) -> float: ...


@dataclass(eq=False)  # identity semantics: two look-alike items are two set members
class SearchItem:
    """
    A concrete searchable object.

    Attributes
    ----------
    result_name : str
        Display name shown in result lists.
    search_terms : List[str]
        Terms the item is found by. Mutable; after changing it call
        SearchEngine.modify_in_index(item, old_terms).
    namespace : str
        Path of the item inside its owner, segments joined by namespace_separator.
    category : Category
        Kind of item, used by category filtering.
    scorer : Optional[Callable[[str], float]]
        Relevance function for a query; when absent every query scores 1.0.
    """
    result_name: str
    search_terms: List[str] = field(default_factory=list)
    namespace: str = ""
    category: Category = Category.ALL
    namespace_separator: str = NAMESPACE_SEPARATOR
    scorer: Optional[Callable[[str], float]] = field(default=None, repr=False)

    def relevance_score(self, query: str) -> float:
        if self.scorer is None:
            return 1.0
        return float(self.scorer(query))


@dataclass(frozen=True)
class SearchResult:
    matched_term: str
    item: Any

    # allows `for term, item in engine.sort_search_results(...)`
    def __iter__(self) -> Iterator[Any]:
        yield self.matched_term
        yield self.item
