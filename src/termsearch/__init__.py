"""
Term Search Engine Module

Typo-tolerant search over in-memory "searchable" items (commands, settings,
domain objects). Items declare a list of search terms; the engine keeps an
inverted index (exact lookups) and a BK-tree (edit-distance lookups) in sync
as items are added, removed or change their terms.

The module is organised leaf-first:
- distance:  Levenshtein edit distance
- bktree:    BK-tree for bounded-radius fuzzy term lookups
- index:     inverted index term -> items
- engine:    SearchEngine facade keeping both structures consistent
- search:    ranking, closest-term highlighting and settings-driven queries

Example Usage:
    from termsearch import SearchEngine, SearchItem

    engine = SearchEngine()
    engine.add_to_index(SearchItem("Map Settings", ["arcanum", "settings"]))

    hits = engine.search("settngs")
    for matched, item in engine.sort_search_results(hits, "settngs"):
        print(matched, item.result_name)
"""

# src/termsearch/__init__.py
from .config import Category, SearchMode, SearchSettings, SortingOption
from .distance import levenshtein
from .engine import SearchEngine
from .models import Searchable, SearchItem, SearchResult
from .normalize import generate_search_terms
from .search import run_query

__version__ = "1.0.0"
__all__ = [
    "Category", "SearchMode", "SearchSettings", "SortingOption",
    "levenshtein", "SearchEngine", "Searchable", "SearchItem", "SearchResult",
    "generate_search_terms", "run_query",
]
