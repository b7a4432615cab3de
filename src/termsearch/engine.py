# termsearch/engine.py
from __future__ import annotations

import logging
import time
from collections import Counter
from typing import Any, Dict, Iterable, List, Sequence

from . import config as CFG
from .bktree import BKTree
from .config import Category
from .index import InvertedIndex
from .models import SearchResult
from .normalize import canonical, canonical_all
from .search import get_closest_match, sort_search_results

log = logging.getLogger(__name__)


class SearchEngine:
    """
    Keeps an inverted term index and a BK-tree in step and answers queries from both:
      - inverted index: canonical term -> items declaring it (exact lookups),
      - BK-tree: every canonical term ever inserted (fuzzy lookups by edit distance).

    Public API:
      * add_to_index(item) / remove_from_index(item) / modify_in_index(item, old_terms)
      * search_exact(query), search(query, max_distance)
      * sort_search_results(results, query, ascending), get_closest_match(query, terms)

    Construct one engine in the application's entry point and pass it to whoever
    registers or queries items. Not thread-safe: callers sharing an engine across
    threads must synchronize around it.

    Removing items only touches the inverted index; the tree keeps every term it
    has seen, so a fuzzy match may resolve to no items. compact() rebuilds the
    tree from the live terms when that waste matters.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.index = InvertedIndex()
        self.tree = BKTree()

    # ------------- write path -------------

    # /* ~~~ Register every term of an item ~~~ */
    def add_to_index(self, item: Any) -> None:
        terms = list(item.search_terms)
        for term in terms:
            self._add_term(item, canonical(term))
        log.debug("indexed %r under %d terms", _name(item), len(terms))

    # /* ~~~ Unregister an item; unknown items are a no-op ~~~ */
    def remove_from_index(self, item: Any) -> None:
        removed = 0
        for term in item.search_terms:
            if self.index.remove(item, canonical(term)):
                removed += 1
        log.debug("removed %r from %d terms", _name(item), removed)

    # /* ~~~ Apply only the difference between old_terms and the item's current terms ~~~ */
    def modify_in_index(self, item: Any, old_terms: Iterable[str]) -> None:
        new_terms = canonical_all(item.search_terms)
        dropped = 0
        for term in old_terms:
            key = canonical(term)
            if key in new_terms:
                new_terms.remove(key)  # unchanged
                continue
            if self.index.remove(item, key):
                dropped += 1

        for key in new_terms:
            self._add_term(item, key)
        log.debug("modified %r: -%d +%d terms", _name(item), dropped, len(new_terms))

    # ------------- read path -------------

    def search_exact(self, query: str) -> List[Any]:
        return list(self.index.lookup(canonical(query)))

    def search(self, query: str, max_distance: int = CFG.MAX_EDIT_DISTANCE) -> List[Any]:
        """Exact hits plus items of every term within max_distance edits, each item once."""
        t0 = time.perf_counter()
        query = canonical(query)
        results: Dict[Any, None] = dict.fromkeys(self.search_exact(query))
        exact = len(results)

        fuzzy_terms = self.tree.search_within(query, max_distance)
        for term in sorted(fuzzy_terms):
            for item in self.index.lookup(term):
                results.setdefault(item, None)

        log.debug("search(%r, %d) took %.2f ms: %d exact, %d total via %d fuzzy terms",
                  query, max_distance, (time.perf_counter() - t0) * 1000,
                  exact, len(results), len(fuzzy_terms))
        return list(results)

    # ------------- ranking -------------

    def sort_search_results(self, results: Iterable[Any], query: str,
                            ascending: bool = False) -> List[SearchResult]:
        return sort_search_results(results, query, ascending=ascending)

    def get_closest_match(self, query: str, terms: Sequence[str]) -> str:
        return get_closest_match(query, terms)

    # ------------- maintenance / stats -------------

    @property
    def size(self) -> int:
        """Number of live (term, item) registrations."""
        return self.index.postings

    def entries_per_category(self) -> Dict[Category, int]:
        """Postings per category, attributing each bucket to the category of its first item."""
        counts: Counter = Counter()
        for _term, bucket in self.index.items():
            category = getattr(bucket[0], "category", Category.NONE)
            counts[category] += len(bucket)
        return dict(counts)

    def compact(self) -> int:
        """Rebuild the BK-tree from the terms still in the index; returns how many stale terms were dropped."""
        before = len(self.tree)
        tree = BKTree()
        for term in self.index.terms():
            tree.insert(term)
        self.tree = tree
        dropped = before - len(tree)
        log.info("compacted term tree: %d -> %d terms", before, len(tree))
        return dropped

    def stats(self) -> Dict[str, int]:
        return {
            "terms": len(self.index),
            "postings": self.index.postings,
            "tree_terms": len(self.tree),
        }

    def clear(self) -> None:
        self.index.clear()
        self.tree.clear()
        log.info("search engine cleared")

    def __contains__(self, term: object) -> bool:
        return term in self.index

    # ------------- internals -------------

    def _add_term(self, item: Any, key: str) -> None:
        self.index.add(item, key)
        self.tree.insert(key)


def _name(item: Any) -> str:
    return str(getattr(item, "result_name", item))
