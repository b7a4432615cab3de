from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from .distance import levenshtein
from .normalize import canonical


@dataclass
class _Node:
    term: str
    children: Dict[int, "_Node"] = field(default_factory=dict)


class BKTree:
    """
    Burkhard-Keller tree over canonical terms, keyed by Levenshtein distance.
    Each child hangs under its parent at key d == levenshtein(parent.term, child.term),
    which lets search_within() prune whole subtrees with the triangle inequality.
    Nodes are only ever added; removal happens by rebuilding (see SearchEngine.compact).
    """
    def __init__(self) -> None:
        self._root: Optional[_Node] = None
        self._size: int = 0

    # -------- Build-time API --------
    def insert(self, term: str) -> bool:
        """Insert a term; returns False when it was already present."""
        term = canonical(term)
        if self._root is None:
            self._root = _Node(term)
            self._size = 1
            return True

        node = self._root
        while True:
            d = levenshtein(term, node.term)
            if d == 0:
                return False
            child = node.children.get(d)
            if child is None:
                node.children[d] = _Node(term)
                self._size += 1
                return True
            node = child

    # -------- Query --------
    def search_within(self, query: str, max_distance: int) -> Set[str]:
        """All stored terms t with levenshtein(query, t) <= max_distance."""
        if self._root is None or max_distance < 0:
            return set()
        query = canonical(query)

        found: Set[str] = set()
        stack: List[_Node] = [self._root]
        while stack:
            node = stack.pop()
            d = levenshtein(query, node.term)
            if d <= max_distance:
                found.add(node.term)
            lo, hi = d - max_distance, d + max_distance
            for k, child in node.children.items():
                if lo <= k <= hi:
                    stack.append(child)
        return found

    # -------- Introspection --------
    def __len__(self) -> int:
        return self._size

    def __contains__(self, term: object) -> bool:
        if not isinstance(term, str) or self._root is None:
            return False
        term = canonical(term)
        node: Optional[_Node] = self._root
        while node is not None:
            d = levenshtein(term, node.term)
            if d == 0:
                return True
            node = node.children.get(d)
        return False

    def __iter__(self) -> Iterator[str]:
        """Yield every stored term (pre-order)."""
        if self._root is None:
            return
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node.term
            stack.extend(node.children.values())

    def clear(self) -> None:
        self._root = None
        self._size = 0
