from __future__ import annotations
from typing import Any, Dict, Iterator, List, Tuple

from .normalize import canonical


class InvertedIndex:
    """
    Canonical term -> ordered bucket of the items that declare it.

    Buckets never stay empty: removing the last item deletes the term.
    An item registered twice under the same term sits in the bucket twice.
    lookup() hands out tuples so callers cannot mutate a bucket in place.
    """
    def __init__(self) -> None:
        self._buckets: Dict[str, List[Any]] = {}
        self._postings: int = 0

    # C
    def add(self, item: Any, term: str) -> None:
        key = canonical(term)
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = []
            self._buckets[key] = bucket
        bucket.append(item)
        self._postings += 1

    # R
    def lookup(self, term: str) -> Tuple[Any, ...]:
        bucket = self._buckets.get(canonical(term))
        return tuple(bucket) if bucket else ()

    def terms(self) -> List[str]:
        return list(self._buckets)

    def items(self) -> Iterator[Tuple[str, Tuple[Any, ...]]]:
        for term, bucket in self._buckets.items():
            yield term, tuple(bucket)

    @property
    def postings(self) -> int:
        """Total number of (term, item) entries across all buckets."""
        return self._postings

    def __len__(self) -> int:
        return len(self._buckets)

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and canonical(term) in self._buckets

    # D
    def remove(self, item: Any, term: str) -> bool:
        """Drop one occurrence of item from the term's bucket. Missing entries are a no-op."""
        key = canonical(term)
        bucket = self._buckets.get(key)
        if bucket is None:
            return False
        try:
            bucket.remove(item)
        except ValueError:
            return False
        self._postings -= 1
        if not bucket:
            del self._buckets[key]
        return True

    def clear(self) -> None:
        self._buckets.clear()
        self._postings = 0
