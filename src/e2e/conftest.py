from __future__ import annotations
from typing import Iterator

import pytest

from termsearch import SearchEngine, SearchItem


def _make_item(*terms: str, name: str = "", score: float | None = None, **kw) -> SearchItem:
    """SearchItem with the given terms; score (if any) becomes a constant relevance."""
    scorer = (lambda _q: score) if score is not None else None
    return SearchItem(result_name=name or (terms[0] if terms else "item"),
                      search_terms=list(terms), scorer=scorer, **kw)


@pytest.fixture
def make_item():
    return _make_item


@pytest.fixture
def engine() -> Iterator[SearchEngine]:
    eng = SearchEngine()
    yield eng
    eng.clear()
