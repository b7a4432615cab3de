from termsearch import SortingOption
from termsearch.models import SearchResult
from termsearch.search import apply_sorting, filter_by_category, get_closest_match, relevance
from termsearch.config import Category


def test_closest_match_examples(engine):
    assert engine.get_closest_match("settngs", ["arcanum", "settings"]) == "settings"
    assert get_closest_match("appl", ["apple", "apply", "ape"]) == "apple"
    assert get_closest_match("test", []) == ""


def test_closest_match_first_minimum_wins():
    assert get_closest_match("ab", ["ax", "ay", "ab2"]) == "ax"


def test_sort_descending_by_score(engine, make_item):
    low = make_item("volume", score=0.2)
    high = make_item("volumes", score=0.8)
    rows = engine.sort_search_results([low, high], "volume")
    assert [r.item for r in rows] == [high, low]
    assert rows[0] == SearchResult("volumes", high)
    term, item = rows[1]
    assert (term, item) == ("volume", low)


def test_sort_ascending(engine, make_item):
    low = make_item("a", score=0.2)
    high = make_item("b", score=0.8)
    rows = engine.sort_search_results([high, low], "a", ascending=True)
    assert [r.item for r in rows] == [low, high]


def test_sort_empty_or_blank(engine, make_item):
    assert engine.sort_search_results([], "query") == []
    assert engine.sort_search_results([make_item("x")], "   ") == []


def test_sort_is_stable_for_equal_scores(engine, make_item):
    items = [make_item(f"t{i}") for i in range(5)]
    rows = engine.sort_search_results(items, "t")
    assert [r.item for r in rows] == items


def test_relevance_fallback_uses_nearest_term_distance():
    class Plain:
        def __init__(self, *terms):
            self.search_terms = list(terms)

    near, far = Plain("settings"), Plain("arcanum")
    assert relevance(near, "settngs") > relevance(far, "settngs")
    assert relevance(near, "settings") == 0.0


def test_apply_sorting_namespace_and_alpha(make_item):
    a = make_item("x", name="Zoom", namespace="Map>View")
    b = make_item("x", name="Alpha", namespace="Map")
    c = make_item("x", name="Mid", namespace="Audio>Volume")
    assert apply_sorting([a, b, c], "x", SortingOption.NAMESPACE) == [c, b, a]
    assert apply_sorting([a, b, c], "x", SortingOption.ALPHABETICAL) == [b, c, a]
    assert apply_sorting([a, b, c], "", SortingOption.ALPHABETICAL) == []


def test_apply_sorting_relevance_highest_first(make_item):
    lo, hi = make_item("x", score=0.1), make_item("x", score=0.9)
    assert apply_sorting([lo, hi], "x", SortingOption.RELEVANCE) == [hi, lo]


def test_filter_by_category(make_item):
    s = make_item("a", category=Category.SETTINGS)
    m = make_item("a", category=Category.MAP_OBJECTS)
    assert filter_by_category([s, m], Category.ALL) == [s, m]
    assert filter_by_category([s, m], Category.SETTINGS) == [s]
    assert filter_by_category([s, m], Category.SETTINGS | Category.MAP_OBJECTS) == [s, m]
    assert filter_by_category([s, m], Category.NONE) == []


class _Scored:
    """Only a relevance_score, no search terms."""

    def __init__(self, score):
        self.score = score

    def relevance_score(self, _query):
        return self.score


def test_sort_accepts_items_without_terms(engine):
    low, high = _Scored(0.1), _Scored(0.9)
    rows = engine.sort_search_results([low, high], "query")
    assert [r.item for r in rows] == [high, low]
    assert [r.matched_term for r in rows] == ["", ""]
