import pytest

from termsearch import Category, SearchMode, SearchSettings, SortingOption, run_query


@pytest.fixture
def catalog(engine, make_item):
    items = {
        "volume": make_item("master", "volume", name="Master Volume", namespace="Audio",
                            category=Category.SETTINGS, score=0.4),
        "zoom": make_item("zoom", "speed", name="Zoom Speed", namespace="Map>Camera",
                          category=Category.UI_ELEMENTS, score=0.9),
        "volcano": make_item("volcano", name="Volcano", namespace="Map",
                             category=Category.MAP_OBJECTS, score=0.1),
    }
    for it in items.values():
        engine.add_to_index(it)
    return items


def test_default_mode_is_fuzzy_with_relevance(engine, catalog):
    rows = run_query(engine, "volme")
    assert [r.item for r in rows] == [catalog["volume"]]
    assert rows[0].matched_term == "volume"


def test_exact_mode_and_whole_word(engine, catalog):
    exact = SearchSettings(search_mode=SearchMode.EXACT_MATCH)
    assert run_query(engine, "volme", exact) == []
    assert [r.item for r in run_query(engine, "Volume", exact)] == [catalog["volume"]]

    whole = SearchSettings(whole_word=True)
    assert run_query(engine, "volme", whole) == []


def test_default_mode_searches_each_word(engine, catalog):
    rows = run_query(engine, "zom volcan")
    assert {r.item.result_name for r in rows} == {"Zoom Speed", "Volcano"}
    assert rows[0].item is catalog["zoom"]  # highest score first

    fuzzy_only = SearchSettings(search_mode=SearchMode.FUZZY)
    assert run_query(engine, "zom volcan", fuzzy_only) == []


def test_category_filter_and_top_k(engine, catalog):
    settings = SearchSettings(category=Category.MAP_OBJECTS | Category.SETTINGS, max_edit_distance=3)
    rows = run_query(engine, "volc", settings)
    assert all(r.item.category in (Category.MAP_OBJECTS, Category.SETTINGS) for r in rows)
    assert catalog["volcano"] in [r.item for r in rows]
    assert len(run_query(engine, "volc", settings, top_k=1)) == 1


def test_namespace_and_alphabetical_sorting(engine, catalog):
    wide = dict(max_edit_distance=7)
    by_ns = run_query(engine, "volume zoom", SearchSettings(sorting_option=SortingOption.NAMESPACE, **wide))
    namespaces = [r.item.namespace for r in by_ns]
    assert namespaces == sorted(namespaces, key=lambda n: n.split(">"))

    by_name = run_query(engine, "volume zoom", SearchSettings(sorting_option=SortingOption.ALPHABETICAL, **wide))
    names = [r.item.result_name for r in by_name]
    assert names == sorted(names)


def test_blank_query_and_invalid_radius(engine, catalog):
    assert run_query(engine, "   ") == []
    with pytest.raises(ValueError):
        run_query(engine, "volume", SearchSettings(max_edit_distance=-1))
