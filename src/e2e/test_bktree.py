import random

import pytest

from termsearch.bktree import BKTree
from termsearch.distance import levenshtein


def _random_words(rng: random.Random, n: int) -> list[str]:
    return ["".join(rng.choice("abcdef") for _ in range(rng.randint(1, 8))) for _ in range(n)]


def test_empty_tree_returns_nothing():
    tree = BKTree()
    assert tree.search_within("anything", 5) == set()
    assert len(tree) == 0


def test_insert_is_idempotent_and_case_insensitive():
    tree = BKTree()
    assert tree.insert("Settings") is True
    assert tree.insert("settings") is False
    assert tree.insert("SETTINGS") is False
    assert len(tree) == 1
    assert "SeTtInGs" in tree
    assert list(tree) == ["settings"]


def test_negative_radius_is_empty():
    tree = BKTree()
    tree.insert("map")
    assert tree.search_within("map", -1) == set()


def test_zero_radius_is_exact_lookup():
    tree = BKTree()
    for t in ("map", "mop", "mapping"):
        tree.insert(t)
    assert tree.search_within("MAP", 0) == {"map"}


def test_children_keyed_by_distance_to_parent():
    tree = BKTree()
    for t in ("book", "books", "cake", "boo", "cape", "cart"):
        tree.insert(t)
    stack = [tree._root]
    while stack:
        node = stack.pop()
        for d, child in node.children.items():
            assert levenshtein(node.term, child.term) == d
            stack.append(child)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_search_matches_brute_force(seed):
    rng = random.Random(seed)
    words = _random_words(rng, 300)
    tree = BKTree()
    for w in words:
        tree.insert(w)
    vocab = set(words)
    assert len(tree) == len(vocab)

    for q in _random_words(rng, 25):
        for radius in range(0, 4):
            expected = {t for t in vocab if levenshtein(q, t) <= radius}
            assert tree.search_within(q, radius) == expected


def test_clear():
    tree = BKTree()
    tree.insert("alpha")
    tree.clear()
    assert len(tree) == 0
    assert tree.search_within("alpha", 2) == set()
