"""
Tests for query composition and cache key normalization.
"""

from recipe_search.utils import build_cache_key, compose_query, split_dietary_filters


def test_cache_key_ignores_case_and_whitespace():
    """Keys differing only in case or spacing collide."""
    assert build_cache_key("  Vegan   PASTA ") == build_cache_key("vegan pasta")
    assert build_cache_key("vegan pasta") == "vegan pasta"


def test_cache_key_sorts_and_dedupes_filters():
    """Filter order and duplicates do not change the key."""
    a = build_cache_key("pasta", ["Nut-Free", "gluten-free"])
    b = build_cache_key("pasta", ["gluten-free", "nut-free", "GLUTEN-FREE"])
    assert a == b
    assert a == "pasta with dietary preferences: gluten-free, nut-free"


def test_cache_key_merges_inline_filters():
    """Filters written into the query match the same filters passed separately."""
    inline = build_cache_key("Pasta with dietary preferences: vegan, nut-free")
    separate = build_cache_key("pasta", ["nut-free", "vegan"])
    assert inline == separate


def test_compose_query_appends_dietary_suffix():
    """Filters are appended in the form the prompt expects."""
    assert compose_query("pasta", ["vegan", "nut-free"]) == (
        "pasta with dietary preferences: vegan, nut-free"
    )


def test_compose_query_without_filters():
    """Without filters the query is only whitespace-collapsed."""
    assert compose_query("  quick   breakfast ") == "quick breakfast"
    assert compose_query("quick breakfast", ["", "  "]) == "quick breakfast"


def test_split_dietary_filters():
    """The dietary suffix is split off the main query."""
    main, terms = split_dietary_filters("soup with dietary preferences: vegan, keto")
    assert main == "soup"
    assert [t.strip() for t in terms] == ["vegan", "keto"]

    main, terms = split_dietary_filters("plain soup")
    assert main == "plain soup"
    assert terms == []


def test_comma_joined_filter_entries_are_split():
    """A filter entry holding several terms matches the same terms passed separately."""
    a = build_cache_key("pasta", ["vegan, keto"])
    b = build_cache_key("pasta", ["keto, vegan"])
    c = build_cache_key("pasta", ["keto", "vegan"])
    assert a == b == c == "pasta with dietary preferences: keto, vegan"
    assert compose_query("pasta", ["vegan,  keto", ""]) == "pasta with dietary preferences: vegan, keto"
