"""Tests for natural-language search query parsing.

Covers price bound extraction, sort intent detection, keyword extraction
and the serialized form of parsed queries.
"""

import pytest

from src.recommender.query import (
    MAX_PRICE_VALUE,
    SORT_PRICE,
    SORT_RATING,
    SORT_RELEVANCE,
    ParsedQuery,
    extract_keywords,
    parse_search_query,
)


def test_parse_max_price():
    parsed = parse_search_query("keyboard under 100")

    assert parsed.price_max == 100
    assert parsed.price_min is None
    assert parsed.text == "keyboard"
    assert parsed.sort_by == SORT_RELEVANCE


def test_parse_range_price():
    parsed = parse_search_query("keyboard between 50 and 150")

    assert parsed.price_min == 50
    assert parsed.price_max == 150
    assert parsed.text == "keyboard"


def test_range_takes_precedence_over_min_and_max():
    """A range match skips the independent min/max patterns entirely."""
    parsed = parse_search_query("from 10 to 20 under 500")

    assert parsed.price_min == 10
    assert parsed.price_max == 20
    assert "500" in parsed.text


@pytest.mark.parametrize(
    "query,expected_min,expected_max",
    [
        ("mouse below 30", None, 30),
        ("mouse less than 30", None, 30),
        ("mouse max $30", None, 30),
        ("mouse maximum 30", None, 30),
        ("monitor over 200", 200, None),
        ("monitor above $200", 200, None),
        ("monitor more than 200", 200, None),
        ("monitor minimum 200", 200, None),
        ("monitor over 100 under 300", 100, 300),
        ("cable $5 - $15", 5, 15),
        ("cable 5 to 15", 5, 15),
    ],
)
def test_parse_price_phrases(query, expected_min, expected_max):
    parsed = parse_search_query(query)

    assert parsed.price_min == expected_min
    assert parsed.price_max == expected_max


def test_parse_rating_intent_with_range():
    parsed = parse_search_query("best rated wireless keyboard between 50 and 150")

    assert parsed.sort_by == SORT_RATING
    assert parsed.price_min == 50
    assert parsed.price_max == 150
    assert "wireless" in parsed.keywords
    assert "keyboard" in parsed.keywords
    assert "best" not in parsed.keywords
    assert "rated" not in parsed.keywords


@pytest.mark.parametrize(
    "query",
    ["top rated headphones", "highest rating headphones", "Best Rating headphones"],
)
def test_parse_rating_intent_variants(query):
    parsed = parse_search_query(query)

    assert parsed.sort_by == SORT_RATING
    assert parsed.text == "headphones"


@pytest.mark.parametrize(
    "query",
    ["cheap mouse", "cheapest mouse", "budget mouse", "mouse lowest price"],
)
def test_parse_price_intent(query):
    parsed = parse_search_query(query)

    assert parsed.sort_by == SORT_PRICE
    assert parsed.text == "mouse"


def test_rating_intent_wins_over_price_intent():
    parsed = parse_search_query("best rated budget speaker")

    assert parsed.sort_by == SORT_RATING
    # Only the matched intent is stripped from the text
    assert parsed.text == "budget speaker"


def test_sort_phrase_only_leaves_empty_text():
    parsed = parse_search_query("cheapest")

    assert parsed.sort_by == SORT_PRICE
    assert parsed.text == ""
    assert parsed.keywords == []


def test_short_tokens_are_not_keywords():
    parsed = parse_search_query("a an to in for keyboard")

    for short in ("a", "an", "to", "in"):
        assert short not in parsed.keywords
    assert "for" in parsed.keywords
    assert "keyboard" in parsed.keywords


def test_parse_empty_query():
    parsed = parse_search_query("")

    assert parsed.text == ""
    assert parsed.keywords == []
    assert parsed.price_min is None
    assert parsed.price_max is None
    assert parsed.sort_by == SORT_RELEVANCE


def test_parse_strips_punctuation_and_lowercases():
    parsed = parse_search_query("  Wireless, MOUSE!!  ")

    assert parsed.text == "wireless mouse"
    assert parsed.keywords == ["wireless", "mouse"]


OVERSIZED = "99999999999999999999999"


@pytest.mark.parametrize(
    "query,expected_min,expected_max",
    [
        (f"mouse under {OVERSIZED}", None, 0),
        (f"mouse over {OVERSIZED}", 0, None),
        (f"mouse between 5 and {OVERSIZED}", 5, 0),
        (f"mouse from {OVERSIZED} to 50", 0, 50),
    ],
)
def test_oversized_price_parses_as_zero(query, expected_min, expected_max):
    parsed = parse_search_query(query)

    assert parsed.price_min == expected_min
    assert parsed.price_max == expected_max
    assert parsed.text == "mouse"


def test_largest_allowed_price_is_kept():
    parsed = parse_search_query(f"mouse under {MAX_PRICE_VALUE}")

    assert parsed.price_max == MAX_PRICE_VALUE
    assert parse_search_query(f"mouse under {MAX_PRICE_VALUE + 1}").price_max == 0


def test_extract_keywords_is_unique_and_ordered():
    assert extract_keywords("mouse pad mouse wireless pad") == ["mouse", "pad", "wireless"]


def test_parsed_query_serializes_with_camel_case_aliases():
    parsed = parse_search_query("keyboard under 100")
    data = parsed.model_dump(by_alias=True)

    assert data["priceMax"] == 100
    assert data["priceMin"] is None
    assert data["sortBy"] == SORT_RELEVANCE

    # Field names are accepted on input as well as aliases
    assert ParsedQuery(price_max=5).price_max == 5
    assert ParsedQuery(priceMax=5).price_max == 5
