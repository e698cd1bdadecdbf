"""Tests for product and query similarity."""

from typing import List

import pytest

from src.recommender.embed import build_product_vectors
from src.recommender.models import Product
from src.recommender.similarity import (
    ProductSimilarity,
    calculate_query_similarity,
    cosine_similarity,
    find_similar_products,
)


@pytest.fixture
def products() -> List[Product]:
    return [
        Product(id="A", title="Wireless Mouse", price=2999, tags=["mouse", "wireless", "computer"]),
        Product(id="B", title="Wireless Keyboard", price=5999, tags=["keyboard", "wireless", "computer"]),
        Product(id="C", title="USB Cable", price=999, tags=["cable", "usb", "accessory"]),
        Product(id="D", title="USB Charger", price=1999, tags=["charger", "usb", "accessory"]),
    ]


def test_cosine_similarity_with_itself():
    vector = {"wireless": 0.3, "mouse": 0.7, "computer": 0.1}

    assert cosine_similarity(vector, vector) == pytest.approx(1.0)


def test_cosine_similarity_disjoint_vectors_is_exactly_zero():
    assert cosine_similarity({"a": 1.0, "b": 2.0}, {"c": 3.0}) == 0.0


def test_cosine_similarity_zero_magnitude():
    assert cosine_similarity({}, {"a": 1.0}) == 0.0
    assert cosine_similarity({"a": 0.0}, {"a": 1.0}) == 0.0


def test_cosine_similarity_uses_given_magnitudes():
    vec1 = {"a": 1.0, "b": 1.0}
    vec2 = {"a": 1.0}

    assert cosine_similarity(vec1, vec2) == pytest.approx(1 / 2 ** 0.5)
    assert cosine_similarity(vec1, vec2, magnitude1=1.0, magnitude2=1.0) == pytest.approx(1.0)


def test_find_similar_products_excludes_target(products):
    results = find_similar_products("A", products, limit=10)

    assert all(isinstance(r, ProductSimilarity) for r in results)
    assert "A" not in [r.product_id for r in results]
    assert len(results) == 3


def test_find_similar_products_orders_by_similarity(products):
    results = find_similar_products("A", products, limit=10)
    scores = {r.product_id: r.similarity for r in results}

    assert scores["B"] > scores["C"]
    assert results[0].product_id == "B"
    assert [r.similarity for r in results] == sorted(
        (r.similarity for r in results), reverse=True
    )


def test_find_similar_products_ties_keep_corpus_order(products):
    results = find_similar_products("A", products, limit=10)

    # Neither cable nor charger shares a term with the mouse
    assert [r.product_id for r in results[1:]] == ["C", "D"]
    assert results[1].similarity == 0.0


def test_find_similar_products_respects_limit(products):
    assert len(find_similar_products("C", products, limit=1)) == 1
    assert find_similar_products("C", products, limit=1)[0].product_id == "D"
    assert find_similar_products("C", products, limit=0) == []


def test_find_similar_products_agrees_with_pairwise_cosine(products):
    vectors = build_product_vectors(products)
    target = vectors["A"]

    for result in find_similar_products("A", products, limit=10):
        doc = vectors[result.product_id]
        assert result.similarity == pytest.approx(
            cosine_similarity(target.vector, doc.vector), abs=1e-12
        )


def test_find_similar_products_without_tokens():
    products = [
        Product(id="1", title="!!!", price=100),
        Product(id="2", title="???", price=100),
    ]

    assert find_similar_products("1", products, limit=5) == [
        ProductSimilarity(product_id="2", similarity=0.0)
    ]


def test_find_similar_products_empty_corpus():
    assert find_similar_products("A", [], limit=5) == []


def test_find_similar_products_unknown_target(products):
    assert find_similar_products("missing", products, limit=5) == []


def test_find_similar_products_single_product():
    products = [Product(id="solo", title="Desk Lamp", price=100)]

    assert find_similar_products("solo", products, limit=5) == []


def test_query_similarity_full_overlap():
    product = Product(id="1", title="Wireless Mouse", price=0, tags=["wireless", "mouse"])

    assert calculate_query_similarity("wireless mouse", product) == 1.0


def test_query_similarity_decreases_with_unmatched_token():
    product = Product(id="1", title="Wireless Mouse", price=0, tags=["wireless", "mouse"])

    full = calculate_query_similarity("wireless mouse", product)
    partial = calculate_query_similarity("wireless mouse pad", product)

    assert partial < full
    assert partial == pytest.approx(2 / 3)


def test_query_similarity_counts_distinct_tokens():
    product = Product(id="1", title="Mouse", price=0)

    assert calculate_query_similarity("mouse mouse", product) == 1.0


def test_query_similarity_empty_query():
    product = Product(id="1", title="Wireless Mouse", price=0)

    assert calculate_query_similarity("", product) == 0.0
    assert calculate_query_similarity("!!", product) == 0.0
