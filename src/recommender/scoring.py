"""Composite relevance scoring for search results.

score = 0.5 * overlap + 0.3 * rating / 5 + 0.2 * (1 - price / 300000)

Prices above PRICE_CEILING give a negative price contribution.
"""

import logging
from typing import List, Sequence

from src.recommender.models import Product
from src.recommender.query import SORT_PRICE, SORT_RATING, ParsedQuery
from src.recommender.similarity import calculate_query_similarity

# Configure module logger
logger = logging.getLogger(__name__)

# Blend weights
RELEVANCE_WEIGHT = 0.5
RATING_WEIGHT = 0.3
PRICE_WEIGHT = 0.2

MAX_RATING = 5.0
PRICE_CEILING = 300000.0  # cents


def score_product(query_text: str, product: Product) -> float:
    """Blend text overlap, rating and price into one ranking score."""
    relevance = calculate_query_similarity(query_text, product)
    normalized_rating = product.rating / MAX_RATING
    normalized_price = 1.0 - (product.price / PRICE_CEILING)

    return (
        relevance * RELEVANCE_WEIGHT
        + normalized_rating * RATING_WEIGHT
        + normalized_price * PRICE_WEIGHT
    )


def rank_products(parsed: ParsedQuery, candidates: Sequence[Product]) -> List[Product]:
    """Order search candidates for a parsed query.

    With query text, candidates are sorted by composite score. Without it,
    they are sorted by rating (descending) or price (ascending) when the
    query asked for it, and otherwise left in catalog order. Sorting is
    stable, so ties keep catalog order.
    """
    if parsed.text:
        scored = [(score_product(parsed.text, p), p) for p in candidates]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [product for _, product in scored]

    if parsed.sort_by == SORT_RATING:
        return sorted(candidates, key=lambda p: p.rating, reverse=True)

    if parsed.sort_by == SORT_PRICE:
        return sorted(candidates, key=lambda p: p.price)

    return list(candidates)
