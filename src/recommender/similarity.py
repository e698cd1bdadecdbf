"""Similarity measures for products and search queries.

Product-to-product similarity is the cosine between TF-IDF vectors, which
rewards rare shared terms. Query-to-product relevance uses a plain overlap
coefficient instead: a query has no document-frequency statistics of its
own, so it is compared as an unweighted token set.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine_similarity

from src.recommender.embed import build_tfidf_matrix, vector_magnitude
from src.recommender.models import Product
from src.recommender.text import tokenize

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class ProductSimilarity:
    """Similarity of one product to a target product."""

    product_id: str
    similarity: float


def cosine_similarity(
    vec1: Dict[str, float],
    vec2: Dict[str, float],
    magnitude1: Optional[float] = None,
    magnitude2: Optional[float] = None,
) -> float:
    """Cosine similarity between two sparse term vectors.

    The dot product only runs over terms present in both vectors. Returns
    0.0 when either vector has zero magnitude.

    Args:
        vec1: First term -> weight mapping.
        vec2: Second term -> weight mapping.
        magnitude1: Precomputed norm of vec1, computed if omitted.
        magnitude2: Precomputed norm of vec2, computed if omitted.
    """
    if magnitude1 is None:
        magnitude1 = vector_magnitude(vec1)
    if magnitude2 is None:
        magnitude2 = vector_magnitude(vec2)

    if magnitude1 == 0 or magnitude2 == 0:
        return 0.0

    # Iterate the smaller vector
    if len(vec2) < len(vec1):
        vec1, vec2 = vec2, vec1

    dot_product = math.fsum(
        weight * vec2[term] for term, weight in vec1.items() if term in vec2
    )

    return dot_product / (magnitude1 * magnitude2)


def find_similar_products(
    target_product_id: str,
    products: Sequence[Product],
    limit: int,
) -> List[ProductSimilarity]:
    """Rank every other product in the corpus by similarity to a target.

    The TF-IDF matrix is rebuilt from ``products`` and the target row is
    compared against all rows at once. Rows with no weight score 0.

    Args:
        target_product_id: ID of the product to compare against.
        products: Full corpus; vectors are rebuilt from it on every call.
        limit: Maximum number of results.

    Returns:
        At most ``limit`` similarities sorted in descending order, excluding
        the target itself. Empty if the target is not in the corpus. Ties keep
        corpus order.
    """
    tfidf = build_tfidf_matrix(products)
    target_row = tfidf.row_index(target_product_id)

    if target_row < 0:
        logger.warning(
            "Target product not in corpus",
            extra={"product_id": target_product_id},
        )
        return []

    if tfidf.matrix.shape[1] == 0:
        similarities = np.zeros(len(tfidf.product_ids))
    else:
        similarities = pairwise_cosine_similarity(
            tfidf.matrix[target_row], tfidf.matrix
        )[0]

    ranked = [
        ProductSimilarity(
            product_id=tfidf.product_ids[i],
            similarity=float(similarities[i]),
        )
        for i in np.argsort(-similarities, kind="stable")
        if i != target_row
    ]

    return ranked[: max(limit, 0)]


def calculate_query_similarity(query: str, product: Product) -> float:
    """Overlap coefficient between a query and a product's title and tags.

    Returns the share of distinct query tokens that also occur in the
    product document, or 0.0 for a query without tokens.

    Example:
        >>> p = Product(id="1", title="Wireless Mouse", price=0, tags=["wireless", "mouse"])
        >>> calculate_query_similarity("wireless mouse", p)
        1.0
    """
    query_set = set(tokenize(query))
    if not query_set:
        return 0.0

    product_set = set(tokenize(product.document_text))
    matches = len(query_set & product_set)

    return matches / len(query_set)
