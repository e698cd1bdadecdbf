"""Search and recommendation entry points.

``ShopSearchEngine`` is constructed with the catalog it reads from and
exposes the three read-only operations used by the API and the CLI:
natural-language search, similar products and popular products. Every call
is stateless; parsed queries, vectors and scores are rebuilt per call.
"""

import logging
import time
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from src.recommender.catalog import ProductCatalog
from src.recommender.models import Product
from src.recommender.query import ParsedQuery, parse_search_query
from src.recommender.scoring import rank_products
from src.recommender.similarity import find_similar_products
from src.recommender.utils import clamp_limit

# Configure module logger
logger = logging.getLogger(__name__)

# Default and maximum result counts per operation
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100
DEFAULT_SIMILAR_LIMIT = 5
MAX_SIMILAR_LIMIT = 20
DEFAULT_POPULAR_LIMIT = 10
MAX_POPULAR_LIMIT = 50

# Candidates fetched per requested result, leaving room for re-ranking
OVERFETCH_FACTOR = 2

# Query prices are whole currency units, catalog prices are cents
CENTS_PER_UNIT = 100


class SearchResult(BaseModel):
    """Response of a natural-language search.

    Attributes:
        query: The raw query string.
        parsed: How the query was interpreted.
        results: Ranked products.
    """

    query: str = Field(..., description="Raw search query")
    parsed: ParsedQuery = Field(..., description="Parsed query")
    results: List[Product] = Field(default_factory=list, description="Ranked products")


class ShopSearchEngine:
    """Search, similar-product and popularity operations over a catalog."""

    def __init__(
        self,
        catalog: ProductCatalog,
        search_limits: Tuple[int, int] = (DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT),
        similar_limits: Tuple[int, int] = (DEFAULT_SIMILAR_LIMIT, MAX_SIMILAR_LIMIT),
        popular_limits: Tuple[int, int] = (DEFAULT_POPULAR_LIMIT, MAX_POPULAR_LIMIT),
    ):
        """Initialize the engine.

        Args:
            catalog: Product catalog to read from.
            search_limits: (default, maximum) result count for search.
            similar_limits: (default, maximum) result count for similar products.
            popular_limits: (default, maximum) result count for popular products.
        """
        self.catalog = catalog
        self.search_limits = search_limits
        self.similar_limits = similar_limits
        self.popular_limits = popular_limits

    def search(self, query: str, limit: Optional[int] = None) -> SearchResult:
        """Search the catalog with a natural-language query.

        Parses the query, fetches twice the requested number of candidates
        matching the text and price filters, ranks them and truncates.

        Args:
            query: Raw query, e.g. "wireless keyboard under 100".
            limit: Number of results; out-of-range values use the default.

        Returns:
            SearchResult with the raw query, the parsed query and the results.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried.
        """
        start_time = time.time()
        limit = clamp_limit(limit, *self.search_limits)

        parsed = parse_search_query(query)

        candidates = self.catalog.find_products(
            text=parsed.text or None,
            price_min=(
                parsed.price_min * CENTS_PER_UNIT
                if parsed.price_min is not None
                else None
            ),
            price_max=(
                parsed.price_max * CENTS_PER_UNIT
                if parsed.price_max is not None
                else None
            ),
            limit=limit * OVERFETCH_FACTOR,
        )

        results = rank_products(parsed, candidates)[:limit]

        logger.info(
            "Search completed",
            extra={
                "query": query,
                "sort_by": parsed.sort_by,
                "num_candidates": len(candidates),
                "num_results": len(results),
                "total_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        return SearchResult(query=query, parsed=parsed, results=results)

    def get_similar_products(
        self, product_id: str, limit: Optional[int] = None
    ) -> List[Product]:
        """Find products similar to a given product.

        Builds TF-IDF vectors over the whole catalog and ranks every other
        product by cosine similarity to the target.

        Args:
            product_id: Target product ID.
            limit: Number of results; out-of-range values use the default.

        Returns:
            Products in descending similarity order. Empty if the product is
            not in the catalog.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried.
        """
        start_time = time.time()
        limit = clamp_limit(limit, *self.similar_limits)

        all_products = self.catalog.list_products()
        similarities = find_similar_products(product_id, all_products, limit)

        if not similarities:
            return []

        rank = {sim.product_id: i for i, sim in enumerate(similarities)}
        products = self.catalog.get_products(list(rank))
        products.sort(key=lambda p: rank[p.id])

        logger.info(
            "Similar products computed",
            extra={
                "product_id": product_id,
                "corpus_size": len(all_products),
                "num_results": len(products),
                "total_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        return products

    def get_popular_products(self, limit: Optional[int] = None) -> List[Product]:
        """Return the best-rated products, ties broken by stock.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried.
        """
        limit = clamp_limit(limit, *self.popular_limits)
        products = self.catalog.list_popular(limit)

        logger.debug(f"Popular products: {len(products)} returned, limit={limit}")

        return products
