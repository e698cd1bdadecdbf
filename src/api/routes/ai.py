"""Search and recommendation endpoints for the ShopSearch API.

This module provides endpoints for natural-language product search,
similar-product recommendations and popular products.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.deps import get_engine, get_metrics
from src.api.metrics import MetricsService
from src.recommender.models import Product
from src.recommender.service import SearchResult, ShopSearchEngine

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/api/ai",
    tags=["ai"],
)


class SearchRequest(BaseModel):
    """Body of a search request."""

    query: str = Field(..., description="Natural-language search query")


class SearchResponse(BaseModel):
    success: bool = True
    data: SearchResult


class ProductListResponse(BaseModel):
    success: bool = True
    data: List[Product] = Field(default_factory=list)


@router.post("/search", response_model=SearchResponse)
def search(
    request: SearchRequest,
    limit: Optional[int] = None,
    engine: ShopSearchEngine = Depends(get_engine),
    metrics: MetricsService = Depends(get_metrics),
) -> SearchResponse:
    """Search products with a natural-language query.

    Price bounds ("under 100", "between 50 and 150") and sort intents
    ("best rated", "cheapest") are extracted from the query.

    Example:
        POST /api/ai/search?limit=10 {"query": "wireless mouse under 50"}
    """
    logger.info(f"Search request: query={request.query!r}, limit={limit}")

    with metrics.track("search"):
        result = engine.search(request.query, limit)

    return SearchResponse(data=result)


@router.get("/recommend/{product_id}", response_model=ProductListResponse)
def get_similar_products(
    product_id: str,
    limit: Optional[int] = None,
    engine: ShopSearchEngine = Depends(get_engine),
    metrics: MetricsService = Depends(get_metrics),
) -> ProductListResponse:
    """Get products similar to a product.

    An unknown product ID yields an empty list, not a 404.

    Example:
        GET /api/ai/recommend/p-001?limit=5
    """
    logger.info(f"Similar products request: product_id={product_id}, limit={limit}")

    with metrics.track("similar"):
        products = engine.get_similar_products(product_id, limit)

    return ProductListResponse(data=products)


@router.get("/popular", response_model=ProductListResponse)
def get_popular_products(
    limit: Optional[int] = None,
    engine: ShopSearchEngine = Depends(get_engine),
    metrics: MetricsService = Depends(get_metrics),
) -> ProductListResponse:
    """Get the best-rated products, ties broken by stock."""
    with metrics.track("popular"):
        products = engine.get_popular_products(limit)

    return ProductListResponse(data=products)
