"""Product lookup endpoint."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.deps import get_engine
from src.recommender.exceptions import ProductNotFoundError
from src.recommender.models import Product
from src.recommender.service import ShopSearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
)


class ProductResponse(BaseModel):
    success: bool = True
    data: Product


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    engine: ShopSearchEngine = Depends(get_engine),
) -> ProductResponse:
    """Get a single product by ID, 404 if unknown."""
    product = engine.catalog.get_product(product_id)
    if product is None:
        logger.warning(f"Product {product_id} not found")
        raise ProductNotFoundError(product_id)

    return ProductResponse(data=product)
