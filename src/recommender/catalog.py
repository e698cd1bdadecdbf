"""Product catalog access for the engine.

The engine only reads from the catalog. ``ProductCatalog`` is the interface
it depends on; ``InMemoryProductCatalog`` is the implementation used by the
API, the CLI and the tests, backed by a pandas DataFrame.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.recommender.models import Product
from src.recommender.utils import load_products_csv

# Configure module logger
logger = logging.getLogger(__name__)


class ProductCatalog(ABC):
    """Read-only product store queried by the engine.

    Implementations signal connectivity problems by raising
    ``CatalogUnavailableError``.
    """

    @abstractmethod
    def list_products(self) -> List[Product]:
        """Return every product."""

    @abstractmethod
    def find_products(
        self,
        text: Optional[str] = None,
        price_min: Optional[int] = None,
        price_max: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        """Return products matching coarse filters.

        Args:
            text: Case-insensitive substring of title or description.
            price_min: Inclusive lower bound, in cents.
            price_max: Inclusive upper bound, in cents.
            limit: Maximum number of products.
        """

    @abstractmethod
    def list_popular(self, limit: int) -> List[Product]:
        """Return products by rating, then stock, both descending."""

    @abstractmethod
    def get_products(self, product_ids: Iterable[str]) -> List[Product]:
        """Return the products with the given IDs, in catalog order."""

    def get_product(self, product_id: str) -> Optional[Product]:
        """Return one product, or None."""
        products = self.get_products([product_id])
        return products[0] if products else None

    def count(self) -> int:
        """Return the number of products.

        The default loads every product through ``list_products``.
        Implementations that can count without materializing the catalog
        should override it.
        """
        return len(self.list_products())


class InMemoryProductCatalog(ProductCatalog):
    """Catalog held in memory.

    The product list is fixed at construction; lookups run against a
    DataFrame index of the searchable columns.
    """

    def __init__(self, products: Sequence[Product]):
        self._products: Dict[str, Product] = {}
        for product in products:
            self._products[product.id] = product

        self._frame = pd.DataFrame(
            {
                "id": [p.id for p in self._products.values()],
                "title": [p.title.lower() for p in self._products.values()],
                "description": [
                    (p.description or "").lower() for p in self._products.values()
                ],
                "price": [p.price for p in self._products.values()],
                "stock": [p.stock for p in self._products.values()],
                "rating": [p.rating for p in self._products.values()],
            },
            columns=["id", "title", "description", "price", "stock", "rating"],
        )

        logger.info(f"Initialized InMemoryProductCatalog: {len(self._products)} products")

    @classmethod
    def from_csv(cls, csv_path: str) -> "InMemoryProductCatalog":
        """Build a catalog from a catalog CSV file."""
        return cls(load_products_csv(csv_path))

    def _to_products(self, frame: pd.DataFrame) -> List[Product]:
        return [self._products[pid] for pid in frame["id"]]

    def list_products(self) -> List[Product]:
        return list(self._products.values())

    def find_products(
        self,
        text: Optional[str] = None,
        price_min: Optional[int] = None,
        price_max: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Product]:
        frame = self._frame
        mask = pd.Series(True, index=frame.index)

        if text:
            term = text.lower()
            mask &= frame["title"].str.contains(term, regex=False) | frame[
                "description"
            ].str.contains(term, regex=False)
        if price_min is not None:
            mask &= frame["price"] >= price_min
        if price_max is not None:
            mask &= frame["price"] <= price_max

        matched = frame[mask]
        if limit is not None:
            matched = matched.head(limit)

        logger.debug(
            "Catalog filter",
            extra={
                "text": text,
                "price_min": price_min,
                "price_max": price_max,
                "num_matches": len(matched),
            },
        )

        return self._to_products(matched)

    def list_popular(self, limit: int) -> List[Product]:
        ordered = self._frame.sort_values(
            ["rating", "stock"], ascending=[False, False], kind="mergesort"
        )
        return self._to_products(ordered.head(limit))

    def get_products(self, product_ids: Iterable[str]) -> List[Product]:
        wanted = set(product_ids)
        return [p for pid, p in self._products.items() if pid in wanted]

    def count(self) -> int:
        return len(self._products)
