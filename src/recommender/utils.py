"""Utility functions for the search and recommendation engine.

This module provides helper functions for catalog file loading and saving,
and for the request limit handling shared by the engine operations.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from src.recommender.exceptions import CatalogLoadError
from src.recommender.models import Product

# Configure module logger
logger = logging.getLogger(__name__)

# Catalog file layout
REQUIRED_COLUMNS = {"id", "title", "price"}
CATALOG_COLUMNS = [
    "id",
    "slug",
    "title",
    "description",
    "price",
    "tags",
    "stock",
    "rating",
    "image_url",
]
TAG_SEPARATOR = "|"


def clamp_limit(limit: Optional[int], default: int, maximum: int) -> int:
    """Resolve a requested result count.

    Missing or out-of-range values fall back to ``default``, so the result
    always lies in ``[1, maximum]``.

    Example:
        >>> clamp_limit(500, default=20, maximum=100)
        20
    """
    if limit is None or limit < 1 or limit > maximum:
        return default
    return int(limit)


def _split_tags(raw: str) -> List[str]:
    return [tag.strip() for tag in raw.split(TAG_SEPARATOR) if tag.strip()]


def _row_to_product(row: Dict[str, str]) -> Product:
    return Product(
        id=row["id"],
        slug=row.get("slug") or None,
        title=row["title"],
        description=row.get("description") or None,
        price=int(float(row["price"])),
        tags=_split_tags(row.get("tags", "")),
        stock=int(float(row.get("stock") or 0)),
        rating=float(row.get("rating") or 0.0),
        image_url=row.get("image_url") or None,
    )


def load_products_csv(csv_path: str) -> List[Product]:
    """Load a product catalog from a CSV file.

    Reads a CSV with one product per row. ``id``, ``title`` and ``price``
    are required; ``tags`` is a pipe-separated list.

    Args:
        csv_path: Path to the catalog CSV.

    Returns:
        Products in file order.

    Raises:
        FileNotFoundError: If the CSV file does not exist.
        CatalogLoadError: If required columns are missing or a row has
            invalid values.

    Example:
        >>> products = load_products_csv("data/sample_products.csv")
        >>> print(f"Loaded {len(products)} products")
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Catalog file not found: {csv_path}")

    logger.info(f"Loading catalog from {csv_path}")
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = REQUIRED_COLUMNS - set(df.columns)
        raise CatalogLoadError(csv_path, f"missing required columns: {sorted(missing)}")

    products = []
    for line_no, row in enumerate(df.to_dict(orient="records"), start=2):
        try:
            products.append(_row_to_product(row))
        except ValueError as e:
            raise CatalogLoadError(csv_path, f"invalid row at line {line_no}: {e}") from e

    logger.info(f"Loaded {len(products)} products")

    return products


def products_to_frame(products: Sequence[Product]) -> pd.DataFrame:
    """Convert products into a DataFrame with the catalog file columns."""
    records = [
        {
            "id": p.id,
            "slug": p.slug or "",
            "title": p.title,
            "description": p.description or "",
            "price": p.price,
            "tags": TAG_SEPARATOR.join(p.tags),
            "stock": p.stock,
            "rating": p.rating,
            "image_url": p.image_url or "",
        }
        for p in products
    ]
    return pd.DataFrame(records, columns=CATALOG_COLUMNS)


def save_products_csv(products: Sequence[Product], csv_path: str) -> None:
    """Write products to a catalog CSV, creating parent directories.

    Raises:
        OSError: If unable to create the directory or write the file.
    """
    output_path = Path(csv_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    products_to_frame(products).to_csv(output_path, index=False)
    logger.info(f"Saved {len(products)} products to {csv_path}")
