"""Generate a fake product catalog for testing and development.

This module provides functionality to create a synthetic product catalog
for exercising search and similar-product recommendations. It writes a CSV
in the catalog file layout read by ``load_products_csv``.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_data.py

    Or import and use programmatically:
        from scripts.generate_fake_data import generate_fake_products
        products = generate_fake_products(num_products=200)
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.recommender.models import Product
from src.recommender.utils import products_to_frame, save_products_csv

# Default configuration constants
DEFAULT_NUM_PRODUCTS = 100
DEFAULT_OUTPUT = "data/fake_products.csv"
MIN_PRICE_CENTS = 499
MAX_PRICE_CENTS = 250000
MAX_STOCK = 500

# Product families: (noun, tags shared by every product of the family)
CATEGORIES = [
    ("Mouse", ["mouse", "computer", "accessory"]),
    ("Keyboard", ["keyboard", "computer", "accessory"]),
    ("Headphones", ["headphones", "audio"]),
    ("Speaker", ["speaker", "audio"]),
    ("Monitor", ["monitor", "display", "computer"]),
    ("Webcam", ["webcam", "video", "computer"]),
    ("Backpack", ["backpack", "bag", "travel"]),
    ("Desk Lamp", ["lamp", "lighting", "office"]),
    ("Charger", ["charger", "power", "accessory"]),
    ("Cable", ["cable", "usb", "accessory"]),
]

ADJECTIVES = [
    ("Wireless", "wireless"),
    ("Ergonomic", "ergonomic"),
    ("Compact", "compact"),
    ("Gaming", "gaming"),
    ("Portable", "portable"),
    ("Premium", "premium"),
    ("Budget", "budget"),
    ("Bluetooth", "bluetooth"),
]


def _slugify(title: str, index: int) -> str:
    return f"{title.lower().replace(' ', '-')}-{index}"


def generate_fake_products(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    seed: Optional[int] = None,
) -> List[Product]:
    """Generate a synthetic product catalog.

    Each product combines an adjective with a category noun, so products of
    the same category share title words and tags and come out similar.

    Args:
        num_products: Number of products to generate. Must be positive.
        seed: Seed for the random generator, for reproducible catalogs.

    Returns:
        Products with IDs ``p-001``, ``p-002``, ... in generation order.

    Raises:
        ValueError: If num_products is not positive.
    """
    if num_products <= 0:
        raise ValueError("num_products must be positive")

    rng = random.Random(seed)
    products = []
    width = max(3, len(str(num_products)))

    for i in range(1, num_products + 1):
        noun, category_tags = rng.choice(CATEGORIES)
        adjective, adjective_tag = rng.choice(ADJECTIVES)
        title = f"{adjective} {noun}"
        product_id = f"p-{i:0{width}d}"

        products.append(
            Product(
                id=product_id,
                slug=_slugify(title, i),
                title=title,
                description=f"A {adjective.lower()} {noun.lower()} for everyday use",
                price=rng.randint(MIN_PRICE_CENTS, MAX_PRICE_CENTS),
                tags=[adjective_tag] + category_tags,
                stock=rng.randint(0, MAX_STOCK),
                rating=round(rng.uniform(1.0, 5.0), 1),
                image_url=f"https://images.example.com/{product_id}.jpg",
            )
        )

    return products


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the data generation script.

    Generates a fake catalog and saves it as CSV. Prints summary statistics
    upon completion.
    """
    parser = argparse.ArgumentParser(description="Generate a fake product catalog")
    parser.add_argument(
        "--num-products",
        type=int,
        default=DEFAULT_NUM_PRODUCTS,
        help=f"Number of products (default: {DEFAULT_NUM_PRODUCTS})"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=str(project_root / DEFAULT_OUTPUT),
        help=f"Output CSV path (default: {DEFAULT_OUTPUT})"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible catalog"
    )
    args = parser.parse_args(argv)

    print(f"Generating {args.num_products} fake products...")

    try:
        products = generate_fake_products(args.num_products, seed=args.seed)
    except ValueError as e:
        print(f"Error generating data: {e}")
        return 1

    save_products_csv(products, args.output)

    # Print results summary
    df = products_to_frame(products)
    print(f"\nData generated successfully!")
    print(f"Saved to: {args.output}")
    print(f"\nData preview:")
    print(df[["id", "title", "price", "stock", "rating"]].head(10))
    print(f"\nData summary:")
    print(f"  Total products: {len(df)}")
    print(f"  Unique titles: {df['title'].nunique()}")
    print(f"  Price range (cents): {df['price'].min()} to {df['price'].max()}")
    print(f"  Average rating: {df['rating'].mean():.2f}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
