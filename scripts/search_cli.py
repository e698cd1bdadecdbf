"""CLI script for querying the search and recommendation engine.

Useful for testing and evaluation. Loads a catalog CSV and prints search
results, similar products or popular products to the console.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.config import get_settings
from src.recommender.catalog import InMemoryProductCatalog
from src.recommender.exceptions import ShopSearchException
from src.recommender.models import Product
from src.recommender.service import ShopSearchEngine

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def format_product(product: Product) -> str:
    """One-line summary of a product."""
    price = product.price / 100
    tags = ", ".join(product.tags)
    return (
        f"{product.id:<10} {product.title:<32} ${price:>9.2f}  "
        f"rating={product.rating:.1f} stock={product.stock:<5} [{tags}]"
    )


def print_products(title: str, products: List[Product]) -> None:
    print(f"\n{title}")
    if not products:
        print("  (no products)")
    for rank, product in enumerate(products, start=1):
        print(f"  {rank:>2}. {format_product(product)}")
    print()


def run(args: argparse.Namespace) -> int:
    """Execute the selected command.

    Returns:
        Exit code: 0 on success, 1 on error.
    """
    try:
        catalog = InMemoryProductCatalog.from_csv(args.catalog)
    except FileNotFoundError as e:
        print(f"Error: Catalog not found at {args.catalog}", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1
    except ShopSearchException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    engine = ShopSearchEngine(catalog)

    if args.command == "search":
        result = engine.search(args.query, args.limit)
        parsed = result.parsed
        print(f"\nQuery: {result.query!r}")
        print(f"  Text:      {parsed.text!r}")
        print(f"  Keywords:  {parsed.keywords}")
        print(f"  Price min: {parsed.price_min}")
        print(f"  Price max: {parsed.price_max}")
        print(f"  Sort by:   {parsed.sort_by}")
        print_products(f"Top {len(result.results)} results:", result.results)
    elif args.command == "similar":
        products = engine.get_similar_products(args.product_id, args.limit)
        print_products(f"Products similar to {args.product_id}:", products)
    elif args.command == "popular":
        products = engine.get_popular_products(args.limit)
        print_products("Popular products:", products)

    return 0


def build_parser(default_catalog: Optional[str] = None) -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Search products, find similar products or list popular ones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/search_cli.py search "wireless keyboard under 100"
  python scripts/search_cli.py search "best rated mouse" --limit 5
  python scripts/search_cli.py similar p-001
  python scripts/search_cli.py popular --limit 3
        """
    )

    parser.add_argument(
        "--catalog",
        type=str,
        default=default_catalog or get_settings().catalog_path,
        help="Catalog CSV file (default: SHOPSEARCH_CATALOG_PATH or data/sample_products.csv)"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Natural-language search")
    search_parser.add_argument("query", type=str, help="Search query")
    search_parser.add_argument(
        "--limit", type=int, default=None, help="Number of results (default: 20)"
    )

    similar_parser = subparsers.add_parser("similar", help="Similar products")
    similar_parser.add_argument("product_id", type=str, help="Target product ID")
    similar_parser.add_argument(
        "--limit", type=int, default=None, help="Number of results (default: 5)"
    )

    popular_parser = subparsers.add_parser("popular", help="Popular products")
    popular_parser.add_argument(
        "--limit", type=int, default=None, help="Number of results (default: 10)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
