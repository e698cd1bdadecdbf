"""ShopSearch: natural-language product search and recommendations.

This package provides a backend service that parses free-text shopping
queries, ranks catalog products against them and finds similar products
with a TF-IDF vector-space model.

Modules:
    api: FastAPI application and REST API endpoints
    recommender: Query parsing, scoring, TF-IDF similarity and the engine
    config: Environment-driven settings
"""

__version__ = "0.1.0"
