"""Search and recommendation engine for ShopSearch.

This module contains the tokenizer, the natural-language query parser, the
TF-IDF vector-space model, similarity and relevance scoring, the catalog
interface and the ``ShopSearchEngine`` entry points built on them.
"""
