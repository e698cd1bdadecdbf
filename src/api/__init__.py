"""FastAPI application module for ShopSearch.

This module contains the FastAPI application factory, route handlers,
request logging and metrics for the search and recommendation service.
"""
