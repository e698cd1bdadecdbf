"""FastAPI dependencies.

The engine and metrics live on ``app.state``; routes receive them through
these dependencies so tests can build an app around any catalog.
"""

from fastapi import Request

from src.api.metrics import MetricsService
from src.recommender.service import ShopSearchEngine


def get_engine(request: Request) -> ShopSearchEngine:
    return request.app.state.engine


def get_metrics(request: Request) -> MetricsService:
    return request.app.state.metrics
