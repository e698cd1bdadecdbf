"""Custom exceptions for ShopSearch.

Defines specific exception types for better error handling and reporting.
Each carries the HTTP status code the API layer responds with.
"""

from typing import Any, Dict, Optional


class ShopSearchException(Exception):
    """Base exception for ShopSearch errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class CatalogUnavailableError(ShopSearchException):
    """Raised when the product catalog cannot be queried."""

    def __init__(self, operation: str, error: Optional[Exception] = None):
        message = f"Product catalog unavailable during '{operation}'"
        if error is not None:
            message = f"{message}: {error}"
        details: Dict[str, Any] = {"operation": operation}
        if error is not None:
            details["error"] = str(error)
            details["error_type"] = type(error).__name__
        super().__init__(message=message, status_code=503, details=details)


class CatalogLoadError(ShopSearchException):
    """Raised when a catalog file cannot be read or is malformed."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to load catalog from '{path}': {reason}",
            status_code=500,
            details={"path": path, "reason": reason},
        )


class ProductNotFoundError(ShopSearchException):
    """Raised when a single product lookup finds nothing."""

    def __init__(self, product_id: str):
        super().__init__(
            message=f"Product '{product_id}' not found",
            status_code=404,
            details={"product_id": product_id},
        )
