"""
Middleware for Code Registry API.
"""

from code_registry.api.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
