"""
API route handlers.

This package contains all route definitions for the Code Registry API.
"""

from code_registry.api.routes import api, codes, health

__all__ = [
    "api",
    "codes",
    "health",
]
