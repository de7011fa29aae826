"""
Code Registry API Module.

HTML listing, edit form endpoints and read-only JSON views.
"""

from code_registry.api.app import create_app

__all__ = ["create_app"]
