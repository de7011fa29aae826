"""
Request dependencies shared by the route handlers.
"""

from fastapi import Request

from code_registry.core.models import IPAddress, parse_address
from code_registry.registry.storage import CodeRegistry


def get_registry(request: Request) -> CodeRegistry:
    """Return the registry owned by the running application."""
    return request.app.state.registry


def source_address(request: Request) -> IPAddress | None:
    """
    Address recorded in the audit fields of a change.

    Uses the direct peer address only.
    """
    if request.client is None:
        return None
    return parse_address(request.client.host)
