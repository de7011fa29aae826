"""
API request/response schemas and error types.
"""

from code_registry.api.schemas.exceptions import (
    APIException,
    InternalError,
    NotFoundError,
    RejectedInputError,
)
from code_registry.api.schemas.responses import (
    CodeListResponse,
    CodeResponse,
    HealthResponse,
)

__all__ = [
    "APIException",
    "CodeListResponse",
    "CodeResponse",
    "HealthResponse",
    "InternalError",
    "NotFoundError",
    "RejectedInputError",
]
