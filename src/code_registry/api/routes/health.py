"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends

from code_registry.api.deps import get_registry
from code_registry.api.schemas.responses import HealthResponse
from code_registry.registry.storage import CodeRegistry
from code_registry.version import __version__

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(registry: CodeRegistry = Depends(get_registry)) -> HealthResponse:
    """Report whether the registry is loaded, with its size and snapshot file."""
    return HealthResponse(
        status="healthy" if registry.loaded else "starting",
        version=__version__,
        codes=len(registry),
        snapshot=str(registry.snapshot_path),
    )
