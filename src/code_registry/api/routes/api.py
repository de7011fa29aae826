"""
Read-only JSON views of the registry.
"""

from fastapi import APIRouter, Depends

from code_registry.api.deps import get_registry
from code_registry.api.schemas.exceptions import NotFoundError
from code_registry.api.schemas.responses import CodeListResponse, CodeResponse
from code_registry.core.exceptions import CodeNotFoundError
from code_registry.registry.storage import CodeRegistry

router = APIRouter()


@router.get("", response_model=CodeListResponse)
def list_codes(registry: CodeRegistry = Depends(get_registry)) -> CodeListResponse:
    """List all message codes in id order, deleted ones included."""
    codes = [CodeResponse.from_record(c) for c in registry.list_codes()]
    return CodeListResponse(codes=codes, total=len(codes))


@router.get("/{code_id}", response_model=CodeResponse)
def get_code(code_id: int, registry: CodeRegistry = Depends(get_registry)) -> CodeResponse:
    """
    Get a single message code.

    Raises:
        NotFoundError: If no code has the given id
    """
    try:
        return CodeResponse.from_record(registry.get(code_id))
    except CodeNotFoundError as e:
        raise NotFoundError(f"No message code with ID {code_id}.") from e
