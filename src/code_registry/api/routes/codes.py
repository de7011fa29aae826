"""
Listing and edit form endpoints.

The HTML listing plus the two form targets that change the registry.
Handlers are synchronous so each request runs on its own worker thread.
"""

import logging
import re

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from code_registry.api.deps import get_registry, source_address
from code_registry.api.rendering import render_listing
from code_registry.api.schemas.exceptions import (
    InternalError,
    NotFoundError,
    RejectedInputError,
)
from code_registry.core.exceptions import CodeNotFoundError, SnapshotWriteError
from code_registry.registry.storage import CodeRegistry

router = APIRouter()
logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only; no whitespace, underscores or other scripts
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def _redirect_to_listing() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


def _parse_id(raw: str) -> int:
    if raw == "":
        raise RejectedInputError("Requires ID field.")
    if not _ID_PATTERN.fullmatch(raw):
        raise RejectedInputError("Requires ID field that is an integer.")
    return int(raw)


@router.get("/", response_class=HTMLResponse)
@router.get("/list", response_class=HTMLResponse)
def list_codes(registry: CodeRegistry = Depends(get_registry)) -> str:
    """Render every code, deleted ones included, in id order."""
    return render_listing(registry.list_codes())


@router.post("/add")
def add_code(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    registry: CodeRegistry = Depends(get_registry),
) -> RedirectResponse:
    """
    Create a new code from the add row.

    Raises:
        RejectedInputError: If the title is empty
        InternalError: If the snapshot could not be written
    """
    if title == "":
        raise RejectedInputError("Requires TITLE field.")

    try:
        registry.add(title, description, source_address(request))
    except SnapshotWriteError as e:
        raise InternalError("Could not save the registry.", detail=str(e)) from e

    return _redirect_to_listing()


@router.post("/modify")
def modify_code(
    request: Request,
    raw_id: str = Form("", alias="id"),
    title: str = Form(""),
    description: str = Form(""),
    delete: str = Form(""),
    undelete: str = Form(""),
    registry: CodeRegistry = Depends(get_registry),
) -> RedirectResponse:
    """
    Save an edited row, optionally toggling its deleted flag first.

    All fields are validated before anything is changed.

    Raises:
        RejectedInputError: If the id is missing or not an integer, or the title is empty
        NotFoundError: If no code has the given id
        InternalError: If the snapshot could not be written
    """
    code_id = _parse_id(raw_id)
    if title == "":
        raise RejectedInputError("Requires TITLE field.")

    addr = source_address(request)
    try:
        if delete or undelete:
            registry.set_deleted(code_id, bool(delete), addr)
        registry.modify(code_id, title, description, addr)
    except CodeNotFoundError as e:
        raise NotFoundError(f"No message code with ID {code_id}.") from e
    except SnapshotWriteError as e:
        raise InternalError("Could not save the registry.", detail=str(e)) from e

    return _redirect_to_listing()
