"""
Response schemas for the JSON views.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from code_registry.core.models import MessageCode


class CodeResponse(BaseModel):
    """A single message code."""

    code: int
    deleted: bool
    title: str
    description: str
    created: datetime
    created_by: str | None = None
    modified: datetime
    modified_by: str | None = None

    @classmethod
    def from_record(cls, record: MessageCode) -> "CodeResponse":
        """Convert internal record to API response."""
        return cls(
            code=record.code,
            deleted=record.deleted,
            title=record.title,
            description=record.description,
            created=record.created_at,
            created_by=str(record.created_ip) if record.created_ip is not None else None,
            modified=record.modified_at,
            modified_by=str(record.modified_ip) if record.modified_ip is not None else None,
        )


class CodeListResponse(BaseModel):
    """All message codes in id order."""

    codes: list[CodeResponse] = Field(default_factory=list)
    total: int = 0


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    codes: int
    snapshot: str
