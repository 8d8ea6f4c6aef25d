"""Pydantic schemas for evidence."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.models.evidence import EvidenceStatus


class EvidenceCreate(BaseModel):
    """Form fields accompanying an evidence submission."""

    case_id: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    name: str | None = None
    type: str | None = None
    location: str | None = None
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def split_tags(cls, raw: str | None) -> list[str]:
        """Parse a comma-separated tag list, dropping blanks."""
        if not raw:
            return []
        return [tag.strip() for tag in raw.split(",") if tag.strip()]


class EvidenceStatusUpdate(BaseModel):
    """Request body for a status transition."""

    status: str


class EvidenceResponse(BaseModel):
    """Response schema for an evidence record."""

    id: str
    case_id: str
    description: str
    file_hash: str
    submitted_by: str
    submitted_at: datetime
    status: EvidenceStatus
    tags: list[str]
    metadata: dict[str, Any]

    model_config = {"from_attributes": True}


class EvidenceCreateResponse(BaseModel):
    evidence_id: str
    content_address: str | None
    file_hash: str


class EvidenceStatusResponse(BaseModel):
    message: str = "Evidence status updated"
    evidence: EvidenceResponse
