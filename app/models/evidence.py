"""Evidence record model."""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class EvidenceStatus(enum.StrEnum):
    submitted = "submitted"
    processing = "processing"
    verified = "verified"
    rejected = "rejected"


@dataclass(slots=True)
class Evidence:
    """A piece of evidence attached to a case."""

    id: str
    case_id: str
    description: str
    file_hash: str
    submitted_by: str
    submitted_at: datetime
    status: EvidenceStatus = EvidenceStatus.submitted
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
