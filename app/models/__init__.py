"""Domain models package."""

from app.models.evidence import Evidence, EvidenceStatus
from app.models.user import Identity, UserProfile, UserRecord, UserRole

__all__ = [
    "Evidence",
    "EvidenceStatus",
    "Identity",
    "UserProfile",
    "UserRecord",
    "UserRole",
]
