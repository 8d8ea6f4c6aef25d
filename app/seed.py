"""Demo directory entries and evidence records loaded at startup.

Disable with ``SEED_DEMO_DATA=false``.
"""

from dataclasses import replace
from datetime import UTC, datetime

from app.models.evidence import Evidence, EvidenceStatus
from app.repositories.evidence_repository import EvidenceRepository
from app.services.auth_service import SessionAuthority
from app.utils.logging import get_logger

logger = get_logger(__name__)

# ── Users ─────────────────────────────────────────────────────────────────────

DEMO_USERS = [
    {
        "user_id": "admin1",
        "username": "admin",
        "password": "admin123",
        "first_name": "System",
        "last_name": "Administrator",
        "email": "admin@evidencetrack.org",
        "department": "IT",
        "role": "admin",
        "approved": True,
    },
    {
        "user_id": "officer1",
        "username": "jsmith",
        "password": "password123",
        "first_name": "John",
        "last_name": "Smith",
        "email": "jsmith@police.gov",
        "department": "Evidence Collection",
        "role": "officer",
        "approved": True,
    },
    {
        "user_id": "supervisor1",
        "username": "mjohnson",
        "password": "password123",
        "first_name": "Maria",
        "last_name": "Johnson",
        "email": "mjohnson@police.gov",
        "department": "Evidence Management",
        "role": "supervisor",
        "approved": True,
    },
    {
        "user_id": "detective1",
        "username": "dcooper",
        "password": "password123",
        "first_name": "David",
        "last_name": "Cooper",
        "email": "dcooper@police.gov",
        "department": "Investigations",
        "role": "detective",
        "approved": True,
    },
    {
        "user_id": "officer2",
        "username": "agarcia",
        "password": "password123",
        "first_name": "Ana",
        "last_name": "Garcia",
        "email": "agarcia@police.gov",
        "department": "Evidence Collection",
        "role": "officer",
        "approved": True,
    },
    {
        "user_id": "pending1",
        "username": "rwilson",
        "password": "password123",
        "first_name": "Robert",
        "last_name": "Wilson",
        "email": "rwilson@police.gov",
        "department": "Digital Forensics",
        "role": "detective",
        "approved": False,
    },
]

# ── Evidence ──────────────────────────────────────────────────────────────────


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


DEMO_EVIDENCE = [
    Evidence(
        id="EV001",
        description="Surveillance camera footage from Main St",
        case_id="CASE1001",
        file_hash="QmT78zSuBmuS4z925WZfrqQ1qHaJ56DQaTfyMUF7F8ff5o",
        submitted_by="officer1",
        submitted_at=_ts("2025-04-18T10:00:00"),
        status=EvidenceStatus.verified,
        tags=["video", "surveillance"],
        metadata={"format": "mp4", "duration": "00:32:15", "location": "Main St & 5th Ave"},
    ),
    Evidence(
        id="EV002",
        description="Fingerprint from door handle",
        case_id="CASE1001",
        file_hash="QmXs5YtpYsLCYkioRFgRRYQTQ1E4Zpfpbj2GRLo4qJ8L9d",
        submitted_by="officer2",
        submitted_at=_ts("2025-04-18T11:30:00"),
        status=EvidenceStatus.processing,
        tags=["fingerprint", "physical"],
        metadata={"type": "latent", "surface": "metal", "quality": "high"},
    ),
    Evidence(
        id="EV003",
        description="DNA sample from crime scene",
        case_id="CASE1002",
        file_hash="QmUNLLsPACCz1vLxQVkXqqLX5R1X345qqfHbsf67hvA3Nn",
        submitted_by="officer1",
        submitted_at=_ts("2025-04-19T09:15:00"),
        status=EvidenceStatus.submitted,
        tags=["dna", "biological"],
        metadata={"type": "blood", "container": "vial", "location": "bathroom"},
    ),
    Evidence(
        id="EV004",
        description="Witness statement - John Doe",
        case_id="CASE1002",
        file_hash="QmQtYfNXWK2sGGcN1fdsgrtH5XYs1FAM9wUWNqjP5ux4FQ",
        submitted_by="officer2",
        submitted_at=_ts("2025-04-19T14:30:00"),
        status=EvidenceStatus.verified,
        tags=["statement", "document"],
        metadata={"format": "pdf", "witness": "John Doe", "pages": 3},
    ),
    Evidence(
        id="EV005",
        description="Ballistics report - recovered bullet",
        case_id="CASE1003",
        file_hash="QmT1TbZtFqjvbFidLUrD9hPgMZVjRhQP3yWFG7AzBkHEBE",
        submitted_by="officer1",
        submitted_at=_ts("2025-04-20T11:00:00"),
        status=EvidenceStatus.processing,
        tags=["ballistics", "report"],
        metadata={"caliber": "9mm", "firearm_type": "handgun", "report_id": "BAL-2025-042"},
    ),
]


def seed_users(authority: SessionAuthority) -> None:
    for user in DEMO_USERS:
        authority.seed(**user)
    logger.info("Seeded %d demo users", len(DEMO_USERS))


def seed_evidence(repo: EvidenceRepository) -> None:
    for evidence in DEMO_EVIDENCE:
        # Records are mutable; give each store its own copy
        repo.create(replace(evidence, tags=list(evidence.tags), metadata=dict(evidence.metadata)))
    logger.info("Seeded %d demo evidence records", len(DEMO_EVIDENCE))
