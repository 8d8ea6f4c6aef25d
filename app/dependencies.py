"""Shared FastAPI dependencies for services owned by the application."""

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.repositories.evidence_repository import EvidenceRepository
from app.seed import seed_evidence, seed_users
from app.services.auth_service import SessionAuthority
from app.services.evidence_service import EvidenceService


def create_authority(settings: Settings) -> SessionAuthority:
    """Build the session authority, seeding demo users if configured."""
    authority = SessionAuthority.from_settings(settings)
    if settings.seed_demo_data:
        seed_users(authority)
    return authority


def create_evidence_repository(settings: Settings) -> EvidenceRepository:
    repo = EvidenceRepository()
    if settings.seed_demo_data:
        seed_evidence(repo)
    return repo


def get_authority(request: Request) -> SessionAuthority:
    return request.app.state.authority


def get_evidence_service(request: Request) -> EvidenceService:
    settings = get_settings()
    return EvidenceService(
        request.app.state.evidence_repo,
        request.app.state.content_store,
        broadcaster=request.app.state.broadcaster,
        shared_case_ids=settings.evidence_shared_case_ids,
        max_upload_bytes=settings.max_upload_bytes,
    )


Authority = Annotated[SessionAuthority, Depends(get_authority)]
EvidenceSvc = Annotated[EvidenceService, Depends(get_evidence_service)]
