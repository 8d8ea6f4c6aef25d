"""Service layer for evidence submission, visibility, and status changes."""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from app.exceptions import (
    ContentNotFoundError,
    EvidenceNotFoundError,
    ForbiddenError,
    InvalidStatusError,
    PayloadTooLargeError,
)
from app.models.evidence import Evidence, EvidenceStatus
from app.models.user import Identity, UserRole
from app.repositories.evidence_repository import EvidenceRepository
from app.schemas.evidence import EvidenceCreate, EvidenceCreateResponse
from app.services.auth_service import authorize
from app.services.broadcaster import EvidenceBroadcaster
from app.services.content_store import ContentStore, content_hash
from app.utils.logging import get_logger

logger = get_logger(__name__)

# Roles that see every record and may move records between statuses
PRIVILEGED_ROLES = frozenset({UserRole.admin, UserRole.supervisor})


class EvidenceService:
    """Orchestrates evidence persistence, access checks, and change broadcasts."""

    def __init__(
        self,
        repo: EvidenceRepository,
        content_store: ContentStore,
        *,
        broadcaster: EvidenceBroadcaster | None = None,
        shared_case_ids: Iterable[str] = (),
        max_upload_bytes: int | None = None,
    ) -> None:
        self.repo = repo
        self.content_store = content_store
        self._broadcaster = broadcaster
        self.shared_case_ids = frozenset(shared_case_ids)
        self.max_upload_bytes = max_upload_bytes

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def can_view(self, identity: Identity, evidence: Evidence) -> bool:
        if authorize(identity, PRIVILEGED_ROLES):
            return True
        return evidence.submitted_by == identity.id or evidence.case_id in self.shared_case_ids

    def list_for(self, identity: Identity) -> list[Evidence]:
        return [e for e in self.repo.get_all() if self.can_view(identity, e)]

    def get_for(self, identity: Identity, evidence_id: str) -> Evidence:
        evidence = self.repo.get_by_id(evidence_id)
        if evidence is None:
            raise EvidenceNotFoundError()
        if not self.can_view(identity, evidence):
            raise ForbiddenError("You do not have permission to access this evidence")
        return evidence

    def get_content(self, identity: Identity, evidence_id: str) -> bytes:
        evidence = self.get_for(identity, evidence_id)
        address = evidence.metadata.get("content_address")
        if not address or address not in self.content_store:
            raise ContentNotFoundError()
        return self.content_store.get(address)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def submit(
        self,
        identity: Identity,
        data: EvidenceCreate,
        content: bytes | None = None,
        filename: str | None = None,
    ) -> EvidenceCreateResponse:
        """Store an evidence record (and its file, if any) and announce it."""
        content_address: str | None = None
        if content is not None:
            if self.max_upload_bytes is not None and len(content) > self.max_upload_bytes:
                raise PayloadTooLargeError()
            content_address = self.content_store.put(content)
            file_hash = content_hash(content)
        else:
            file_hash = f"hash_{int(time.time() * 1000)}"

        metadata = {"name": data.name, "type": data.type, "location": data.location}
        if filename:
            metadata["filename"] = filename
        if content_address:
            metadata["content_address"] = content_address

        evidence = self.repo.create(
            Evidence(
                id=f"EV{uuid.uuid4().hex[:12].upper()}",
                case_id=data.case_id,
                description=data.description,
                file_hash=file_hash,
                submitted_by=identity.id,
                submitted_at=datetime.now(UTC),
                status=EvidenceStatus.submitted,
                tags=list(data.tags),
                metadata=metadata,
            )
        )
        logger.info(
            "Evidence %s submitted for case %s by %s",
            evidence.id,
            evidence.case_id,
            identity.username,
        )

        await self._publish("CREATE", evidence.id, actor=identity.full_name)
        return EvidenceCreateResponse(
            evidence_id=evidence.id,
            content_address=content_address,
            file_hash=file_hash,
        )

    async def update_status(self, identity: Identity, evidence_id: str, status: str) -> Evidence:
        if not authorize(identity, PRIVILEGED_ROLES):
            raise ForbiddenError("Only supervisors can update evidence status")
        try:
            new_status = EvidenceStatus(status)
        except ValueError as err:
            raise InvalidStatusError() from err

        evidence = self.repo.update_status(evidence_id, new_status)
        if evidence is None:
            raise EvidenceNotFoundError()
        logger.info("Evidence %s moved to %s by %s", evidence_id, new_status, identity.username)

        await self._publish("UPDATE", evidence_id, status=str(new_status), actor=identity.full_name)
        return evidence

    async def _publish(self, change_type: str, evidence_id: str, **fields) -> None:
        """Broadcast a change event. Logs warning on failure."""
        if self._broadcaster is None:
            return
        try:
            await self._broadcaster.publish(change_type, evidence_id, **fields)
        except Exception:
            logger.warning("Failed to broadcast %s for %s", change_type, evidence_id, exc_info=True)
