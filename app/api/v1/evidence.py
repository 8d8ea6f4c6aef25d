"""Evidence API endpoints."""

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from app.auth.dependencies import CurrentUser
from app.dependencies import EvidenceSvc
from app.schemas.evidence import (
    EvidenceCreate,
    EvidenceCreateResponse,
    EvidenceResponse,
    EvidenceStatusResponse,
    EvidenceStatusUpdate,
)
from app.utils.audit import audit_logged

router = APIRouter()


@router.post("", response_model=EvidenceCreateResponse, status_code=status.HTTP_201_CREATED)
async def submit_evidence(
    current_user: CurrentUser,
    service: EvidenceSvc,
    case_id: str = Form(..., min_length=1),
    description: str = Form(..., min_length=1),
    name: str | None = Form(None),
    type: str | None = Form(None),  # noqa: A002
    location: str | None = Form(None),
    tags: str | None = Form(None),
    file: UploadFile | None = File(None),
) -> EvidenceCreateResponse:
    """Submit evidence with an optional file attachment."""
    data = EvidenceCreate(
        case_id=case_id,
        description=description,
        name=name,
        type=type,
        location=location,
        tags=EvidenceCreate.split_tags(tags),
    )
    content = None
    if file is not None:
        # At most one byte past the limit is buffered.
        limit = service.max_upload_bytes
        content = await file.read(-1 if limit is None else limit + 1)
    return await service.submit(
        current_user,
        data,
        content=content,
        filename=file.filename if file is not None else None,
    )


@router.get("", response_model=list[EvidenceResponse])
async def list_evidence(current_user: CurrentUser, service: EvidenceSvc) -> list[EvidenceResponse]:
    """List the evidence visible to the caller."""
    return [EvidenceResponse.model_validate(e) for e in service.list_for(current_user)]


@router.get("/{evidence_id}", response_model=EvidenceResponse)
async def get_evidence(
    evidence_id: str,
    current_user: CurrentUser,
    service: EvidenceSvc,
) -> EvidenceResponse:
    return EvidenceResponse.model_validate(service.get_for(current_user, evidence_id))


@router.get("/{evidence_id}/content")
async def get_evidence_content(
    evidence_id: str,
    current_user: CurrentUser,
    service: EvidenceSvc,
) -> Response:
    """Download the file stored with an evidence record."""
    content = service.get_content(current_user, evidence_id)
    return Response(content=content, media_type="application/octet-stream")


@router.put(
    "/{evidence_id}/status",
    response_model=EvidenceStatusResponse,
    dependencies=[Depends(audit_logged("update_evidence_status"))],
)
async def update_evidence_status(
    evidence_id: str,
    body: EvidenceStatusUpdate,
    current_user: CurrentUser,
    service: EvidenceSvc,
) -> EvidenceStatusResponse:
    """Move evidence to a new status (supervisors and admins)."""
    evidence = await service.update_status(current_user, evidence_id, body.status)
    return EvidenceStatusResponse(evidence=EvidenceResponse.model_validate(evidence))
