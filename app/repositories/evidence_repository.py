"""In-memory evidence store."""

import threading

from app.models.evidence import Evidence, EvidenceStatus


class EvidenceRepository:
    """Data access layer for evidence records, kept in submission order."""

    def __init__(self) -> None:
        self._records: dict[str, Evidence] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def get_all(self) -> list[Evidence]:
        with self._lock:
            return list(self._records.values())

    def get_by_id(self, evidence_id: str) -> Evidence | None:
        return self._records.get(evidence_id)

    def create(self, evidence: Evidence) -> Evidence:
        with self._lock:
            if evidence.id in self._records:
                raise KeyError(f"Duplicate evidence id: {evidence.id}")
            self._records[evidence.id] = evidence
        return evidence

    def update_status(self, evidence_id: str, status: EvidenceStatus) -> Evidence | None:
        with self._lock:
            evidence = self._records.get(evidence_id)
            if evidence is None:
                return None
            evidence.status = status
            return evidence
