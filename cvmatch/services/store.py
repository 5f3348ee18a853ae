"""
Persistence seams. The core only talks to these protocols; the in-memory
implementations back tests and single-process use.
"""
import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from cvmatch.models.models import CandidateProfile, JobAnalysisResult
from cvmatch.utils.logging_config import get_logger

logger = get_logger(__name__)


class CandidateStore(Protocol):
    def save(self, candidate: CandidateProfile) -> CandidateProfile:
        ...

    def find_by_id(self, candidate_id: str) -> Optional[CandidateProfile]:
        ...

    def find_by_email(self, email: str) -> Optional[CandidateProfile]:
        ...

    def find_all(self) -> List[CandidateProfile]:
        ...

    def exists(self, candidate_id: str) -> bool:
        ...

    def delete(self, candidate_id: str) -> None:
        ...


class JobAnalysisStore(Protocol):
    def save(self, analysis: JobAnalysisResult) -> str:
        ...

    def find_by_id(self, analysis_id: str) -> Optional[JobAnalysisResult]:
        ...


class InMemoryCandidateStore:
    """Assigns ids and timestamps; find_all returns newest first."""

    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[str, CandidateProfile] = {}

    def save(self, candidate: CandidateProfile) -> CandidateProfile:
        now = datetime.utcnow()
        with self._lock:
            candidate_id = candidate.id or str(uuid.uuid4())
            previous = self._items.get(candidate_id)
            stored = candidate.model_copy(update={
                "id": candidate_id,
                "created_at": previous.created_at if previous else (candidate.created_at or now),
                "updated_at": now,
            })
            self._items[candidate_id] = stored
        logger.debug(f"Stored candidate {candidate_id}")
        return stored

    def find_by_id(self, candidate_id: str) -> Optional[CandidateProfile]:
        with self._lock:
            return self._items.get(candidate_id)

    def find_by_email(self, email: str) -> Optional[CandidateProfile]:
        with self._lock:
            return next((c for c in self._items.values() if c.email.lower() == email.lower()), None)

    def find_all(self) -> List[CandidateProfile]:
        with self._lock:
            items = list(self._items.values())
        return sorted(items, key=lambda c: c.created_at or datetime.min, reverse=True)

    def exists(self, candidate_id: str) -> bool:
        with self._lock:
            return candidate_id in self._items

    def delete(self, candidate_id: str) -> None:
        with self._lock:
            self._items.pop(candidate_id, None)


class InMemoryJobAnalysisStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[str, JobAnalysisResult] = {}

    def save(self, analysis: JobAnalysisResult) -> str:
        analysis_id = analysis.id or str(uuid.uuid4())
        with self._lock:
            self._items[analysis_id] = analysis.model_copy(update={"id": analysis_id})
        return analysis_id

    def find_by_id(self, analysis_id: str) -> Optional[JobAnalysisResult]:
        with self._lock:
            return self._items.get(analysis_id)
