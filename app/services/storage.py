"""Keyed storage for analysis records."""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from app.models.analysis import AnalysisRecord, NewAnalysis


class AnalysisStorage(Protocol):
    """Create / get / list-by-URL capability used by the analysis flow.

    There is deliberately no update or delete: records are immutable once
    created.
    """

    def create(self, analysis: NewAnalysis) -> AnalysisRecord:
        ...

    def get(self, analysis_id: int) -> Optional[AnalysisRecord]:
        ...

    def list_by_url(self, url: str) -> List[AnalysisRecord]:
        ...


class InMemoryAnalysisStorage:
    """Process-local store.  Everything is lost on restart.

    Id allocation and insertion happen under one lock so concurrent callers
    (threads or tasks) always receive distinct, gap-free ids starting at 1.
    """

    def __init__(self) -> None:
        self._records: Dict[int, AnalysisRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, analysis: NewAnalysis) -> AnalysisRecord:
        with self._lock:
            record = AnalysisRecord(
                **analysis.model_dump(),
                id=self._next_id,
                created_at=datetime.now(timezone.utc),
            )
            self._records[record.id] = record
            self._next_id += 1
        return record

    def get(self, analysis_id: int) -> Optional[AnalysisRecord]:
        return self._records.get(analysis_id)

    def list_by_url(self, url: str) -> List[AnalysisRecord]:
        with self._lock:
            records = list(self._records.values())
        return [record for record in records if record.url == url]


_storage = InMemoryAnalysisStorage()


def get_storage() -> AnalysisStorage:
    return _storage
