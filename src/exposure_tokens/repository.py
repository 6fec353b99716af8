"""Storage interface for hashed location records

Persistence belongs to the caller; this module only fixes the interface
the rest of the package talks to, plus an in-memory implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import structlog

from exposure_tokens.models import HashedLocationRecord

logger = structlog.get_logger(__name__)


class LocationRepository(ABC):
    """Where HashedLocationRecords live."""

    @abstractmethod
    def add(self, record: HashedLocationRecord) -> None:
        """Insert or replace a record by id"""

    @abstractmethod
    def get(self, record_id: str) -> Optional[HashedLocationRecord]:
        """Fetch a record by id"""

    @abstractmethod
    def list(self) -> List[HashedLocationRecord]:
        """All records, oldest first"""

    @abstractmethod
    def remove_before(self, cutoff: datetime) -> int:
        """Delete records older than cutoff, returning how many were removed"""

    def add_all(self, records: Iterable[HashedLocationRecord]) -> int:
        count = 0
        for record in records:
            self.add(record)
            count += 1
        return count

    def find_by_tokens(self, tokens: Iterable[str]) -> List[HashedLocationRecord]:
        """Records sharing at least one token with a published token set"""
        published = set(tokens)
        return [r for r in self.list() if published.intersection(r.tokens)]


class InMemoryLocationRepository(LocationRepository):
    """Dict-backed repository."""

    def __init__(self):
        self._records: Dict[str, HashedLocationRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: HashedLocationRecord) -> None:
        self._records[record.id] = record

    def get(self, record_id: str) -> Optional[HashedLocationRecord]:
        return self._records.get(record_id)

    def list(self) -> List[HashedLocationRecord]:
        return sorted(self._records.values(), key=lambda r: r.timestamp)

    def remove_before(self, cutoff: datetime) -> int:
        if cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)
        expired = [rid for rid, r in self._records.items() if r.timestamp < cutoff]
        for rid in expired:
            del self._records[rid]
        if expired:
            logger.info("Removed expired location records", count=len(expired))
        return len(expired)
