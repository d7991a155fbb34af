"""Abstract interface for the anonymized request audit trail."""

from abc import ABC, abstractmethod
from datetime import datetime

from playscribe.common import AnonymizedRequestRecord


class RequestAuditStore(ABC):
    """Append-only store of anonymized third-party request records."""

    @abstractmethod
    async def create_record(self, record: AnonymizedRequestRecord) -> None:
        """
        Persists a new record. Records are never updated afterwards.

        Raises:
            AuditPersistenceError: If the record cannot be stored.
        """

    @abstractmethod
    async def purge_expired(self, now: datetime) -> int:
        """Deletes records whose retention window has passed and returns how many."""
