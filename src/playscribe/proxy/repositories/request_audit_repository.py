"""Repository for the anonymized request audit trail."""

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session as DBSession
from sqlmodel import select

from playscribe.common import AnonymizedRequestRecord, setup_logging
from playscribe.common.db_models import ThirdPartyRequest
from playscribe.proxy.exceptions import AuditPersistenceError
from playscribe.proxy.infrastructure.interfaces import RequestAuditStore

logger = setup_logging()


def _as_utc(value: datetime) -> datetime:
    """Timestamps are bound timezone-aware in UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLRequestAuditStore(RequestAuditStore):
    """
    Handles all database operations for anonymized request records.

    Blocking SQLModel calls run in worker threads so the event loop serving
    transcription requests is never held by the database.
    """

    def __init__(self, session_factory: Callable[[], DBSession]):
        self._session_factory = session_factory

    async def create_record(self, record: AnonymizedRequestRecord) -> None:
        await asyncio.to_thread(self._insert, record)

    async def purge_expired(self, now: datetime) -> int:
        return await asyncio.to_thread(self._delete_expired, now)

    def _insert(self, record: AnonymizedRequestRecord) -> None:
        row = ThirdPartyRequest(
            request_id=record.request_id,
            user_id=record.internal_user_id,
            provider=record.provider.value,
            request_type=record.request_type,
            data_hash=record.metadata_hash,
            created_at=_as_utc(record.created_at),
            expires_at=_as_utc(record.expires_at),
        )
        try:
            with self._session_factory() as db:
                db.add(row)
                db.commit()
        except SQLAlchemyError as e:
            logger.exception(
                "Failed to store request record",
                extra={"request_id": record.request_id},
            )
            raise AuditPersistenceError(record.request_id, e) from e

        logger.info(
            "Request record stored",
            extra={"request_id": record.request_id, "provider": record.provider.value},
        )

    def _delete_expired(self, now: datetime) -> int:
        statement = select(ThirdPartyRequest).where(
            ThirdPartyRequest.expires_at <= _as_utc(now)
        )
        with self._session_factory() as db:
            expired = db.exec(statement).all()
            for row in expired:
                db.delete(row)
            db.commit()

        logger.info("Expired request records purged", extra={"count": len(expired)})
        return len(expired)
