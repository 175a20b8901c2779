"""SQLAlchemy adapter – SqlAlchemyDedupLedger.

The ``processed_events`` table's composite primary key is the uniqueness
guarantee: a second insert of the same ``(event_id, handler_name)`` fails
with :class:`DuplicateLedgerEntryError` instead of double-counting.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Callable

from sqlalchemy import DateTime, String
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from teamcart_sync.kernel.errors import DuplicateLedgerEntryError
from teamcart_sync.kernel.messaging import DedupLedger


class LedgerBase(DeclarativeBase):
    pass


class ProcessedEventModel(LedgerBase):
    __tablename__ = "processed_events"

    event_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    handler_name: Mapped[str] = mapped_column(String(200), primary_key=True)
    processed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )


async def create_ledger_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(LedgerBase.metadata.create_all)


class SqlAlchemyDedupLedger(DedupLedger):
    """Each call runs in its own short session and commits immediately."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory

    async def has_processed(self, event_id: str, handler_name: str) -> bool:
        async with self._session_factory() as session:
            row = await session.get(ProcessedEventModel, (event_id, handler_name))
            return row is not None

    async def mark_processed(self, event_id: str, handler_name: str) -> None:
        async with self._session_factory() as session:
            session.add(ProcessedEventModel(event_id=event_id, handler_name=handler_name))
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateLedgerEntryError(event_id, handler_name, cause=exc) from exc


__all__ = ["LedgerBase", "ProcessedEventModel", "SqlAlchemyDedupLedger", "create_ledger_schema"]
