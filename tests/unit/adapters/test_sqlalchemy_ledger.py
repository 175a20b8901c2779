"""Unit tests for the SQLAlchemy deduplication ledger.

Uses an in-memory SQLite database via *aiosqlite*: no running server needed.
"""
from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.pool import StaticPool

from teamcart_sync.adapters.sqlalchemy import (
    SqlAlchemyDedupLedger,
    SqlAlchemySessionFactory,
    create_ledger_schema,
)
from teamcart_sync.kernel.errors import DuplicateLedgerEntryError


async def _ledger() -> tuple[SqlAlchemyDedupLedger, SqlAlchemySessionFactory]:
    sessions = SqlAlchemySessionFactory("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await create_ledger_schema(sessions.engine)
    return SqlAlchemyDedupLedger(sessions), sessions


class TestSqlAlchemyDedupLedger:
    def test_unknown_pair_is_not_processed(self) -> None:
        async def run() -> None:
            ledger, sessions = await _ledger()
            assert await ledger.has_processed("e1", "h1") is False
            await sessions.dispose()

        asyncio.run(run())

    def test_mark_then_has_processed(self) -> None:
        async def run() -> None:
            ledger, sessions = await _ledger()
            await ledger.mark_processed("e1", "h1")
            assert await ledger.has_processed("e1", "h1") is True
            assert await ledger.has_processed("e1", "h2") is False
            assert await ledger.has_processed("e2", "h1") is False
            await sessions.dispose()

        asyncio.run(run())

    def test_duplicate_pair_is_rejected(self) -> None:
        async def run() -> None:
            ledger, sessions = await _ledger()
            await ledger.mark_processed("e1", "h1")
            with pytest.raises(DuplicateLedgerEntryError):
                await ledger.mark_processed("e1", "h1")
            # the ledger stays usable after the rollback
            await ledger.mark_processed("e1", "h2")
            assert await ledger.has_processed("e1", "h2") is True
            await sessions.dispose()

        asyncio.run(run())

    def test_schema_creation_is_repeatable(self) -> None:
        async def run() -> None:
            ledger, sessions = await _ledger()
            await create_ledger_schema(sessions.engine)
            await ledger.mark_processed("e1", "h1")
            assert await ledger.has_processed("e1", "h1") is True
            await sessions.dispose()

        asyncio.run(run())
