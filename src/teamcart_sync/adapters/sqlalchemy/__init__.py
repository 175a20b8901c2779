"""SQLAlchemy adapters – deduplication ledger and session factory."""
from teamcart_sync.adapters.sqlalchemy.ledger import (
    LedgerBase,
    ProcessedEventModel,
    SqlAlchemyDedupLedger,
    create_ledger_schema,
)
from teamcart_sync.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = [
    "LedgerBase",
    "ProcessedEventModel",
    "SqlAlchemyDedupLedger",
    "SqlAlchemySessionFactory",
    "create_ledger_schema",
]
