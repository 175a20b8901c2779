"""Kernel messaging – inbox (dedup ledger) and outbox ports."""
from teamcart_sync.kernel.messaging.inbox import DedupLedger, LedgerEntry
from teamcart_sync.kernel.messaging.outbox import OutboxRecord, OutboxSource, OutboxStatus

__all__ = [
    "DedupLedger",
    "LedgerEntry",
    "OutboxRecord",
    "OutboxSource",
    "OutboxStatus",
]
