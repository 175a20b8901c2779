"""Application outbox – draining committed events into the dispatcher."""
from teamcart_sync.application.outbox.drainer import DrainReport, OutboxDrainer

__all__ = ["DrainReport", "OutboxDrainer"]
