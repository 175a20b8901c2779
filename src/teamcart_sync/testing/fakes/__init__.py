"""Testing fakes – in-memory doubles for the pipeline ports."""
from teamcart_sync.testing.fakes.ledger import InMemoryDedupLedger
from teamcart_sync.testing.fakes.notifiers import PushCall, RecordingPushNotifier, RecordingRealtimeNotifier
from teamcart_sync.testing.fakes.outbox import InMemoryOutboxSource
from teamcart_sync.testing.fakes.push import InMemoryPushSender, SentPush
from teamcart_sync.testing.fakes.repositories import (
    FixedDiscountCalculator,
    InMemoryCartRepository,
    InMemoryDeviceTokenRepository,
    StaticCouponSuggestionService,
)
from teamcart_sync.testing.fakes.store import InMemoryCartViewStore

__all__ = [
    "FixedDiscountCalculator",
    "InMemoryCartRepository",
    "InMemoryCartViewStore",
    "InMemoryDedupLedger",
    "InMemoryDeviceTokenRepository",
    "InMemoryOutboxSource",
    "InMemoryPushSender",
    "PushCall",
    "RecordingPushNotifier",
    "RecordingRealtimeNotifier",
    "SentPush",
    "StaticCouponSuggestionService",
]
