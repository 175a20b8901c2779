"""Every projection treats a missing cart as a logged no-op."""
from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest

from teamcart_sync.application.inbox import HandlerOutcome
from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart import events as ev
from teamcart_sync.testing.harness import ProjectionHarness

EVENTS: list[DomainEvent] = [
    ev.CartCreated(cart_id="gone", host_user_id="h", restaurant_id="r"),
    ev.MemberJoined(cart_id="gone", user_id="u", name="U"),
    ev.ItemAdded(cart_id="gone", item_id="i", user_id="u"),
    ev.ItemRemoved(cart_id="gone", item_id="i", user_id="u"),
    ev.ItemQuantityUpdated(cart_id="gone", item_id="i", user_id="u", old_quantity=1, new_quantity=2),
    ev.CouponApplied(cart_id="gone", coupon_id="c"),
    ev.CouponRemoved(cart_id="gone"),
    ev.TipApplied(cart_id="gone", tip=Money.of("1")),
    ev.CartLockedForPayment(cart_id="gone", host_user_id="h"),
    ev.PricingFinalized(cart_id="gone", host_user_id="h"),
    ev.MemberCommittedToPayment(cart_id="gone", user_id="u", amount=Money.of("1")),
    ev.OnlinePaymentSucceeded(cart_id="gone", user_id="u", transaction_id="t", amount=Money.of("1")),
    ev.OnlinePaymentFailed(cart_id="gone", user_id="u"),
    ev.CartReadyForConfirmation(cart_id="gone", total=Money.of("1"), cash_amount=Money.of("0")),
    ev.CartConverted(cart_id="gone", order_id="o"),
    ev.CartExpired(cart_id="gone"),
    ev.QuoteUpdated(cart_id="gone", quote_version=1, member_quotes={"u": Decimal("1")}, currency="USD"),
]


class TestMissingCartTolerance:
    def test_every_event_type_is_covered(self) -> None:
        assert {e.event_type for e in EVENTS} == set(ev.EVENT_TYPES)

    @pytest.mark.parametrize("event", EVENTS, ids=lambda e: e.event_type)
    def test_missing_cart_is_processed_without_side_effects(self, event: DomainEvent) -> None:
        async def run() -> None:
            h = ProjectionHarness()
            result = await h.dispatch(event)
            assert result.is_ok()
            assert result.value == [HandlerOutcome.PROCESSED]
            assert h.store.writes == []
            assert h.realtime.calls == []
            assert h.push.calls == []
            assert len(h.ledger.entries()) == 1

        asyncio.run(run())
