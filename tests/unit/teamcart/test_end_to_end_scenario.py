"""A full cart lifetime through the dispatcher, replays included."""
from __future__ import annotations

import asyncio
from decimal import Decimal

from teamcart_sync.application.inbox import HandlerOutcome
from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart import events as ev
from teamcart_sync.teamcart.ports import CouponSnapshot, NotificationTarget
from teamcart_sync.teamcart.view import CartStatus
from teamcart_sync.testing.builders import CartSnapshotBuilder
from teamcart_sync.testing.harness import ProjectionHarness


class TestCartLifetime:
    def test_create_add_update_coupon_lock_convert(self) -> None:
        async def run() -> None:
            h = ProjectionHarness(discount=Money.of("2.50"))
            h.carts.add_cart(CartSnapshotBuilder().build())
            h.carts.add_coupon(CouponSnapshot("coupon-1", "SAVE10"))

            await h.dispatch(ev.CartCreated(cart_id="cart-1", host_user_id="host-1", restaurant_id="rest-1"))
            assert h.store.peek("cart-1").version == 1  # type: ignore[union-attr]
            assert h.realtime.count("cart_updated") == 1
            assert len(h.push.calls) == 0

            h.carts.add_cart(CartSnapshotBuilder().with_item("i1", quantity=2, price="5.00").build())
            added = ev.ItemAdded(cart_id="cart-1", item_id="i1", user_id="guest-1")
            await h.dispatch(added)
            view = h.store.peek("cart-1")
            assert view is not None
            assert view.version == 2
            assert view.subtotal == Decimal("10.00")
            assert h.realtime.count("cart_updated") == 2
            assert len(h.push.calls) == 1

            await h.dispatch(
                ev.ItemQuantityUpdated(
                    cart_id="cart-1", item_id="i1", user_id="guest-1", old_quantity=2, new_quantity=5
                )
            )
            view = h.store.peek("cart-1")
            assert view is not None
            assert view.version == 3
            assert view.items["i1"].line_total == Decimal("25.00")
            assert h.realtime.count("cart_updated") == 3
            assert len(h.push.calls) == 1

            await h.dispatch(ev.CouponApplied(cart_id="cart-1", coupon_id="coupon-1"))
            view = h.store.peek("cart-1")
            assert view is not None
            assert view.version == 4
            assert view.coupon_code == "SAVE10"
            assert view.discount_amount == Decimal("2.50")
            assert view.discount_currency == "USD"
            assert view.total == Decimal("22.50")
            assert h.realtime.count("cart_updated") == 4
            assert len(h.push.calls) == 2

            # a redelivered event changes nothing and notifies nobody
            replay = await h.dispatch(added)
            assert replay.value == [HandlerOutcome.DUPLICATE]
            assert h.store.peek("cart-1").version == 4  # type: ignore[union-attr]
            assert h.realtime.count() == 4
            assert len(h.push.calls) == 2

            await h.dispatch(ev.CartLockedForPayment(cart_id="cart-1", host_user_id="host-1"))
            view = h.store.peek("cart-1")
            assert view is not None
            assert view.version == 5
            assert view.status == CartStatus.LOCKED

            await h.dispatch(ev.CartConverted(cart_id="cart-1", order_id="order-1", host_user_id="host-1"))
            assert h.store.peek("cart-1") is None

            pushed = [(c.version, c.target) for c in h.push.calls]
            assert pushed == [
                (2, NotificationTarget.ALL),
                (4, NotificationTarget.ALL),
                (5, NotificationTarget.MEMBERS),
                (5, NotificationTarget.ALL),
            ]
            assert h.realtime.count("converted") == 1
            assert h.realtime.count("locked") == 1

        asyncio.run(run())

    def test_stale_snapshot_can_overwrite_newer_item_state(self) -> None:
        """An ItemAdded replayed after a quantity change re-reads the aggregate.

        Item snapshots come from the aggregate at handling time, so the view
        converges on the aggregate's current quantity, not the event's.
        """

        async def run() -> None:
            h = ProjectionHarness()
            h.carts.add_cart(CartSnapshotBuilder().with_item("i1", quantity=2).build())
            await h.dispatch(ev.CartCreated(cart_id="cart-1", host_user_id="host-1", restaurant_id="rest-1"))

            h.carts.add_cart(CartSnapshotBuilder().with_item("i1", quantity=4).build())
            await h.dispatch(ev.ItemAdded(cart_id="cart-1", item_id="i1", user_id="guest-1"))
            view = h.store.peek("cart-1")
            assert view is not None
            assert view.items["i1"].quantity == 4

        asyncio.run(run())

    def test_late_tip_overwrites_newer_tip(self) -> None:
        """Non-versioned mutations carry no ordering guard; the last one handled wins."""

        async def run() -> None:
            h = ProjectionHarness()
            cart = CartSnapshotBuilder().build()
            h.carts.add_cart(cart)
            await h.dispatch(ev.CartCreated(cart_id="cart-1", host_user_id="host-1", restaurant_id="rest-1"))

            newer = ev.TipApplied(cart_id="cart-1", tip=Money.of("5"))
            older = ev.TipApplied(cart_id="cart-1", tip=Money.of("3"))
            await h.dispatch(newer)
            await h.dispatch(older)

            view = h.store.peek("cart-1")
            assert view is not None
            assert view.tip_amount == Decimal("3")
            assert view.version == 3

        asyncio.run(run())
