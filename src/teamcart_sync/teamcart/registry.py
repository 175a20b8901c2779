"""Projection registry – binds every team cart handler to its event type.

Handler names are ledger keys: renaming one makes already-processed
events look new.
"""
from __future__ import annotations

import functools
from typing import Any, Final

from teamcart_sync.application.inbox import HandlerRegistry, best_effort, idempotent
from teamcart_sync.kernel.messaging import DedupLedger
from teamcart_sync.teamcart import events as ev
from teamcart_sync.teamcart import handlers as h
from teamcart_sync.teamcart.handlers import ProjectionDeps

PROJECTIONS: Final = (
    (ev.CartCreated, "teamcart.created.projection", h.on_cart_created),
    (ev.MemberJoined, "teamcart.member_joined.projection", h.on_member_joined),
    (ev.ItemAdded, "teamcart.item_added.projection", h.on_item_added),
    (ev.ItemRemoved, "teamcart.item_removed.projection", h.on_item_removed),
    (ev.ItemQuantityUpdated, "teamcart.item_quantity_updated.projection", h.on_item_quantity_updated),
    (ev.CouponApplied, "teamcart.coupon_applied.projection", h.on_coupon_applied),
    (ev.CouponRemoved, "teamcart.coupon_removed.projection", h.on_coupon_removed),
    (ev.TipApplied, "teamcart.tip_applied.projection", h.on_tip_applied),
    (ev.CartLockedForPayment, "teamcart.locked.projection", h.on_cart_locked),
    (ev.PricingFinalized, "teamcart.pricing_finalized.projection", h.on_pricing_finalized),
    (ev.MemberCommittedToPayment, "teamcart.payment_committed.projection", h.on_member_committed_to_payment),
    (ev.OnlinePaymentSucceeded, "teamcart.payment_succeeded.projection", h.on_online_payment_succeeded),
    (ev.OnlinePaymentFailed, "teamcart.payment_failed.projection", h.on_online_payment_failed),
    (ev.CartReadyForConfirmation, "teamcart.ready_for_confirmation.projection", h.on_ready_for_confirmation),
    (ev.CartConverted, "teamcart.converted.projection", h.on_cart_converted),
    (ev.CartExpired, "teamcart.expired.projection", h.on_cart_expired),
    (ev.QuoteUpdated, "teamcart.quote_updated.projection", h.on_quote_updated),
)

SUGGESTION_TRIGGERS: Final = (ev.ItemAdded, ev.ItemRemoved, ev.ItemQuantityUpdated)


def build_projection_registry(
    deps: ProjectionDeps,
    ledger: DedupLedger,
    logger: Any = None,
) -> HandlerRegistry:
    """Register every projection, plus coupon suggestions when a service and runner exist."""
    log = logger or deps.logger
    registry = HandlerRegistry()
    for event_cls, name, func in PROJECTIONS:
        wrapped = idempotent(name, ledger, log)(functools.partial(func, deps=deps))
        registry.register(event_cls, wrapped)

    if deps.suggestions is not None and deps.background is not None:
        for event_cls in SUGGESTION_TRIGGERS:
            name = f"teamcart.{event_cls.__name__}.coupon_suggestions"
            wrapped = best_effort(name, ledger, deps.background, log)(
                functools.partial(h.on_items_changed_suggest_coupons, deps=deps)
            )
            registry.register(event_cls, wrapped)
    return registry


__all__ = ["PROJECTIONS", "SUGGESTION_TRIGGERS", "build_projection_registry"]
