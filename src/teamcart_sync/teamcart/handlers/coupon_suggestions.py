"""Coupon suggestions – a best-effort broadcast after item changes.

Runs on the background runner, never on the projection's critical path.
Its failures end here.
"""
from __future__ import annotations

from typing import Any

from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, log_name


async def on_items_changed_suggest_coupons(event: Any, deps: ProjectionDeps) -> None:
    if deps.suggestions is None:
        return
    try:
        cart = await deps.carts.get_cart_with_items(event.cart_id)
        if cart is None:
            log_missing(deps, event)
            return
        suggestions = await deps.suggestions.suggest(cart)
        await deps.realtime.notify_coupon_suggestions(event.cart_id, suggestions)
    except Exception as exc:  # noqa: BLE001
        deps.logger.error(
            log_name(event, "coupon_suggestions_failed"),
            cart_id=event.cart_id,
            event_id=event.event_id,
            error=repr(exc),
        )


__all__ = ["on_items_changed_suggest_coupons"]
