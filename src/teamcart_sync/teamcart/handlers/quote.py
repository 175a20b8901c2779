"""Quote projection, guarded by the monotonic ``quote_version``.

Quotes computed concurrently may arrive in any order; only a strictly
newer quote is applied. Quote updates never push.
"""
from __future__ import annotations

from teamcart_sync.teamcart.events import QuoteUpdated
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_name


async def on_quote_updated(event: QuoteUpdated, deps: ProjectionDeps) -> None:
    view = await deps.store.get_vm(event.cart_id)
    stored = view.quote_version if view is not None else 0
    if event.quote_version <= stored:
        deps.logger.info(
            log_name(event, "stale"),
            cart_id=event.cart_id,
            event_id=event.event_id,
            incoming=event.quote_version,
            stored=stored,
        )
        return

    # the store re-checks the ratchet inside its own atomic update
    applied = await deps.store.update_quote(
        event.cart_id,
        event.quote_version,
        event.member_quotes,
        event.currency,
        subtotal=event.subtotal,
        delivery_fee=event.delivery_fee,
        tax_amount=event.tax_amount,
        discount_amount=event.discount_amount,
        total=event.total,
    )
    if not applied:
        deps.logger.info(
            log_name(event, "not_applied"),
            cart_id=event.cart_id,
            event_id=event.event_id,
            incoming=event.quote_version,
            cart_missing=view is None,
        )
        return
    await deps.realtime.notify_cart_updated(event.cart_id)


__all__ = ["on_quote_updated"]
