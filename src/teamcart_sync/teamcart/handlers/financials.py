"""Coupon and tip projections."""
from __future__ import annotations

from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart.events import CouponApplied, CouponRemoved, TipApplied
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, log_name, push_for
from teamcart_sync.teamcart.ports import NotificationContext


def fallback_coupon_code(coupon_id: str) -> str:
    return f"#{coupon_id[:8]}"


async def on_coupon_applied(event: CouponApplied, deps: ProjectionDeps) -> None:
    """Resolve the display code and discount, then apply them to the view.

    A missing coupon entity still applies: the code falls back to the
    first eight characters of its id and the discount to zero.
    """
    cart = await deps.carts.get_cart_with_items(event.cart_id)
    if cart is None:
        log_missing(deps, event)
        return

    coupon = await deps.carts.get_coupon_by_id(event.coupon_id)
    discount: Money | None = None
    if coupon is None:
        code = fallback_coupon_code(event.coupon_id)
        deps.logger.warning(
            log_name(event, "coupon_missing"),
            cart_id=event.cart_id,
            event_id=event.event_id,
            coupon_id=event.coupon_id,
        )
    else:
        code = coupon.code
        if deps.discounts is not None:
            discount = deps.discounts.calculate(coupon, cart)
    if discount is None:
        discount = Money.zero(cart.currency)

    version = await deps.store.apply_coupon(event.cart_id, code, discount)
    if version is None:
        log_missing(deps, event)
        return

    await deps.realtime.notify_cart_updated(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=cart.host_user_id,
            amount=discount.amount,
            currency=discount.currency,
            additional_info=code,
        ),
    )


async def on_coupon_removed(event: CouponRemoved, deps: ProjectionDeps) -> None:
    version = await deps.store.remove_coupon(event.cart_id)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await push_for(deps, event, version, NotificationContext(event_type=event.event_type))


async def on_tip_applied(event: TipApplied, deps: ProjectionDeps) -> None:
    version = await deps.store.apply_tip(event.cart_id, event.tip)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            amount=event.tip.amount,
            currency=event.tip.currency,
        ),
    )


__all__ = ["fallback_coupon_code", "on_coupon_applied", "on_coupon_removed", "on_tip_applied"]
