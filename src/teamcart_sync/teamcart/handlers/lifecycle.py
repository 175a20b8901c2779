"""Cart lifecycle projections – creation, locking, confirmation and terminal states."""
from __future__ import annotations

from teamcart_sync.teamcart.events import (
    CartConverted,
    CartCreated,
    CartExpired,
    CartLockedForPayment,
    CartReadyForConfirmation,
    PricingFinalized,
)
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, log_name, push_for
from teamcart_sync.teamcart.ports import NotificationContext
from teamcart_sync.teamcart.view import (
    CartStatus,
    CartView,
    ViewItem,
    ViewMember,
    mask_share_token,
)


async def on_cart_created(event: CartCreated, deps: ProjectionDeps) -> None:
    """Build the initial document from the aggregate; never overwrites an existing one."""
    cart = await deps.carts.get_cart_with_items(event.cart_id)
    if cart is None:
        log_missing(deps, event)
        return

    view = CartView(
        cart_id=cart.cart_id,
        restaurant_id=cart.restaurant_id,
        restaurant_name=cart.restaurant_name,
        status=CartStatus.OPEN,
        share_token_masked=mask_share_token(cart.share_token),
        currency=cart.currency,
        deadline=cart.deadline,
        expires_at=cart.expires_at,
        members={m.user_id: ViewMember(user_id=m.user_id, name=m.name, role=m.role) for m in cart.members},
    )
    for snap in cart.items:
        view.items[snap.item_id] = ViewItem(
            item_id=snap.item_id,
            added_by_user_id=snap.added_by_user_id,
            name=snap.name,
            quantity=snap.quantity,
            base_price=snap.base_price,
            line_total=snap.line_total,
            customizations=list(snap.customizations),
            menu_item_id=snap.menu_item_id,
            image_url=snap.image_url,
        )
    view.recalculate_totals()

    created = await deps.store.create_vm(view)
    if not created:
        deps.logger.info(log_name(event, "already_exists"), cart_id=event.cart_id, event_id=event.event_id)
    await deps.realtime.notify_cart_updated(event.cart_id)


async def on_cart_locked(event: CartLockedForPayment, deps: ProjectionDeps) -> None:
    version = await deps.store.set_locked(event.cart_id)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await deps.realtime.notify_locked(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(event_type=event.event_type, actor_user_id=event.host_user_id),
    )


async def on_pricing_finalized(event: PricingFinalized, deps: ProjectionDeps) -> None:
    version = await deps.store.set_status(event.cart_id, CartStatus.FINALIZED)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(event_type=event.event_type, actor_user_id=event.host_user_id),
    )


async def on_ready_for_confirmation(event: CartReadyForConfirmation, deps: ProjectionDeps) -> None:
    version = await deps.store.set_status(event.cart_id, CartStatus.READY_TO_CONFIRM)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await deps.realtime.notify_ready_to_confirm(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            amount=event.total.amount,
            currency=event.total.currency,
        ),
    )


async def _retire_view(cart_id: str, deps: ProjectionDeps) -> int | None:
    """Delete the document and return its last version.

    A redelivered terminal event finds the document already gone and reads
    the version from the tombstone the first attempt left behind.
    """
    view = await deps.store.get_vm(cart_id)
    if view is None:
        return await deps.store.deleted_version(cart_id)
    await deps.store.delete_vm(cart_id, tombstone_version=view.version)
    return view.version


async def on_cart_converted(event: CartConverted, deps: ProjectionDeps) -> None:
    """Capture the version, delete the document, then push with that version."""
    version = await _retire_view(event.cart_id, deps)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_converted(event.cart_id, event.order_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=event.host_user_id,
            order_id=event.order_id,
        ),
    )


async def on_cart_expired(event: CartExpired, deps: ProjectionDeps) -> None:
    version = await _retire_view(event.cart_id, deps)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_expired(event.cart_id)
    await push_for(deps, event, version, NotificationContext(event_type=event.event_type))


__all__ = [
    "on_cart_converted",
    "on_cart_created",
    "on_cart_expired",
    "on_cart_locked",
    "on_pricing_finalized",
    "on_ready_for_confirmation",
]
