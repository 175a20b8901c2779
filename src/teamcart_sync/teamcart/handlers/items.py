"""Item projections – add, remove and quantity changes."""
from __future__ import annotations

from teamcart_sync.teamcart.events import ItemAdded, ItemQuantityUpdated, ItemRemoved
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, push_for
from teamcart_sync.teamcart.ports import NotificationContext
from teamcart_sync.teamcart.view import ViewItem


async def on_item_added(event: ItemAdded, deps: ProjectionDeps) -> None:
    """Snapshot the item from the aggregate and upsert it into the view."""
    cart = await deps.carts.get_cart_with_items(event.cart_id)
    if cart is None:
        log_missing(deps, event)
        return
    snap = cart.item(event.item_id)
    if snap is None:
        log_missing(deps, event, "item", item_id=event.item_id)
        return

    item = ViewItem(
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
    version = await deps.store.add_item(event.cart_id, item)
    if version is None:
        log_missing(deps, event)
        return

    await deps.realtime.notify_cart_updated(event.cart_id)
    actor = cart.member(event.user_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=event.user_id,
            actor_name=actor.name if actor else None,
            item_name=snap.name,
            quantity=snap.quantity,
        ),
    )


async def on_item_removed(event: ItemRemoved, deps: ProjectionDeps) -> None:
    # the aggregate no longer has the item; take its name from the view
    view = await deps.store.get_vm(event.cart_id)
    if view is None:
        log_missing(deps, event)
        return
    removed = view.items.get(event.item_id)

    version = await deps.store.remove_item(event.cart_id, event.item_id)
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
            actor_user_id=event.user_id,
            item_name=removed.name if removed else None,
        ),
    )


async def on_item_quantity_updated(event: ItemQuantityUpdated, deps: ProjectionDeps) -> None:
    version = await deps.store.update_item_quantity(event.cart_id, event.item_id, event.new_quantity)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    # no-op: quantity changes are absent from the push policy
    await push_for(deps, event, version)


__all__ = ["on_item_added", "on_item_quantity_updated", "on_item_removed"]
