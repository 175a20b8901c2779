"""Payment projections – cash-on-delivery commitments and online payment outcomes."""
from __future__ import annotations

from teamcart_sync.teamcart.events import (
    MemberCommittedToPayment,
    OnlinePaymentFailed,
    OnlinePaymentSucceeded,
)
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, push_for
from teamcart_sync.teamcart.ports import NotificationContext


async def on_member_committed_to_payment(event: MemberCommittedToPayment, deps: ProjectionDeps) -> None:
    version = await deps.store.commit_cash_on_delivery(event.cart_id, event.user_id, event.amount)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await deps.realtime.notify_payment_event(event.cart_id, event.user_id, "cod_committed")


async def on_online_payment_succeeded(event: OnlinePaymentSucceeded, deps: ProjectionDeps) -> None:
    version = await deps.store.record_online_payment(
        event.cart_id, event.user_id, event.amount, event.transaction_id
    )
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await deps.realtime.notify_payment_event(event.cart_id, event.user_id, "online_succeeded")
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=event.user_id,
            amount=event.amount.amount,
            currency=event.amount.currency,
        ),
    )


async def on_online_payment_failed(event: OnlinePaymentFailed, deps: ProjectionDeps) -> None:
    version = await deps.store.record_online_payment_failure(event.cart_id, event.user_id)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await deps.realtime.notify_payment_event(event.cart_id, event.user_id, "online_failed")
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=event.user_id,
            additional_info=event.reason,
        ),
    )


__all__ = [
    "on_member_committed_to_payment",
    "on_online_payment_failed",
    "on_online_payment_succeeded",
]
