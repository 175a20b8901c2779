"""FCM adapter – push titles, bodies and the data payload.

The ``event`` field maps an event type to the tag mobile clients switch
on; anything unmapped is ``state_changed``.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Final

from teamcart_sync.teamcart.ports import NotificationContext, NotificationTarget

EVENT_TAGS: Final[dict[str, str]] = {
    "MemberJoined": "member_joined",
    "ItemAdded": "item_added",
    "ItemRemoved": "item_removed",
    "ItemQuantityUpdated": "item_quantity_updated",
    "CartLockedForPayment": "cart_locked",
    "TipApplied": "tip_applied",
    "CouponApplied": "coupon_applied",
    "CouponRemoved": "coupon_removed",
    "MemberCommittedToPayment": "payment_committed",
    "OnlinePaymentSucceeded": "payment_succeeded",
    "OnlinePaymentFailed": "payment_failed",
    "CartReadyForConfirmation": "ready_for_confirmation",
    "CartConverted": "cart_converted",
    "CartExpired": "cart_expired",
}

_STATE_MESSAGES: Final[dict[str, tuple[str, str]]] = {
    "Open": ("Team cart open", "Your team cart was updated."),
    "Locked": ("Team cart locked", "The host is confirming payment."),
    "Finalized": ("Team cart finalized", "Final pricing is ready."),
    "ReadyToConfirm": ("Ready to confirm", "The team cart is ready for payment confirmation."),
    "Converted": ("Order placed", "The team cart became an order."),
    "Expired": ("Team cart expired", "Your team cart has closed."),
}

_DEFAULT_MESSAGE: Final = ("Team cart updated", "Your team cart was updated.")


def event_tag(event_type: str | None) -> str:
    return EVENT_TAGS.get(event_type or "", "state_changed")


def _money(amount: Decimal | None, currency: str | None) -> str:
    if amount is None:
        return ""
    return f"{amount:,.2f} {currency or ''}".strip()


def compose_message(
    state: str,
    target: NotificationTarget,
    context: NotificationContext | None,
) -> tuple[str, str]:
    """Return ``(title, body)`` for a push; state-based when there is no context."""
    if context is None:
        return _STATE_MESSAGES.get(state, _DEFAULT_MESSAGE)

    to_host = target == NotificationTarget.HOST
    actor = context.actor_name
    item = context.item_name or "an item"
    amount = _money(context.amount, context.currency)

    match context.event_type:
        case "MemberJoined":
            who = actor or "A member"
            suffix = "your team cart" if to_host else "the team cart"
            return "New member", f"{who} joined {suffix}"
        case "ItemAdded":
            qty = f" (x{context.quantity})" if context.quantity and context.quantity > 1 else ""
            return "Item added", f"{actor or 'Someone'} added {item}{qty}"
        case "ItemRemoved":
            return "Item removed", f"{actor or 'Someone'} removed {item}"
        case "ItemQuantityUpdated":
            return "Quantity updated", f"{actor or 'Someone'} changed {item} to x{context.quantity or 1}"
        case "CartLockedForPayment":
            if to_host:
                return "Team cart locked", "You locked the team cart. Apply a tip or coupon if needed."
            return "Team cart locked", "The team cart is locked. Please pay your share."
        case "TipApplied":
            if to_host:
                return "Tip added", f"You added a tip of {amount}"
            return "Tip added", f"The host added a tip of {amount}. Your share was updated."
        case "CouponApplied":
            code = context.additional_info or "a coupon"
            if to_host:
                return "Coupon applied", f"You applied coupon {code}"
            return "Coupon applied", f"The host applied coupon {code}. Your share was updated."
        case "CouponRemoved":
            if to_host:
                return "Coupon removed", "You removed the coupon"
            return "Coupon removed", "The host removed the coupon. Your share was updated."
        case "MemberCommittedToPayment":
            return "Payment committed", f"{actor or 'A member'} committed {amount} as cash on delivery"
        case "OnlinePaymentSucceeded":
            return "Payment successful", f"{actor or 'A member'} paid {amount}"
        case "OnlinePaymentFailed":
            return "Payment failed", "Your payment failed. Please try again."
        case "CartReadyForConfirmation":
            if to_host:
                return "Ready to place order", "Everyone has paid. You can place the order now!"
            return "Ready to place order", "Everyone has paid. The host will place the order."
        case "CartConverted":
            ref = f" #{context.order_id[:8]}" if context.order_id else ""
            return "Order placed", f"The team cart became order{ref}"
        case "CartExpired":
            return "Team cart expired", "The team cart expired and was closed."
        case _:
            return _STATE_MESSAGES.get(state, _DEFAULT_MESSAGE)


def build_data_payload(
    cart_id: str,
    version: int,
    state: str,
    context: NotificationContext | None,
    title: str,
    body: str,
) -> dict[str, str]:
    """FCM data map; every value is a string and no share token is ever included."""
    return {
        "type": "teamcart",
        "teamCartId": cart_id,
        "version": str(version),
        "state": state,
        "click_action": "FLUTTER_NOTIFICATION_CLICK",
        "route": f"/teamcart/{cart_id}",
        "actorId": (context.actor_user_id if context else None) or "",
        "event": event_tag(context.event_type if context else None),
        "title": title,
        "body": body,
    }


__all__ = ["EVENT_TAGS", "build_data_payload", "compose_message", "event_tag"]
