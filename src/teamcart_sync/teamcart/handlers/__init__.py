"""Per-event projection handlers.

Each handler is ``async (event, deps) -> None``: it mutates the view store
with one targeted operation, signals realtime subscribers and pushes per
:data:`~teamcart_sync.teamcart.policy.PUSH_POLICY`. Missing carts are
logged no-ops; store and notifier failures raise.
"""
from teamcart_sync.teamcart.handlers.coupon_suggestions import on_items_changed_suggest_coupons
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps
from teamcart_sync.teamcart.handlers.financials import (
    on_coupon_applied,
    on_coupon_removed,
    on_tip_applied,
)
from teamcart_sync.teamcart.handlers.items import (
    on_item_added,
    on_item_quantity_updated,
    on_item_removed,
)
from teamcart_sync.teamcart.handlers.lifecycle import (
    on_cart_converted,
    on_cart_created,
    on_cart_expired,
    on_cart_locked,
    on_pricing_finalized,
    on_ready_for_confirmation,
)
from teamcart_sync.teamcart.handlers.members import on_member_joined
from teamcart_sync.teamcart.handlers.payments import (
    on_member_committed_to_payment,
    on_online_payment_failed,
    on_online_payment_succeeded,
)
from teamcart_sync.teamcart.handlers.quote import on_quote_updated

__all__ = [
    "ProjectionDeps",
    "on_cart_converted",
    "on_cart_created",
    "on_cart_expired",
    "on_cart_locked",
    "on_coupon_applied",
    "on_coupon_removed",
    "on_item_added",
    "on_item_quantity_updated",
    "on_item_removed",
    "on_items_changed_suggest_coupons",
    "on_member_committed_to_payment",
    "on_member_joined",
    "on_online_payment_failed",
    "on_online_payment_succeeded",
    "on_pricing_finalized",
    "on_quote_updated",
    "on_ready_for_confirmation",
    "on_tip_applied",
]
