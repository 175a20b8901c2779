"""Targeted, single-document mutations applied to a :class:`CartView`.

Pure functions shared by every view store backend. None of them touch
``version``; the store bumps it around the mutation so the increment
commits atomically with the change. Upserts are keyed by id so replaying
a mutation never duplicates entries.
"""
from __future__ import annotations

from decimal import Decimal

from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart.view import (
    ZERO,
    CartStatus,
    CartView,
    PaymentStatus,
    ViewItem,
    ViewMember,
)


def add_member(view: CartView, member: ViewMember) -> None:
    existing = view.members.get(member.user_id)
    if existing is not None:
        # a replayed join keeps role and payment state
        existing.name = member.name
        return
    view.members[member.user_id] = member


def add_item(view: CartView, item: ViewItem) -> None:
    view.items[item.item_id] = item
    view.recalculate_totals()


def remove_item(view: CartView, item_id: str) -> None:
    view.items.pop(item_id, None)
    view.recalculate_totals()


def update_item_quantity(view: CartView, item_id: str, quantity: int) -> None:
    item = view.items.get(item_id)
    if item is None:
        return
    item.quantity = quantity
    item.recalculate()
    view.recalculate_totals()


def apply_coupon(view: CartView, coupon_code: str, discount: Money) -> None:
    view.coupon_code = coupon_code
    view.discount_amount = discount.amount
    view.discount_currency = discount.currency
    view.recalculate_totals()


def remove_coupon(view: CartView) -> None:
    view.coupon_code = None
    view.discount_amount = ZERO
    view.discount_currency = None
    view.recalculate_totals()


def apply_tip(view: CartView, tip: Money) -> None:
    view.tip_amount = tip.amount
    view.tip_currency = tip.currency
    view.recalculate_totals()


def set_status(view: CartView, status: CartStatus) -> None:
    view.status = status


def commit_cash_on_delivery(view: CartView, user_id: str, amount: Money) -> None:
    member = view.members.get(user_id)
    if member is None:
        return
    if member.payment_status == PaymentStatus.CASH_ON_DELIVERY:
        view.cash_on_delivery_portion -= member.committed_amount
    member.payment_status = PaymentStatus.CASH_ON_DELIVERY
    member.committed_amount = amount.amount
    view.cash_on_delivery_portion += amount.amount


def record_online_payment(view: CartView, user_id: str, amount: Money, transaction_id: str) -> None:
    member = view.members.get(user_id)
    if member is None:
        return
    member.payment_status = PaymentStatus.PAID_ONLINE
    member.committed_amount = amount.amount
    member.online_transaction_id = transaction_id


def record_online_payment_failure(view: CartView, user_id: str) -> None:
    member = view.members.get(user_id)
    if member is None:
        return
    member.payment_status = PaymentStatus.FAILED
    member.online_transaction_id = None
    # failures never accumulate a committed amount
    member.committed_amount = ZERO


def update_quote(
    view: CartView,
    quote_version: int,
    member_quotes: dict[str, Decimal],
    currency: str,
    *,
    subtotal: Decimal | None = None,
    delivery_fee: Decimal | None = None,
    tax_amount: Decimal | None = None,
    discount_amount: Decimal | None = None,
    total: Decimal | None = None,
) -> bool:
    """Apply a pricing quote when it is strictly newer than the stored one.

    Returns ``False`` (and leaves *view* untouched) for stale or duplicate
    quote versions.
    """
    if quote_version <= view.quote_version:
        return False
    for user_id, member in view.members.items():
        member.quoted_amount = member_quotes.get(user_id, ZERO)
    view.currency = currency
    if subtotal is not None:
        view.subtotal = subtotal
    if delivery_fee is not None:
        view.delivery_fee = delivery_fee
    if tax_amount is not None:
        view.tax_amount = tax_amount
    if discount_amount is not None:
        view.discount_amount = discount_amount
    if total is not None:
        view.total = total
    view.quote_version = quote_version
    return True


__all__ = [
    "add_item",
    "add_member",
    "apply_coupon",
    "apply_tip",
    "commit_cash_on_delivery",
    "record_online_payment",
    "record_online_payment_failure",
    "remove_coupon",
    "remove_item",
    "set_status",
    "update_item_quantity",
    "update_quote",
]
