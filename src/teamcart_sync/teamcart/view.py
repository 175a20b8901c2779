"""CartView – the read-optimised projection document, one per cart.

This is the shape client applications read. ``version`` and
``quote_version`` are the two freshness tokens clients compare.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from teamcart_sync.kernel.types import DEFAULT_CURRENCY

ZERO = Decimal("0")


class CartStatus(StrEnum):
    OPEN = "Open"
    LOCKED = "Locked"
    FINALIZED = "Finalized"
    READY_TO_CONFIRM = "ReadyToConfirm"
    CONVERTED = "Converted"
    EXPIRED = "Expired"

    @property
    def is_terminal(self) -> bool:
        return self in (CartStatus.CONVERTED, CartStatus.EXPIRED)


class MemberRole(StrEnum):
    HOST = "Host"
    GUEST = "Guest"


class PaymentStatus(StrEnum):
    PENDING = "Pending"
    CASH_ON_DELIVERY = "CashOnDelivery"
    PAID_ONLINE = "PaidOnline"
    FAILED = "Failed"


def mask_share_token(token: str | None) -> str | None:
    """Return the only client-visible form of a share token: ``***`` + last 4."""
    if not token:
        return None
    return f"***{token[-4:]}"


@dataclasses.dataclass
class Customization:
    group_name: str
    choice_name: str
    price_adjustment: Decimal = ZERO


@dataclasses.dataclass
class ViewItem:
    item_id: str
    added_by_user_id: str
    name: str
    quantity: int
    base_price: Decimal
    line_total: Decimal = ZERO
    customizations: list[Customization] = dataclasses.field(default_factory=list)
    menu_item_id: str | None = None
    image_url: str | None = None

    @property
    def unit_price(self) -> Decimal:
        return self.base_price + sum((c.price_adjustment for c in self.customizations), ZERO)

    def recalculate(self) -> None:
        self.line_total = self.unit_price * self.quantity


@dataclasses.dataclass
class ViewMember:
    user_id: str
    name: str
    role: MemberRole = MemberRole.GUEST
    payment_status: PaymentStatus = PaymentStatus.PENDING
    committed_amount: Decimal = ZERO
    online_transaction_id: str | None = None
    quoted_amount: Decimal = ZERO


@dataclasses.dataclass
class CartView:
    cart_id: str
    restaurant_id: str
    restaurant_name: str = ""
    status: CartStatus = CartStatus.OPEN
    share_token_masked: str | None = None
    currency: str = DEFAULT_CURRENCY
    version: int = 1
    quote_version: int = 0
    items: dict[str, ViewItem] = dataclasses.field(default_factory=dict)
    members: dict[str, ViewMember] = dataclasses.field(default_factory=dict)
    coupon_code: str | None = None
    discount_amount: Decimal = ZERO
    discount_currency: str | None = None
    tip_amount: Decimal = ZERO
    tip_currency: str = DEFAULT_CURRENCY
    subtotal: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total: Decimal = ZERO
    cash_on_delivery_portion: Decimal = ZERO
    deadline: datetime | None = None
    expires_at: datetime | None = None

    @property
    def host(self) -> ViewMember | None:
        return next((m for m in self.members.values() if m.role == MemberRole.HOST), None)

    def recalculate_totals(self) -> None:
        """``total = max(0, subtotal + tip - discount)``."""
        self.subtotal = sum((i.line_total for i in self.items.values()), ZERO)
        total = self.subtotal + self.tip_amount - self.discount_amount
        self.total = total if total > 0 else ZERO

    # ------------------------------------------------------------------
    # JSON document mapping
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "cartId": self.cart_id,
            "restaurantId": self.restaurant_id,
            "restaurantName": self.restaurant_name,
            "status": self.status.value,
            "shareTokenMasked": self.share_token_masked,
            "currency": self.currency,
            "version": self.version,
            "quoteVersion": self.quote_version,
            "couponCode": self.coupon_code,
            "discountAmount": str(self.discount_amount),
            "discountCurrency": self.discount_currency,
            "tipAmount": str(self.tip_amount),
            "tipCurrency": self.tip_currency,
            "subtotal": str(self.subtotal),
            "deliveryFee": str(self.delivery_fee),
            "taxAmount": str(self.tax_amount),
            "total": str(self.total),
            "cashOnDeliveryPortion": str(self.cash_on_delivery_portion),
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
            "members": [
                {
                    "userId": m.user_id,
                    "name": m.name,
                    "role": m.role.value,
                    "paymentStatus": m.payment_status.value,
                    "committedAmount": str(m.committed_amount),
                    "onlineTransactionId": m.online_transaction_id,
                    "quotedAmount": str(m.quoted_amount),
                }
                for m in self.members.values()
            ],
            "items": [
                {
                    "itemId": i.item_id,
                    "addedByUserId": i.added_by_user_id,
                    "name": i.name,
                    "quantity": i.quantity,
                    "basePrice": str(i.base_price),
                    "lineTotal": str(i.line_total),
                    "menuItemId": i.menu_item_id,
                    "imageUrl": i.image_url,
                    "customizations": [
                        {
                            "groupName": c.group_name,
                            "choiceName": c.choice_name,
                            "priceAdjustment": str(c.price_adjustment),
                        }
                        for c in i.customizations
                    ],
                }
                for i in self.items.values()
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CartView":
        members = [
            ViewMember(
                user_id=m["userId"],
                name=m.get("name", ""),
                role=MemberRole(m.get("role", MemberRole.GUEST)),
                payment_status=PaymentStatus(m.get("paymentStatus", PaymentStatus.PENDING)),
                committed_amount=Decimal(m.get("committedAmount", "0")),
                online_transaction_id=m.get("onlineTransactionId"),
                quoted_amount=Decimal(m.get("quotedAmount", "0")),
            )
            for m in data.get("members", [])
        ]
        items = [
            ViewItem(
                item_id=i["itemId"],
                added_by_user_id=i["addedByUserId"],
                name=i.get("name", ""),
                quantity=int(i["quantity"]),
                base_price=Decimal(i["basePrice"]),
                line_total=Decimal(i.get("lineTotal", "0")),
                menu_item_id=i.get("menuItemId"),
                image_url=i.get("imageUrl"),
                customizations=[
                    Customization(
                        group_name=c["groupName"],
                        choice_name=c["choiceName"],
                        price_adjustment=Decimal(c.get("priceAdjustment", "0")),
                    )
                    for c in i.get("customizations", [])
                ],
            )
            for i in data.get("items", [])
        ]
        deadline = data.get("deadline")
        expires_at = data.get("expiresAt")
        return cls(
            cart_id=data["cartId"],
            restaurant_id=data["restaurantId"],
            restaurant_name=data.get("restaurantName", ""),
            status=CartStatus(data.get("status", CartStatus.OPEN)),
            share_token_masked=data.get("shareTokenMasked"),
            currency=data.get("currency", DEFAULT_CURRENCY),
            version=int(data.get("version", 1)),
            quote_version=int(data.get("quoteVersion", 0)),
            coupon_code=data.get("couponCode"),
            discount_amount=Decimal(data.get("discountAmount", "0")),
            discount_currency=data.get("discountCurrency"),
            tip_amount=Decimal(data.get("tipAmount", "0")),
            tip_currency=data.get("tipCurrency", DEFAULT_CURRENCY),
            subtotal=Decimal(data.get("subtotal", "0")),
            delivery_fee=Decimal(data.get("deliveryFee", "0")),
            tax_amount=Decimal(data.get("taxAmount", "0")),
            total=Decimal(data.get("total", "0")),
            cash_on_delivery_portion=Decimal(data.get("cashOnDeliveryPortion", "0")),
            deadline=datetime.fromisoformat(deadline) if deadline else None,
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
            members={m.user_id: m for m in members},
            items={i.item_id: i for i in items},
        )


__all__ = [
    "CartStatus",
    "CartView",
    "Customization",
    "MemberRole",
    "PaymentStatus",
    "ViewItem",
    "ViewMember",
    "mask_share_token",
]
