"""Team cart ports – read-only aggregate access and notification channels.

Snapshots are the minimal, immutable slices of the relational aggregate a
projection needs. Everything here is an interface; adapters and in-memory
fakes provide the implementations.
"""
from __future__ import annotations

import abc
import dataclasses
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from teamcart_sync.kernel.types import DEFAULT_CURRENCY, Money, Result
from teamcart_sync.teamcart.view import ZERO, CartStatus, Customization, MemberRole

# ---------------------------------------------------------------------------
# Aggregate snapshots
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class MemberSnapshot:
    user_id: str
    name: str
    role: MemberRole = MemberRole.GUEST


@dataclasses.dataclass(frozen=True)
class CartItemSnapshot:
    item_id: str
    added_by_user_id: str
    name: str
    quantity: int
    base_price: Decimal
    customizations: tuple[Customization, ...] = ()
    menu_item_id: str | None = None
    image_url: str | None = None

    @property
    def line_total(self) -> Decimal:
        unit = self.base_price + sum((c.price_adjustment for c in self.customizations), ZERO)
        return unit * self.quantity


@dataclasses.dataclass(frozen=True)
class CartSnapshot:
    cart_id: str
    restaurant_id: str
    host_user_id: str
    restaurant_name: str = ""
    status: CartStatus = CartStatus.OPEN
    share_token: str | None = None
    currency: str = DEFAULT_CURRENCY
    members: tuple[MemberSnapshot, ...] = ()
    items: tuple[CartItemSnapshot, ...] = ()
    deadline: datetime | None = None
    expires_at: datetime | None = None

    def member(self, user_id: str | None) -> MemberSnapshot | None:
        return next((m for m in self.members if m.user_id == user_id), None)

    def item(self, item_id: str) -> CartItemSnapshot | None:
        return next((i for i in self.items if i.item_id == item_id), None)


@dataclasses.dataclass(frozen=True)
class CouponSnapshot:
    coupon_id: str
    code: str
    description: str = ""


# ---------------------------------------------------------------------------
# Notification vocabulary
# ---------------------------------------------------------------------------


class NotificationTarget(StrEnum):
    ALL = "All"
    HOST = "Host"
    MEMBERS = "Members"  # everyone except the host
    SPECIFIC_USER = "SpecificUser"  # the actor only
    OTHERS = "Others"  # everyone except the actor


class DeliveryMode(StrEnum):
    HYBRID = "Hybrid"
    DATA_ONLY = "DataOnly"


@dataclasses.dataclass(frozen=True)
class NotificationContext:
    """Per-call description of what happened; never persisted."""

    event_type: str
    actor_user_id: str | None = None
    actor_name: str | None = None
    item_name: str | None = None
    quantity: int | None = None
    amount: Decimal | None = None
    currency: str | None = None
    order_id: str | None = None
    additional_info: str | None = None


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


class CartRepository(abc.ABC):
    """Read-only access to the relational aggregate store. Absence is not an error."""

    @abc.abstractmethod
    async def get_cart_by_id(self, cart_id: str) -> CartSnapshot | None: ...

    @abc.abstractmethod
    async def get_cart_with_items(self, cart_id: str) -> CartSnapshot | None: ...

    @abc.abstractmethod
    async def get_coupon_by_id(self, coupon_id: str) -> CouponSnapshot | None: ...


@runtime_checkable
class DiscountCalculator(Protocol):
    """Black-box pricing: the discount a coupon yields on a cart, if any."""

    def calculate(self, coupon: CouponSnapshot, cart: CartSnapshot) -> Money | None: ...


@runtime_checkable
class DeviceTokenRepository(Protocol):
    async def get_active_tokens(self, user_id: str) -> list[str]: ...


@runtime_checkable
class CouponSuggestionService(Protocol):
    async def suggest(self, cart: CartSnapshot) -> list[dict[str, Any]]: ...


class RealtimeNotifier(abc.ABC):
    """Port: fire-and-forget "this cart changed, re-fetch" signals.

    The richer calls let a transport enrich the payload; all of them are
    safe to repeat.
    """

    @abc.abstractmethod
    async def notify_cart_updated(self, cart_id: str) -> None: ...

    @abc.abstractmethod
    async def notify_locked(self, cart_id: str) -> None: ...

    @abc.abstractmethod
    async def notify_ready_to_confirm(self, cart_id: str) -> None: ...

    @abc.abstractmethod
    async def notify_converted(self, cart_id: str, order_id: str) -> None: ...

    @abc.abstractmethod
    async def notify_expired(self, cart_id: str) -> None: ...

    @abc.abstractmethod
    async def notify_payment_event(self, cart_id: str, user_id: str, event: str) -> None: ...

    @abc.abstractmethod
    async def notify_coupon_suggestions(self, cart_id: str, suggestions: list[dict[str, Any]]) -> None: ...


class PushNotifier(abc.ABC):
    """Port: mobile push fan-out for one cart."""

    @abc.abstractmethod
    async def push(
        self,
        cart_id: str,
        version: int,
        target: NotificationTarget = NotificationTarget.ALL,
        context: NotificationContext | None = None,
        delivery: DeliveryMode = DeliveryMode.HYBRID,
    ) -> Result[Any, Exception]:
        """Deliver a push for *cart_id*; failures come back as ``Err``."""


__all__ = [
    "CartItemSnapshot",
    "CartRepository",
    "CartSnapshot",
    "CouponSnapshot",
    "CouponSuggestionService",
    "DeliveryMode",
    "DeviceTokenRepository",
    "DiscountCalculator",
    "MemberSnapshot",
    "NotificationContext",
    "NotificationTarget",
    "PushNotifier",
    "RealtimeNotifier",
]
