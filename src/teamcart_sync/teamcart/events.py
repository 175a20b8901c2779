"""Team cart domain events consumed by the projection pipeline.

Each class name is the event's type tag on the wire (``event_type``).
:func:`decode_event` / :func:`encode_event` translate between the typed
events and the JSON payloads stored in the outbox.
"""
from __future__ import annotations

import dataclasses
import json
import typing
from datetime import datetime
from decimal import Decimal
from typing import Any

from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.errors import HandlerNotRegisteredError, SerializationError
from teamcart_sync.kernel.types import Money


@dataclasses.dataclass(frozen=True)
class CartCreated(DomainEvent):
    cart_id: str
    host_user_id: str
    restaurant_id: str


@dataclasses.dataclass(frozen=True)
class MemberJoined(DomainEvent):
    cart_id: str
    user_id: str
    name: str


@dataclasses.dataclass(frozen=True)
class ItemAdded(DomainEvent):
    cart_id: str
    item_id: str
    user_id: str


@dataclasses.dataclass(frozen=True)
class ItemRemoved(DomainEvent):
    cart_id: str
    item_id: str
    user_id: str


@dataclasses.dataclass(frozen=True)
class ItemQuantityUpdated(DomainEvent):
    cart_id: str
    item_id: str
    user_id: str
    old_quantity: int
    new_quantity: int


@dataclasses.dataclass(frozen=True)
class CouponApplied(DomainEvent):
    cart_id: str
    coupon_id: str


@dataclasses.dataclass(frozen=True)
class CouponRemoved(DomainEvent):
    cart_id: str


@dataclasses.dataclass(frozen=True)
class TipApplied(DomainEvent):
    cart_id: str
    tip: Money


@dataclasses.dataclass(frozen=True)
class CartLockedForPayment(DomainEvent):
    cart_id: str
    host_user_id: str


@dataclasses.dataclass(frozen=True)
class PricingFinalized(DomainEvent):
    cart_id: str
    host_user_id: str


@dataclasses.dataclass(frozen=True)
class MemberCommittedToPayment(DomainEvent):
    """A member committed to paying their share as cash on delivery."""

    cart_id: str
    user_id: str
    amount: Money


@dataclasses.dataclass(frozen=True)
class OnlinePaymentSucceeded(DomainEvent):
    cart_id: str
    user_id: str
    transaction_id: str
    amount: Money


@dataclasses.dataclass(frozen=True)
class OnlinePaymentFailed(DomainEvent):
    cart_id: str
    user_id: str
    reason: str | None = None


@dataclasses.dataclass(frozen=True)
class CartReadyForConfirmation(DomainEvent):
    cart_id: str
    total: Money
    cash_amount: Money


@dataclasses.dataclass(frozen=True)
class CartConverted(DomainEvent):
    cart_id: str
    order_id: str
    host_user_id: str | None = None


@dataclasses.dataclass(frozen=True)
class CartExpired(DomainEvent):
    cart_id: str


@dataclasses.dataclass(frozen=True)
class QuoteUpdated(DomainEvent):
    """Pricing was recomputed; ``member_quotes`` maps user id to amount owed."""

    cart_id: str
    quote_version: int
    member_quotes: dict[str, Decimal]
    currency: str
    subtotal: Decimal | None = None
    delivery_fee: Decimal | None = None
    tax_amount: Decimal | None = None
    discount_amount: Decimal | None = None
    total: Decimal | None = None


EVENT_TYPES: dict[str, type[DomainEvent]] = {
    cls.__name__: cls
    for cls in (
        CartCreated,
        MemberJoined,
        ItemAdded,
        ItemRemoved,
        ItemQuantityUpdated,
        CouponApplied,
        CouponRemoved,
        TipApplied,
        CartLockedForPayment,
        PricingFinalized,
        MemberCommittedToPayment,
        OnlinePaymentSucceeded,
        OnlinePaymentFailed,
        CartReadyForConfirmation,
        CartConverted,
        CartExpired,
        QuoteUpdated,
    )
}


# ---------------------------------------------------------------------------
# Payload codec
# ---------------------------------------------------------------------------


def _coerce(value: Any, hint: Any) -> Any:
    if value is None:
        return None
    args = typing.get_args(hint)
    if type(None) in args:
        inner = [a for a in args if a is not type(None)]
        return _coerce(value, inner[0])
    if hint is Money:
        return value if isinstance(value, Money) else Money.from_dict(value)
    if hint is Decimal:
        return Decimal(str(value))
    if hint is datetime:
        return value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if hint is int:
        return int(value)
    if typing.get_origin(hint) is dict:
        _, value_hint = args
        return {str(k): _coerce(v, value_hint) for k, v in value.items()}
    return value


def _plain(value: Any) -> Any:
    if isinstance(value, Money):
        return value.to_dict()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def decode_event(event_type: str, payload: bytes | str | dict[str, Any], *, event_id: str | None = None) -> DomainEvent:
    """Build a typed event from an outbox payload.

    *event_id*, when given, wins over any id embedded in the payload so the
    outbox record id stays the deduplication key.
    """
    cls = EVENT_TYPES.get(event_type)
    if cls is None:
        raise HandlerNotRegisteredError(f"Unknown event type '{event_type}'")
    try:
        data = payload if isinstance(payload, dict) else json.loads(payload)
        hints = typing.get_type_hints(cls)
        kwargs = {
            f.name: _coerce(data[f.name], hints[f.name])
            for f in dataclasses.fields(cls)
            if f.name in data
        }
        if event_id is not None:
            kwargs["event_id"] = event_id
        return cls(**kwargs)
    except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
        raise SerializationError(f"Cannot decode {event_type} payload: {exc}", cause=exc) from exc


def encode_event(event: DomainEvent) -> bytes:
    """Serialise *event* to the JSON payload :func:`decode_event` accepts."""
    data = {f.name: _plain(getattr(event, f.name)) for f in dataclasses.fields(event)}
    return json.dumps(data, separators=(",", ":")).encode()


__all__ = [
    "EVENT_TYPES",
    "CartConverted",
    "CartCreated",
    "CartExpired",
    "CartLockedForPayment",
    "CartReadyForConfirmation",
    "CouponApplied",
    "CouponRemoved",
    "ItemAdded",
    "ItemQuantityUpdated",
    "ItemRemoved",
    "MemberCommittedToPayment",
    "MemberJoined",
    "OnlinePaymentFailed",
    "OnlinePaymentSucceeded",
    "PricingFinalized",
    "QuoteUpdated",
    "TipApplied",
    "decode_event",
    "encode_event",
]
