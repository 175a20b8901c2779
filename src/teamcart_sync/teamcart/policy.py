"""Push policy – which events push, to whom, and how.

Events absent from :data:`PUSH_POLICY` never push. Quantity updates are
deliberately absent to avoid notification fatigue. A rule whose
``delivery`` is ``None`` leaves the notifier's default in place.
"""
from __future__ import annotations

import dataclasses
from typing import Final

from teamcart_sync.teamcart.ports import DeliveryMode, NotificationTarget


@dataclasses.dataclass(frozen=True)
class PushRule:
    target: NotificationTarget
    delivery: DeliveryMode | None = DeliveryMode.HYBRID


_ALL_HYBRID = PushRule(NotificationTarget.ALL, DeliveryMode.HYBRID)

PUSH_POLICY: Final[dict[str, PushRule]] = {
    "MemberJoined": _ALL_HYBRID,
    "ItemAdded": _ALL_HYBRID,
    "ItemRemoved": _ALL_HYBRID,
    "CouponApplied": _ALL_HYBRID,
    "CouponRemoved": _ALL_HYBRID,
    "TipApplied": _ALL_HYBRID,
    "CartLockedForPayment": PushRule(NotificationTarget.MEMBERS, DeliveryMode.HYBRID),
    "PricingFinalized": PushRule(NotificationTarget.ALL, DeliveryMode.DATA_ONLY),
    "OnlinePaymentFailed": PushRule(NotificationTarget.SPECIFIC_USER, DeliveryMode.HYBRID),
    "OnlinePaymentSucceeded": _ALL_HYBRID,
    "CartReadyForConfirmation": _ALL_HYBRID,
    "CartConverted": _ALL_HYBRID,
    "CartExpired": PushRule(NotificationTarget.ALL, None),
}


def push_rule_for(event_type: str) -> PushRule | None:
    return PUSH_POLICY.get(event_type)


__all__ = ["PUSH_POLICY", "PushRule", "push_rule_for"]
