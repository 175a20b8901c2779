"""Testing fakes – recording realtime and push notifiers."""
from __future__ import annotations

import dataclasses
from typing import Any

from teamcart_sync.kernel.types import Err, Ok, Result
from teamcart_sync.teamcart.ports import (
    DeliveryMode,
    NotificationContext,
    NotificationTarget,
    PushNotifier,
    RealtimeNotifier,
)


class RecordingRealtimeNotifier(RealtimeNotifier):
    """Records ``(kind, cart_id, extra)`` for every signal."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.fail_with: Exception | None = None

    def count(self, kind: str | None = None) -> int:
        return sum(1 for c in self.calls if kind is None or c[0] == kind)

    async def _record(self, kind: str, cart_id: str, *extra: Any) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((kind, cart_id, extra))

    async def notify_cart_updated(self, cart_id: str) -> None:
        await self._record("cart_updated", cart_id)

    async def notify_locked(self, cart_id: str) -> None:
        await self._record("locked", cart_id)

    async def notify_ready_to_confirm(self, cart_id: str) -> None:
        await self._record("ready_to_confirm", cart_id)

    async def notify_converted(self, cart_id: str, order_id: str) -> None:
        await self._record("converted", cart_id, order_id)

    async def notify_expired(self, cart_id: str) -> None:
        await self._record("expired", cart_id)

    async def notify_payment_event(self, cart_id: str, user_id: str, event: str) -> None:
        await self._record("payment", cart_id, user_id, event)

    async def notify_coupon_suggestions(self, cart_id: str, suggestions: list[dict[str, Any]]) -> None:
        await self._record("coupon_suggestions", cart_id, suggestions)


@dataclasses.dataclass(frozen=True)
class PushCall:
    cart_id: str
    version: int
    target: NotificationTarget
    context: NotificationContext | None
    delivery: DeliveryMode


class RecordingPushNotifier(PushNotifier):
    """Records every push; returns ``Err(fail_with)`` when ``fail_with`` is set."""

    def __init__(self) -> None:
        self.calls: list[PushCall] = []
        self.fail_with: Exception | None = None

    async def push(
        self,
        cart_id: str,
        version: int,
        target: NotificationTarget = NotificationTarget.ALL,
        context: NotificationContext | None = None,
        delivery: DeliveryMode = DeliveryMode.HYBRID,
    ) -> Result[Any, Exception]:
        if self.fail_with is not None:
            return Err(self.fail_with)
        self.calls.append(PushCall(cart_id, version, target, context, delivery))
        return Ok(None)

    @property
    def last(self) -> PushCall:
        return self.calls[-1]


__all__ = ["PushCall", "RecordingPushNotifier", "RecordingRealtimeNotifier"]
