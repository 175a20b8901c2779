"""Redis adapter – RedisRealtimeNotifier.

Publishes one JSON message per signal on ``{channel_prefix}:{cart_id}``.
Subscribers treat every message as "re-fetch the view"; the extra fields
only enrich it. Publish errors propagate so the event is retried.
"""
from __future__ import annotations

import json
from typing import Any

from teamcart_sync.observability.logging import get_logger
from teamcart_sync.teamcart.ports import RealtimeNotifier


class RedisRealtimeNotifier(RealtimeNotifier):
    def __init__(self, client: Any, *, channel_prefix: str = "teamcart", logger: Any = None) -> None:
        self._client = client
        self._channel_prefix = channel_prefix
        self._logger = logger or get_logger(__name__)

    def channel(self, cart_id: str) -> str:
        return f"{self._channel_prefix}:{cart_id}"

    async def _send(self, cart_id: str, kind: str, **fields: Any) -> None:
        payload = {"type": kind, "cartId": cart_id, **fields}
        receivers = await self._client.publish(self.channel(cart_id), json.dumps(payload, default=str))
        self._logger.debug("teamcart.realtime.published", cart_id=cart_id, type=kind, receivers=receivers)

    async def notify_cart_updated(self, cart_id: str) -> None:
        await self._send(cart_id, "updated")

    async def notify_locked(self, cart_id: str) -> None:
        await self._send(cart_id, "locked")

    async def notify_ready_to_confirm(self, cart_id: str) -> None:
        await self._send(cart_id, "ready_to_confirm")

    async def notify_converted(self, cart_id: str, order_id: str) -> None:
        await self._send(cart_id, "converted", orderId=order_id)

    async def notify_expired(self, cart_id: str) -> None:
        await self._send(cart_id, "expired")

    async def notify_payment_event(self, cart_id: str, user_id: str, event: str) -> None:
        await self._send(cart_id, "payment", userId=user_id, event=event)

    async def notify_coupon_suggestions(self, cart_id: str, suggestions: list[dict[str, Any]]) -> None:
        await self._send(cart_id, "coupon_suggestions", suggestions=suggestions)


__all__ = ["RedisRealtimeNotifier"]
