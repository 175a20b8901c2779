"""FCM adapter – TeamCartPushNotifier.

Resolves the audience from the cart view (falling back to the aggregate
once a terminal event has deleted the view), collects device tokens,
composes a contextual message and hands it to :class:`FcmPushSender`.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from teamcart_sync.adapters.fcm.messages import build_data_payload, compose_message
from teamcart_sync.adapters.fcm.sender import FcmPushSender
from teamcart_sync.kernel.types import Ok, Result
from teamcart_sync.observability.logging import get_logger
from teamcart_sync.teamcart.ports import (
    CartRepository,
    DeliveryMode,
    DeviceTokenRepository,
    NotificationContext,
    NotificationTarget,
    PushNotifier,
)
from teamcart_sync.teamcart.store import CartViewStore
from teamcart_sync.teamcart.view import MemberRole

SEED_TOKEN_PREFIX = "seedToken"


@dataclasses.dataclass(frozen=True)
class Audience:
    state: str
    host_user_id: str | None
    names: dict[str, str]

    def user_ids(self, target: NotificationTarget, actor_user_id: str | None) -> list[str]:
        everyone = list(self.names)
        match target:
            case NotificationTarget.HOST:
                return [self.host_user_id] if self.host_user_id else []
            case NotificationTarget.MEMBERS:
                return [u for u in everyone if u != self.host_user_id]
            case NotificationTarget.SPECIFIC_USER:
                return [actor_user_id] if actor_user_id else []
            case NotificationTarget.OTHERS:
                return [u for u in everyone if u != actor_user_id]
            case _:
                return everyone


class TeamCartPushNotifier(PushNotifier):
    def __init__(
        self,
        store: CartViewStore,
        carts: CartRepository,
        tokens: DeviceTokenRepository,
        sender: FcmPushSender,
        logger: Any = None,
    ) -> None:
        self._store = store
        self._carts = carts
        self._tokens = tokens
        self._sender = sender
        self._logger = logger or get_logger(__name__)

    async def _audience(self, cart_id: str) -> Audience | None:
        view = await self._store.get_vm(cart_id)
        if view is not None:
            host = view.host
            return Audience(
                state=view.status.value,
                host_user_id=host.user_id if host else None,
                names={m.user_id: m.name for m in view.members.values()},
            )
        cart = await self._carts.get_cart_by_id(cart_id)
        if cart is None:
            return None
        return Audience(
            state=cart.status.value,
            host_user_id=next((m.user_id for m in cart.members if m.role == MemberRole.HOST), cart.host_user_id),
            names={m.user_id: m.name for m in cart.members},
        )

    async def _collect_tokens(self, user_ids: list[str]) -> list[str]:
        tokens: dict[str, None] = {}
        for user_id in user_ids:
            for token in await self._tokens.get_active_tokens(user_id):
                tokens.setdefault(token, None)
        return [t for t in tokens if not t.startswith(SEED_TOKEN_PREFIX)]

    async def push(
        self,
        cart_id: str,
        version: int,
        target: NotificationTarget = NotificationTarget.ALL,
        context: NotificationContext | None = None,
        delivery: DeliveryMode = DeliveryMode.HYBRID,
    ) -> Result[Any, Exception]:
        audience = await self._audience(cart_id)
        if audience is None:
            self._logger.warning("teamcart.push.cart_missing", cart_id=cart_id)
            return Ok(0)

        actor_id = context.actor_user_id if context else None
        user_ids = audience.user_ids(target, actor_id)
        if not user_ids:
            self._logger.debug("teamcart.push.no_recipients", cart_id=cart_id, target=target.value)
            return Ok(0)
        tokens = await self._collect_tokens(user_ids)
        if not tokens:
            self._logger.debug("teamcart.push.no_tokens", cart_id=cart_id, target=target.value)
            return Ok(0)

        if context is not None and context.actor_name is None and actor_id in audience.names:
            context = dataclasses.replace(context, actor_name=audience.names[actor_id])
        title, body = compose_message(audience.state, target, context)
        data = build_data_payload(cart_id, version, audience.state, context, title, body)

        if delivery == DeliveryMode.DATA_ONLY:
            result = await self._sender.send_multicast_data(tokens, data)
        else:
            result = await self._sender.send_multicast_notification(tokens, title, body, data)

        if result.is_err():
            self._logger.error(
                "teamcart.push.failed",
                cart_id=cart_id,
                delivery=delivery.value,
                error=repr(result.error),
            )
            return result
        self._logger.info(
            "teamcart.push.sent",
            cart_id=cart_id,
            token_count=len(tokens),
            target=target.value,
            delivery=delivery.value,
            event_type=context.event_type if context else None,
            version=version,
        )
        return Ok(len(tokens))


__all__ = ["Audience", "SEED_TOKEN_PREFIX", "TeamCartPushNotifier"]
