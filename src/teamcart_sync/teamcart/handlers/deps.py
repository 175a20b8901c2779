"""Projection handler dependencies and the helpers every handler shares."""
from __future__ import annotations

import dataclasses
import re
from typing import TYPE_CHECKING, Any

from teamcart_sync.kernel.ddd import DomainEvent
from teamcart_sync.kernel.errors import PushDeliveryError
from teamcart_sync.teamcart.policy import push_rule_for
from teamcart_sync.teamcart.ports import (
    CartRepository,
    CouponSuggestionService,
    DiscountCalculator,
    NotificationContext,
    PushNotifier,
    RealtimeNotifier,
)
from teamcart_sync.teamcart.store import CartViewStore

if TYPE_CHECKING:
    from teamcart_sync.application.background import BackgroundTaskRunner

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


@dataclasses.dataclass
class ProjectionDeps:
    """Everything a projection handler may touch, passed explicitly."""

    carts: CartRepository
    store: CartViewStore
    realtime: RealtimeNotifier
    push: PushNotifier
    logger: Any
    discounts: DiscountCalculator | None = None
    suggestions: CouponSuggestionService | None = None
    background: BackgroundTaskRunner | None = None


def log_name(event: DomainEvent, suffix: str) -> str:
    """``ItemAdded`` + ``cart_missing`` -> ``teamcart.item_added.cart_missing``."""
    return f"teamcart.{_CAMEL.sub('_', event.event_type).lower()}.{suffix}"


def log_missing(deps: ProjectionDeps, event: Any, what: str = "cart", **extra: Any) -> None:
    deps.logger.warning(
        log_name(event, f"{what}_missing"),
        cart_id=event.cart_id,
        event_id=event.event_id,
        **extra,
    )


async def push_for(
    deps: ProjectionDeps,
    event: Any,
    version: int,
    context: NotificationContext | None = None,
) -> None:
    """Push according to the policy table; a failed delivery raises."""
    rule = push_rule_for(event.event_type)
    if rule is None:
        return
    kwargs: dict[str, Any] = {"target": rule.target, "context": context}
    if rule.delivery is not None:
        kwargs["delivery"] = rule.delivery
    result = await deps.push.push(event.cart_id, version, **kwargs)
    if result.is_err():
        deps.logger.error(
            log_name(event, "push_failed"),
            cart_id=event.cart_id,
            event_id=event.event_id,
            version=version,
            error=repr(result.error),
        )
        raise PushDeliveryError(event.cart_id, str(result.error), cause=result.error)


__all__ = ["ProjectionDeps", "log_missing", "log_name", "push_for"]
