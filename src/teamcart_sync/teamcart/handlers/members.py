"""Membership projection."""
from __future__ import annotations

from teamcart_sync.teamcart.events import MemberJoined
from teamcart_sync.teamcart.handlers.deps import ProjectionDeps, log_missing, push_for
from teamcart_sync.teamcart.ports import NotificationContext
from teamcart_sync.teamcart.view import MemberRole, ViewMember


async def on_member_joined(event: MemberJoined, deps: ProjectionDeps) -> None:
    member = ViewMember(user_id=event.user_id, name=event.name, role=MemberRole.GUEST)
    version = await deps.store.add_member(event.cart_id, member)
    if version is None:
        log_missing(deps, event)
        return
    await deps.realtime.notify_cart_updated(event.cart_id)
    await push_for(
        deps,
        event,
        version,
        NotificationContext(
            event_type=event.event_type,
            actor_user_id=event.user_id,
            actor_name=event.name,
        ),
    )


__all__ = ["on_member_joined"]
