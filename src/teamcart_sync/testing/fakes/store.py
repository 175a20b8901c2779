"""Testing fakes – InMemoryCartViewStore."""
from __future__ import annotations

import asyncio
from typing import Any

from teamcart_sync.teamcart.store import CartViewStore, Mutation
from teamcart_sync.teamcart.view import CartView


class InMemoryCartViewStore(CartViewStore):
    """Dict-backed view store.

    Documents are kept in their serialised form so callers never share
    mutable state with the store. ``writes`` records every committed
    ``(cart_id, update_type)``; set ``fail_with`` to make the next
    operations raise.
    """

    def __init__(self) -> None:
        self._docs: dict[str, dict[str, Any]] = {}
        self._tombstones: dict[str, int] = {}
        self._lock = asyncio.Lock()
        self.writes: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def seed(self, view: CartView) -> None:
        self._docs[view.cart_id] = view.to_dict()

    def peek(self, cart_id: str) -> CartView | None:
        doc = self._docs.get(cart_id)
        return CartView.from_dict(doc) if doc is not None else None

    async def get_vm(self, cart_id: str) -> CartView | None:
        self._check()
        return self.peek(cart_id)

    async def create_vm(self, view: CartView) -> bool:
        self._check()
        async with self._lock:
            if view.cart_id in self._docs:
                return False
            self._docs[view.cart_id] = view.to_dict()
            self.writes.append((view.cart_id, "created"))
            return True

    async def delete_vm(self, cart_id: str, *, tombstone_version: int | None = None) -> bool:
        self._check()
        async with self._lock:
            if tombstone_version is not None:
                self._tombstones[cart_id] = tombstone_version
            if self._docs.pop(cart_id, None) is None:
                return False
            self.writes.append((cart_id, "deleted"))
            return True

    async def deleted_version(self, cart_id: str) -> int | None:
        self._check()
        return self._tombstones.get(cart_id)

    async def _mutate(
        self,
        cart_id: str,
        mutation: Mutation,
        update_type: str,
        *,
        bump_version: bool = True,
    ) -> CartView | None:
        self._check()
        async with self._lock:
            doc = self._docs.get(cart_id)
            if doc is None:
                return None
            view = CartView.from_dict(doc)
            if mutation(view) is False:
                return view
            if bump_version:
                view.version += 1
            self._docs[cart_id] = view.to_dict()
            self.writes.append((cart_id, update_type))
            return view


__all__ = ["InMemoryCartViewStore"]
