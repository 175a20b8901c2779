"""CartViewStore – port for the per-cart projection document.

Backends implement five primitives (``get_vm``, ``create_vm``,
``delete_vm``, ``deleted_version`` and ``_mutate``); every targeted
operation below is built on ``_mutate`` so each one runs as a single
atomic read-modify-write.

Targeted operations return the document's new ``version``, or ``None``
when no document exists for the cart (a logged no-op, not an error).
Backend failures are raised.
"""
from __future__ import annotations

import abc
from decimal import Decimal
from typing import Any, Callable

from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart import mutations
from teamcart_sync.teamcart.view import CartStatus, CartView, ViewItem, ViewMember

#: Mutation callback: return ``False`` to abandon the write.
Mutation = Callable[[CartView], bool | None]


class CartViewStore(abc.ABC):
    """Port: low-latency key-value store holding one :class:`CartView` per cart."""

    @abc.abstractmethod
    async def get_vm(self, cart_id: str) -> CartView | None: ...

    @abc.abstractmethod
    async def create_vm(self, view: CartView) -> bool:
        """Store *view* unless a document already exists; return ``True`` if written."""

    @abc.abstractmethod
    async def delete_vm(self, cart_id: str, *, tombstone_version: int | None = None) -> bool:
        """Remove the document; return ``True`` if one existed.

        With *tombstone_version* the store first records that version so a
        redelivered terminal event can still read it through
        :meth:`deleted_version`.
        """

    @abc.abstractmethod
    async def deleted_version(self, cart_id: str) -> int | None:
        """Last version recorded by ``delete_vm``, or ``None`` once it has lapsed."""

    @abc.abstractmethod
    async def _mutate(
        self,
        cart_id: str,
        mutation: Mutation,
        update_type: str,
        *,
        bump_version: bool = True,
    ) -> CartView | None:
        """Atomically load, mutate and store the document for *cart_id*.

        Returns the stored view, or ``None`` when the document is missing.
        """

    async def _version_after(self, cart_id: str, update_type: str, apply: Callable[[CartView], Any]) -> int | None:
        def mutation(view: CartView) -> None:
            apply(view)

        view = await self._mutate(cart_id, mutation, update_type)
        return view.version if view is not None else None

    # ------------------------------------------------------------------
    # Targeted operations
    # ------------------------------------------------------------------

    async def add_member(self, cart_id: str, member: ViewMember) -> int | None:
        return await self._version_after(cart_id, "member_added", lambda v: mutations.add_member(v, member))

    async def add_item(self, cart_id: str, item: ViewItem) -> int | None:
        return await self._version_after(cart_id, "item_added", lambda v: mutations.add_item(v, item))

    async def remove_item(self, cart_id: str, item_id: str) -> int | None:
        return await self._version_after(cart_id, "item_removed", lambda v: mutations.remove_item(v, item_id))

    async def update_item_quantity(self, cart_id: str, item_id: str, quantity: int) -> int | None:
        return await self._version_after(
            cart_id, "item_quantity_updated", lambda v: mutations.update_item_quantity(v, item_id, quantity)
        )

    async def apply_coupon(self, cart_id: str, coupon_code: str, discount: Money) -> int | None:
        return await self._version_after(
            cart_id, "coupon_applied", lambda v: mutations.apply_coupon(v, coupon_code, discount)
        )

    async def remove_coupon(self, cart_id: str) -> int | None:
        return await self._version_after(cart_id, "coupon_removed", mutations.remove_coupon)

    async def apply_tip(self, cart_id: str, tip: Money) -> int | None:
        return await self._version_after(cart_id, "tip_applied", lambda v: mutations.apply_tip(v, tip))

    async def set_status(self, cart_id: str, status: CartStatus) -> int | None:
        return await self._version_after(
            cart_id, f"status_{status.value.lower()}", lambda v: mutations.set_status(v, status)
        )

    async def set_locked(self, cart_id: str) -> int | None:
        return await self._version_after(cart_id, "locked", lambda v: mutations.set_status(v, CartStatus.LOCKED))

    async def commit_cash_on_delivery(self, cart_id: str, user_id: str, amount: Money) -> int | None:
        return await self._version_after(
            cart_id, "payment_cod_committed", lambda v: mutations.commit_cash_on_delivery(v, user_id, amount)
        )

    async def record_online_payment(
        self, cart_id: str, user_id: str, amount: Money, transaction_id: str
    ) -> int | None:
        return await self._version_after(
            cart_id,
            "payment_online_succeeded",
            lambda v: mutations.record_online_payment(v, user_id, amount, transaction_id),
        )

    async def record_online_payment_failure(self, cart_id: str, user_id: str) -> int | None:
        return await self._version_after(
            cart_id, "payment_online_failed", lambda v: mutations.record_online_payment_failure(v, user_id)
        )

    async def update_quote(
        self,
        cart_id: str,
        quote_version: int,
        member_quotes: dict[str, Decimal],
        currency: str,
        **totals: Decimal | None,
    ) -> bool:
        """Ratchet ``quote_version``; ``version`` is left alone.

        Returns ``True`` only when the quote was strictly newer and stored.
        """
        applied = False

        def mutation(view: CartView) -> bool:
            nonlocal applied
            applied = mutations.update_quote(view, quote_version, member_quotes, currency, **totals)
            return applied

        await self._mutate(cart_id, mutation, "quote_updated", bump_version=False)
        return applied


__all__ = ["CartViewStore", "Mutation"]
