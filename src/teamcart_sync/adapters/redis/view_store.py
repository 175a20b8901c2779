"""Redis adapter – RedisCartViewStore.

One JSON document per cart at ``{prefix}:teamcart:vm:{cart_id}:v1`` with a
sliding TTL. Deleting a document can leave a short-lived
``{key}:deleted`` tombstone holding its last version. Every mutation is a
WATCH/MULTI compare-and-set, retried with a short random backoff while
concurrent writers keep winning. After each commit a lightweight
``{"cartId", "type"}`` message goes out on the updates channel; that
publish is best-effort.
"""
from __future__ import annotations

import json
from typing import Any

import tenacity
from redis.exceptions import RedisError, WatchError

from teamcart_sync.kernel.errors import ConcurrencyConflictError, SerializationError
from teamcart_sync.observability.logging import get_logger
from teamcart_sync.teamcart.store import CartViewStore, Mutation
from teamcart_sync.teamcart.view import CartView


class RedisCartViewStore(CartViewStore):
    def __init__(
        self,
        client: Any,
        *,
        key_prefix: str = "yz",
        ttl_seconds: int = 240 * 60,
        tombstone_ttl_seconds: int = 24 * 60 * 60,
        updates_channel: str = "teamcart:updates",
        max_attempts: int = 5,
        jitter: tuple[float, float] = (0.005, 0.030),
        logger: Any = None,
    ) -> None:
        self._client = client
        self._key_prefix = key_prefix
        self._ttl = ttl_seconds
        self._tombstone_ttl = tombstone_ttl_seconds
        self._channel = updates_channel
        self._max_attempts = max_attempts
        self._jitter = jitter
        self._logger = logger or get_logger(__name__)

    def key(self, cart_id: str) -> str:
        return f"{self._key_prefix}:teamcart:vm:{cart_id}:v1"

    def tombstone_key(self, cart_id: str) -> str:
        return f"{self.key(cart_id)}:deleted"

    @staticmethod
    def _dumps(view: CartView) -> bytes:
        return json.dumps(view.to_dict(), separators=(",", ":")).encode()

    @staticmethod
    def _loads(raw: bytes | str, key: str) -> CartView:
        try:
            return CartView.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, ArithmeticError) as exc:
            raise SerializationError(f"Corrupt cart view at '{key}'", cause=exc) from exc

    async def _publish(self, cart_id: str, update_type: str) -> None:
        message = json.dumps({"cartId": cart_id, "type": update_type})
        try:
            await self._client.publish(self._channel, message)
        except RedisError as exc:
            self._logger.debug("teamcart.view.publish_failed", cart_id=cart_id, type=update_type, error=repr(exc))

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    async def get_vm(self, cart_id: str) -> CartView | None:
        key = self.key(cart_id)
        raw = await self._client.get(key)
        if raw is None:
            return None
        await self._client.expire(key, self._ttl)
        return self._loads(raw, key)

    async def create_vm(self, view: CartView) -> bool:
        created = await self._client.set(self.key(view.cart_id), self._dumps(view), ex=self._ttl, nx=True)
        if created:
            await self._publish(view.cart_id, "created")
        return bool(created)

    async def delete_vm(self, cart_id: str, *, tombstone_version: int | None = None) -> bool:
        if tombstone_version is not None:
            await self._client.set(self.tombstone_key(cart_id), tombstone_version, ex=self._tombstone_ttl)
        removed = await self._client.delete(self.key(cart_id))
        if removed:
            await self._publish(cart_id, "deleted")
        return bool(removed)

    async def deleted_version(self, cart_id: str) -> int | None:
        key = self.tombstone_key(cart_id)
        raw = await self._client.get(key)
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError as exc:
            raise SerializationError(f"Corrupt tombstone at '{key}'", cause=exc) from exc

    async def _mutate(
        self,
        cart_id: str,
        mutation: Mutation,
        update_type: str,
        *,
        bump_version: bool = True,
    ) -> CartView | None:
        key = self.key(cart_id)
        retrying = tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self._max_attempts),
            wait=tenacity.wait_random(*self._jitter),
            retry=tenacity.retry_if_exception_type(WatchError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    view, written = await self._compare_and_set(key, mutation, bump_version)
        except WatchError as exc:
            self._logger.error("teamcart.view.cas_exhausted", cart_id=cart_id, type=update_type)
            raise ConcurrencyConflictError(key, self._max_attempts, cart_id=cart_id, cause=exc) from exc

        if view is None:
            self._logger.warning("teamcart.view.missing", cart_id=cart_id, type=update_type)
            return None
        if written:
            await self._publish(cart_id, update_type)
        return view

    async def _compare_and_set(
        self, key: str, mutation: Mutation, bump_version: bool
    ) -> tuple[CartView | None, bool]:
        async with self._client.pipeline(transaction=True) as pipe:
            await pipe.watch(key)
            raw = await pipe.get(key)
            if raw is None:
                await pipe.unwatch()
                return None, False
            view = self._loads(raw, key)
            if mutation(view) is False:
                await pipe.unwatch()
                return view, False
            if bump_version:
                view.version += 1
            pipe.multi()
            pipe.set(key, self._dumps(view), ex=self._ttl)
            await pipe.execute()
            return view, True


__all__ = ["RedisCartViewStore"]
