"""Unit tests for the Redis cart view store and realtime notifier: no running Redis required."""
from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import WatchError

from teamcart_sync.adapters.redis import RedisCartViewStore, RedisRealtimeNotifier
from teamcart_sync.kernel.errors import ConcurrencyConflictError, SerializationError
from teamcart_sync.kernel.types import Money
from teamcart_sync.teamcart.view import CartView, MemberRole, ViewMember


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _doc(version: int = 1) -> bytes:
    view = CartView(
        cart_id="c1",
        restaurant_id="r1",
        version=version,
        members={"host-1": ViewMember("host-1", "Hana", MemberRole.HOST)},
    )
    return json.dumps(view.to_dict()).encode()


def _make_pipeline_mock(raw: bytes | None, execute: Any = None) -> MagicMock:
    pipe = MagicMock()
    pipe.watch = AsyncMock()
    pipe.unwatch = AsyncMock()
    pipe.get = AsyncMock(return_value=raw)
    pipe.multi = MagicMock()
    pipe.set = MagicMock()
    pipe.execute = AsyncMock(side_effect=execute) if execute is not None else AsyncMock(return_value=[True])
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=False)
    return pipe


def _make_store(pipe: MagicMock | None = None, **kwargs: Any) -> tuple[RedisCartViewStore, MagicMock]:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.expire = AsyncMock(return_value=True)
    client.publish = AsyncMock(return_value=1)
    client.pipeline = MagicMock(return_value=pipe or _make_pipeline_mock(_doc()))
    return RedisCartViewStore(client, jitter=(0, 0), **kwargs), client


def _written(pipe: MagicMock) -> dict[str, Any]:
    args, _ = pipe.set.call_args
    return json.loads(args[1])


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


class TestRedisCartViewStorePrimitives:
    def test_key_format(self) -> None:
        store, _ = _make_store()
        assert store.key("abc") == "yz:teamcart:vm:abc:v1"
        custom, _ = _make_store(key_prefix="dev")
        assert custom.key("abc") == "dev:teamcart:vm:abc:v1"

    def test_get_missing_returns_none(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            assert await store.get_vm("c1") is None
            client.expire.assert_not_awaited()

        asyncio.run(run())

    def test_get_slides_ttl(self) -> None:
        async def run() -> None:
            store, client = _make_store(ttl_seconds=600)
            client.get = AsyncMock(return_value=_doc(version=7))
            view = await store.get_vm("c1")
            assert view is not None and view.version == 7
            client.expire.assert_awaited_once_with("yz:teamcart:vm:c1:v1", 600)

        asyncio.run(run())

    def test_corrupt_document_raises(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.get = AsyncMock(return_value=b"{not json")
            with pytest.raises(SerializationError):
                await store.get_vm("c1")

        asyncio.run(run())

    def test_create_is_set_if_absent(self) -> None:
        async def run() -> None:
            store, client = _make_store(ttl_seconds=60)
            assert await store.create_vm(CartView(cart_id="c1", restaurant_id="r1")) is True
            args, kwargs = client.set.call_args
            assert args[0] == "yz:teamcart:vm:c1:v1"
            assert kwargs == {"ex": 60, "nx": True}
            client.publish.assert_awaited_once()

        asyncio.run(run())

    def test_create_existing_returns_false_and_stays_quiet(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.set = AsyncMock(return_value=None)
            assert await store.create_vm(CartView(cart_id="c1", restaurant_id="r1")) is False
            client.publish.assert_not_awaited()

        asyncio.run(run())

    def test_delete_publishes(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            assert await store.delete_vm("c1") is True
            channel, message = client.publish.call_args.args
            assert channel == "teamcart:updates"
            assert json.loads(message) == {"cartId": "c1", "type": "deleted"}

        asyncio.run(run())

    def test_delete_writes_tombstone_before_removing(self) -> None:
        async def run() -> None:
            store, client = _make_store(tombstone_ttl_seconds=120)
            assert await store.delete_vm("c1", tombstone_version=7) is True
            client.set.assert_awaited_once_with("yz:teamcart:vm:c1:v1:deleted", 7, ex=120)
            client.delete.assert_awaited_once_with("yz:teamcart:vm:c1:v1")

        asyncio.run(run())

    def test_deleted_version_reads_tombstone(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            assert await store.deleted_version("c1") is None
            client.get = AsyncMock(return_value=b"7")
            assert await store.deleted_version("c1") == 7
            client.get.assert_awaited_with("yz:teamcart:vm:c1:v1:deleted")

        asyncio.run(run())

    def test_corrupt_tombstone_raises(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.get = AsyncMock(return_value=b"seven")
            with pytest.raises(SerializationError):
                await store.deleted_version("c1")

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Compare-and-set
# ---------------------------------------------------------------------------


class TestRedisCartViewStoreCompareAndSet:
    def test_mutation_bumps_version_and_publishes(self) -> None:
        async def run() -> None:
            pipe = _make_pipeline_mock(_doc(version=3))
            store, client = _make_store(pipe, ttl_seconds=900)
            version = await store.apply_tip("c1", Money.of("2.00"))
            assert version == 4
            pipe.watch.assert_awaited_once_with("yz:teamcart:vm:c1:v1")
            pipe.multi.assert_called_once()
            assert pipe.set.call_args.kwargs == {"ex": 900}
            written = _written(pipe)
            assert written["version"] == 4
            assert written["tipAmount"] == "2.00"
            client.publish.assert_awaited_once_with(
                "teamcart:updates", json.dumps({"cartId": "c1", "type": "tip_applied"})
            )

        asyncio.run(run())

    def test_watch_conflict_is_retried(self) -> None:
        async def run() -> None:
            pipe = _make_pipeline_mock(_doc(version=1), execute=[WatchError(), [True]])
            store, _ = _make_store(pipe)
            assert await store.set_locked("c1") == 2
            assert pipe.execute.await_count == 2

        asyncio.run(run())

    def test_exhausted_retries_raise_conflict(self) -> None:
        async def run() -> None:
            pipe = _make_pipeline_mock(_doc(), execute=WatchError())
            store, client = _make_store(pipe, max_attempts=3)
            with pytest.raises(ConcurrencyConflictError) as info:
                await store.remove_coupon("c1")
            assert info.value.attempts == 3
            assert pipe.execute.await_count == 3
            client.publish.assert_not_awaited()

        asyncio.run(run())

    def test_missing_document_returns_none(self) -> None:
        async def run() -> None:
            pipe = _make_pipeline_mock(None)
            store, client = _make_store(pipe)
            assert await store.apply_tip("c1", Money.of("1")) is None
            pipe.unwatch.assert_awaited_once()
            pipe.execute.assert_not_awaited()
            client.publish.assert_not_awaited()

        asyncio.run(run())

    def test_stale_quote_is_not_written(self) -> None:
        async def run() -> None:
            view = CartView(cart_id="c1", restaurant_id="r1", quote_version=5)
            pipe = _make_pipeline_mock(json.dumps(view.to_dict()).encode())
            store, _ = _make_store(pipe)
            assert await store.update_quote("c1", 4, {}, "USD") is False
            pipe.execute.assert_not_awaited()

        asyncio.run(run())

    def test_newer_quote_keeps_version(self) -> None:
        async def run() -> None:
            pipe = _make_pipeline_mock(_doc(version=6))
            store, _ = _make_store(pipe)
            assert await store.update_quote("c1", 1, {}, "USD") is True
            written = _written(pipe)
            assert written["version"] == 6
            assert written["quoteVersion"] == 1

        asyncio.run(run())

    def test_publish_failure_is_swallowed(self) -> None:
        async def run() -> None:
            store, client = _make_store()
            client.publish = AsyncMock(side_effect=RedisConnectionError("down"))
            assert await store.set_locked("c1") == 2

        asyncio.run(run())


# ---------------------------------------------------------------------------
# Realtime notifier
# ---------------------------------------------------------------------------


class TestRedisRealtimeNotifier:
    def _notifier(self) -> tuple[RedisRealtimeNotifier, MagicMock]:
        client = MagicMock()
        client.publish = AsyncMock(return_value=2)
        return RedisRealtimeNotifier(client), client

    def _sent(self, client: MagicMock) -> tuple[str, dict[str, Any]]:
        channel, message = client.publish.call_args.args
        return channel, json.loads(message)

    def test_cart_updated(self) -> None:
        async def run() -> None:
            notifier, client = self._notifier()
            await notifier.notify_cart_updated("c1")
            assert self._sent(client) == ("teamcart:c1", {"type": "updated", "cartId": "c1"})

        asyncio.run(run())

    def test_converted_carries_order_id(self) -> None:
        async def run() -> None:
            notifier, client = self._notifier()
            await notifier.notify_converted("c1", "o-9")
            _, payload = self._sent(client)
            assert payload == {"type": "converted", "cartId": "c1", "orderId": "o-9"}

        asyncio.run(run())

    def test_payment_event(self) -> None:
        async def run() -> None:
            notifier, client = self._notifier()
            await notifier.notify_payment_event("c1", "u1", "online_failed")
            _, payload = self._sent(client)
            assert payload["type"] == "payment"
            assert payload["userId"] == "u1"
            assert payload["event"] == "online_failed"

        asyncio.run(run())

    def test_publish_errors_propagate(self) -> None:
        async def run() -> None:
            notifier, client = self._notifier()
            client.publish = AsyncMock(side_effect=RedisConnectionError("down"))
            with pytest.raises(RedisConnectionError):
                await notifier.notify_locked("c1")

        asyncio.run(run())
