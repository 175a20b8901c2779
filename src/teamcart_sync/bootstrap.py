"""Bootstrap – wire settings, adapters and handlers into a running pipeline."""
from __future__ import annotations

import dataclasses
from typing import Any

from teamcart_sync.adapters.fcm import FcmConfig, FcmPushSender, TeamCartPushNotifier
from teamcart_sync.adapters.redis import RedisCartViewStore, RedisRealtimeNotifier, create_redis_client
from teamcart_sync.adapters.sqlalchemy import (
    SqlAlchemyDedupLedger,
    SqlAlchemySessionFactory,
    create_ledger_schema,
)
from teamcart_sync.application.background import BackgroundTaskRunner
from teamcart_sync.application.inbox import EventDispatcher, HandlerRegistry
from teamcart_sync.application.outbox import OutboxDrainer
from teamcart_sync.config import PipelineSettings
from teamcart_sync.kernel.messaging import OutboxSource
from teamcart_sync.observability.logging import JsonLoggerFactory, get_logger
from teamcart_sync.teamcart.handlers import ProjectionDeps
from teamcart_sync.teamcart.ports import (
    CartRepository,
    CouponSuggestionService,
    DeviceTokenRepository,
    DiscountCalculator,
)
from teamcart_sync.teamcart.registry import build_projection_registry


@dataclasses.dataclass
class Pipeline:
    settings: PipelineSettings
    redis: Any
    sessions: SqlAlchemySessionFactory
    sender: FcmPushSender
    background: BackgroundTaskRunner
    registry: HandlerRegistry
    dispatcher: EventDispatcher
    logger: Any

    def drainer(self, source: OutboxSource) -> OutboxDrainer:
        return OutboxDrainer(
            source,
            self.dispatcher,
            concurrency=self.settings.worker_concurrency,
            batch_size=self.settings.drain_batch_size,
            logger=self.logger,
        )

    async def close(self) -> None:
        await self.background.drain()
        await self.sender.aclose()
        await self.redis.aclose()
        await self.sessions.dispose()


def configure_logging(settings: PipelineSettings) -> None:
    JsonLoggerFactory.configure(settings.log_level)


async def build_pipeline(
    settings: PipelineSettings,
    *,
    carts: CartRepository,
    device_tokens: DeviceTokenRepository,
    discounts: DiscountCalculator | None = None,
    suggestions: CouponSuggestionService | None = None,
    redis_client: Any = None,
    logger: Any = None,
) -> Pipeline:
    """Construct every adapter from *settings* and create the ledger table."""
    log = logger or get_logger("teamcart_sync")
    redis = redis_client if redis_client is not None else create_redis_client(settings.redis_url)
    sessions = SqlAlchemySessionFactory(settings.database_url)
    await create_ledger_schema(sessions.engine)

    store = RedisCartViewStore(
        redis,
        key_prefix=settings.key_prefix,
        ttl_seconds=settings.view_ttl_seconds,
        updates_channel=settings.updates_channel,
        max_attempts=settings.cas_max_attempts,
        logger=log,
    )
    sender = FcmPushSender(
        FcmConfig(server_key=settings.fcm_server_key, project_id=settings.fcm_project_id),
        logger=log,
    )
    background = BackgroundTaskRunner(settings.background_max_concurrent, logger=log)
    deps = ProjectionDeps(
        carts=carts,
        store=store,
        realtime=RedisRealtimeNotifier(redis, logger=log),
        push=TeamCartPushNotifier(store, carts, device_tokens, sender, logger=log),
        logger=log,
        discounts=discounts,
        suggestions=suggestions,
        background=background,
    )
    registry = build_projection_registry(deps, SqlAlchemyDedupLedger(sessions), log)
    return Pipeline(
        settings=settings,
        redis=redis,
        sessions=sessions,
        sender=sender,
        background=background,
        registry=registry,
        dispatcher=EventDispatcher(registry, log),
        logger=log,
    )


__all__ = ["Pipeline", "build_pipeline", "configure_logging"]
