"""Redis adapters – cart view store and realtime notifier."""
from teamcart_sync.adapters.redis.client import create_redis_client
from teamcart_sync.adapters.redis.realtime import RedisRealtimeNotifier
from teamcart_sync.adapters.redis.view_store import RedisCartViewStore

__all__ = ["RedisCartViewStore", "RedisRealtimeNotifier", "create_redis_client"]
