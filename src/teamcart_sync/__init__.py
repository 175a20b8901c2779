"""
teamcart_sync – projection & notification pipeline for collaborative carts.

Import path convention::

    from teamcart_sync.teamcart.events import ItemAdded
    from teamcart_sync.application.inbox import EventDispatcher, idempotent
    from teamcart_sync.adapters.redis import RedisCartViewStore
    from teamcart_sync.testing.fakes import InMemoryCartViewStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
