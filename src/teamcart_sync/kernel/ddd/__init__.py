"""Kernel DDD – domain event base."""
from teamcart_sync.kernel.ddd.domain_event import DomainEvent

__all__ = ["DomainEvent"]
