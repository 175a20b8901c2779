"""Application-layer errors: dispatch and scheduling concerns."""

from __future__ import annotations

from teamcart_sync.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class HandlerNotRegisteredError(ApplicationError):
    """An outbox record names an event type nobody knows how to decode."""

    default_code = "handler_not_registered"


class BackgroundCapacityError(ApplicationError):
    """The best-effort task runner is saturated."""

    default_code = "background_capacity_exceeded"


__all__ = [
    "ApplicationError",
    "BackgroundCapacityError",
    "HandlerNotRegisteredError",
]
