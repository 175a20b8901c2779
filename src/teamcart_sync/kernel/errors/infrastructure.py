"""Infrastructure errors: I/O failures, external integrations.

Every error in this module is a *transient* failure from the pipeline's
point of view: it escapes the handler, the ledger entry stays unset and
the outbox redelivers the event.
"""

from __future__ import annotations

from typing import Any

from teamcart_sync.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to connect to an external resource (Redis, database, FCM)."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class SerializationError(InfrastructureError):
    """Failed to encode or decode a stored document / message payload."""

    default_code = "serialization_error"


class ConcurrencyConflictError(InfrastructureError):
    """Optimistic compare-and-set kept losing against concurrent writers."""

    default_code = "concurrency_conflict"

    def __init__(self, key: str, attempts: int, **kwargs: Any) -> None:
        super().__init__(
            f"Gave up updating '{key}' after {attempts} conflicting attempts",
            detail={"key": key, "attempts": attempts},
            **kwargs,
        )
        self.key = key
        self.attempts = attempts


class ExternalServiceError(InfrastructureError):
    """An external service returned an error response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' returned an error", **kwargs)
        self.service = service
        self.status_code = status_code


class PushDeliveryError(ExternalServiceError):
    """The push channel reported a failed delivery."""

    default_code = "push_delivery_failed"

    def __init__(self, cart_id: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            "push",
            f"Push delivery failed for cart '{cart_id}': {reason}",
            cart_id=cart_id,
            **kwargs,
        )
        self.reason = reason


__all__ = [
    "ConcurrencyConflictError",
    "ConnectionError",
    "ExternalServiceError",
    "InfrastructureError",
    "PushDeliveryError",
    "SerializationError",
]
