"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    │       └── DuplicateLedgerEntryError
    ├── ApplicationError         (application.py)
    │   ├── HandlerNotRegisteredError
    │   └── BackgroundCapacityError
    └── InfrastructureError      (infrastructure.py)
        ├── ConnectionError
        ├── SerializationError
        ├── ConcurrencyConflictError
        └── ExternalServiceError
            └── PushDeliveryError
"""

from teamcart_sync.kernel.errors.application import (
    ApplicationError,
    BackgroundCapacityError,
    HandlerNotRegisteredError,
)
from teamcart_sync.kernel.errors.base import BaseError
from teamcart_sync.kernel.errors.domain import (
    ConflictError,
    DomainError,
    DuplicateLedgerEntryError,
    NotFoundError,
    ValidationError,
)
from teamcart_sync.kernel.errors.infrastructure import (
    ConcurrencyConflictError,
    ConnectionError,
    ExternalServiceError,
    InfrastructureError,
    PushDeliveryError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BackgroundCapacityError",
    "BaseError",
    "ConcurrencyConflictError",
    "ConflictError",
    "ConnectionError",
    "DomainError",
    "DuplicateLedgerEntryError",
    "ExternalServiceError",
    "HandlerNotRegisteredError",
    "InfrastructureError",
    "NotFoundError",
    "PushDeliveryError",
    "SerializationError",
    "ValidationError",
]
