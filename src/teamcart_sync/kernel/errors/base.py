"""Root error class for the teamcart-sync error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Besides the usual code/message/detail triple, every error can carry the
    ``cart_id`` and ``event_id`` it was raised for. Raise sites that know the
    cart pass it directly; the dispatcher fills in whatever is still unset
    through :meth:`bind_event` before logging, so a failure in a deeply
    nested adapter still reports which delivery it broke.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
        cart_id: str | None = None,
        event_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        self.cart_id = cart_id
        self.event_id = event_id
        if cause is not None:
            self.__cause__ = cause

    def bind_event(self, *, event_id: str, cart_id: str | None = None) -> BaseError:
        if self.event_id is None:
            self.event_id = event_id
        if self.cart_id is None:
            self.cart_id = cart_id
        return self

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, cart_id={self.cart_id!r})"

    def to_dict(self) -> dict[str, Any]:
        """Structured form used as the ``error`` field of log lines."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.cart_id is not None:
            payload["cart_id"] = self.cart_id
        if self.event_id is not None:
            payload["event_id"] = self.event_id
        if self.detail:
            payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
