"""Money value object with ISO-4217 currency validation."""

from __future__ import annotations

import dataclasses
import re
from decimal import Decimal
from typing import Any, Final

from teamcart_sync.kernel.errors.domain import ValidationError

_ISO4217: Final = re.compile(r"^[A-Z]{3}$")

DEFAULT_CURRENCY: Final = "USD"


@dataclasses.dataclass(frozen=True, slots=True)
class Money:
    """Immutable monetary amount with explicit currency."""

    amount: Decimal
    currency: str  # ISO 4217

    def __post_init__(self) -> None:
        if not _ISO4217.match(self.currency):
            raise ValidationError(f"Invalid ISO 4217 currency code: {self.currency!r}")
        if self.amount < 0:
            raise ValidationError("Money amount must be non-negative")

    def __add__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def _assert_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Currency mismatch: {self.currency} vs {other.currency}"
            )

    @classmethod
    def of(cls, amount: "str | int | float | Decimal", currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal(str(amount)), currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal("0"), currency.upper())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Money":
        return cls.of(data["amount"], data["currency"])

    def to_dict(self) -> dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}


__all__ = ["DEFAULT_CURRENCY", "Money"]
