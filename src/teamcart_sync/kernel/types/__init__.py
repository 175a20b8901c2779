"""Kernel types – Result variants and Money."""
from teamcart_sync.kernel.types.money import DEFAULT_CURRENCY, Money
from teamcart_sync.kernel.types.result import Err, Ok, Result, Retryable

__all__ = ["DEFAULT_CURRENCY", "Err", "Money", "Ok", "Result", "Retryable"]
