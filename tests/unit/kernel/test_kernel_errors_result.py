"""Unit tests for the error hierarchy, Result variants and Money."""
from __future__ import annotations

import json
from decimal import Decimal

import pytest

from teamcart_sync.kernel.errors import (
    BaseError,
    ConcurrencyConflictError,
    ConflictError,
    DuplicateLedgerEntryError,
    ExternalServiceError,
    InfrastructureError,
    NotFoundError,
    PushDeliveryError,
    ValidationError,
)
from teamcart_sync.kernel.types import Err, Money, Ok, Retryable


class TestErrors:
    def test_default_code_and_json_str(self) -> None:
        err = NotFoundError("Cart", "cart-1")
        assert err.code == "not_found"
        assert err.message == "Cart 'cart-1' not found"
        assert json.loads(str(err))["code"] == "not_found"

    def test_duplicate_ledger_entry_is_conflict(self) -> None:
        err = DuplicateLedgerEntryError("evt-1", "handler")
        assert isinstance(err, ConflictError)
        assert err.detail == {"event_id": "evt-1", "handler_name": "handler"}

    def test_push_delivery_error_is_external_service_error(self) -> None:
        cause = RuntimeError("fcm down")
        err = PushDeliveryError("cart-1", "fcm down", cause=cause)
        assert isinstance(err, ExternalServiceError)
        assert isinstance(err, InfrastructureError)
        assert err.__cause__ is cause
        assert "cause" in err.to_dict()

    def test_bind_event_fills_only_missing_context(self) -> None:
        err = PushDeliveryError("cart-1", "fcm down")
        err.bind_event(event_id="evt-1", cart_id="cart-2")
        assert err.to_dict()["cart_id"] == "cart-1"
        assert err.to_dict()["event_id"] == "evt-1"
        bare = BaseError("boom")
        assert bare.to_dict() == {"code": "base_error", "message": "boom"}

    def test_concurrency_conflict_carries_attempts(self) -> None:
        err = ConcurrencyConflictError("yz:teamcart:vm:c:v1", 5)
        assert err.attempts == 5
        assert isinstance(err, BaseError)


class TestResult:
    def test_ok(self) -> None:
        r = Ok(3)
        assert r.is_ok() and not r.is_err() and not r.is_retryable()
        assert r.unwrap() == 3
        assert r.map(lambda v: v + 1) == Ok(4)

    def test_err_unwrap_raises(self) -> None:
        r = Err(ValueError("boom"))
        assert r.is_err() and not r.is_retryable()
        assert r.unwrap_or(7) == 7
        with pytest.raises(ValueError):
            r.unwrap()

    def test_retryable_is_err(self) -> None:
        r = Retryable(RuntimeError("again"))
        assert isinstance(r, Err)
        assert r.is_retryable()
        assert "Retryable" in repr(r)


class TestMoney:
    def test_of_normalises_currency(self) -> None:
        assert Money.of("5.00", "usd") == Money(Decimal("5.00"), "USD")

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValidationError):
            Money.of("-1")

    def test_rejects_bad_currency(self) -> None:
        with pytest.raises(ValidationError):
            Money(Decimal("1"), "dollars")

    def test_add_same_currency(self) -> None:
        assert Money.of(2) + Money.of(3) == Money.of(5)

    def test_add_mismatch(self) -> None:
        with pytest.raises(ValidationError):
            Money.of(1, "USD") + Money.of(1, "EUR")

    def test_dict_roundtrip(self) -> None:
        m = Money.of("12.50", "VND")
        assert Money.from_dict(m.to_dict()) == m
