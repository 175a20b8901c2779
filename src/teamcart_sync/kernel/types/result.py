"""Result[T, E]: Ok, Err and Retryable variants.

``Retryable`` is an ``Err`` that additionally tells the caller to redeliver
the work later; the retry decision is read through :meth:`is_retryable`
rather than by catching exceptions.
"""

from __future__ import annotations

from typing import Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T = None) -> None:  # type: ignore[assignment]
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def is_retryable(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], T]) -> "Ok[T]":
        return Ok(func(self._value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("Ok", self._value))

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Error result variant."""

    __slots__ = ("_error",)

    def __init__(self, error: E) -> None:
        self._error = error

    @property
    def error(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def is_retryable(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self._error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[T], T]) -> "Err[E]":  # noqa: ARG002
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._error!r})"


class Retryable(Err[E]):
    """Failure that must be redelivered; the unit of work was not recorded."""

    __slots__ = ()

    def is_retryable(self) -> bool:
        return True


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result", "Retryable"]
