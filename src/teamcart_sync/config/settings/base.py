"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from teamcart_sync.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base for settings read from ``{PREFIX}_{FIELD}`` environment keys.

    Subclasses set two class variables (neither becomes a dataclass field):
    ``_prefix`` namespaces the keys and ``_positive`` names the integer
    knobs that must be at least one. Cross-field checks go in
    :meth:`_validate`.
    """

    _prefix: ClassVar[str] = ""
    _positive: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def __post_init__(self) -> None:
        for name in self._positive:
            value = getattr(self, name)
            if value < 1:
                raise InvalidSettingValueError(name, value, "must be >= 1", env_key=self.env_key(name))
        self._validate()

    def _validate(self) -> None:
        pass


__all__ = ["Settings"]
