"""Config validation – error types."""
from teamcart_sync.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    SettingError,
)

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError", "SettingError"]
