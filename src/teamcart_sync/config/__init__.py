"""Configuration – dataclass settings loaded from the environment."""
from teamcart_sync.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    PipelineSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from teamcart_sync.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "PipelineSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
