"""Config settings – base class, loaders, factory and pipeline settings."""
from teamcart_sync.config.settings.base import Settings
from teamcart_sync.config.settings.factory import SettingsFactory
from teamcart_sync.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from teamcart_sync.config.settings.pipeline import PipelineSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "PipelineSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
