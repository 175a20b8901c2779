"""Config validation errors."""
from teamcart_sync.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class SettingError(ConfigError):
    """A problem with one named setting; ``env_key`` is where it is read from."""
    default_code = "setting_error"

    def __init__(self, setting_name: str, message: str, *, env_key: str | None = None, **detail: object) -> None:
        super().__init__(message, detail={"setting": setting_name, "env_key": env_key or setting_name, **detail})
        self.setting_name = setting_name
        self.env_key = env_key or setting_name


class MissingRequiredSettingError(SettingError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_key: str | None = None) -> None:
        super().__init__(
            setting_name,
            f"Required setting '{setting_name}' is missing (set {env_key or setting_name})",
            env_key=env_key,
        )


class InvalidSettingValueError(SettingError):
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, *, env_key: str | None = None) -> None:
        super().__init__(
            setting_name,
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            env_key=env_key,
            reason=reason,
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError", "SettingError"]
