"""Config settings – PipelineSettings (``TEAMCART_*``)."""
from __future__ import annotations

import dataclasses

from teamcart_sync.config.settings.base import Settings
from teamcart_sync.config.validation import InvalidSettingValueError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclasses.dataclass
class PipelineSettings(Settings):
    """Connection strings and tuning knobs for the projection pipeline."""

    _prefix = "TEAMCART"
    _positive = (
        "view_ttl_minutes",
        "cas_max_attempts",
        "worker_concurrency",
        "drain_batch_size",
        "background_max_concurrent",
    )

    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "yz"
    view_ttl_minutes: int = 240
    updates_channel: str = "teamcart:updates"
    cas_max_attempts: int = 5
    database_url: str = "sqlite+aiosqlite:///./teamcart.db"
    fcm_project_id: str = ""
    fcm_server_key: str = ""
    worker_concurrency: int = 8
    drain_batch_size: int = 100
    background_max_concurrent: int = 4
    log_level: str = "INFO"

    def _validate(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise InvalidSettingValueError(
                "log_level", self.log_level, "unknown log level", env_key=self.env_key("log_level")
            )

    @property
    def view_ttl_seconds(self) -> int:
        return self.view_ttl_minutes * 60


__all__ = ["PipelineSettings"]
