"""Application background – bounded best-effort task runner."""
from teamcart_sync.application.background.runner import BackgroundTaskRunner

__all__ = ["BackgroundTaskRunner"]
