"""Observability logging – structlog setup, redaction and logger access."""
from teamcart_sync.observability.logging.factory import JsonLoggerFactory
from teamcart_sync.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from teamcart_sync.observability.logging.processors import get_logger

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "JsonLoggerFactory", "SensitiveFieldsFilter", "get_logger"]
