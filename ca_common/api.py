"""Public API surface for ca_common."""

from ca_common.config import parse_bool_env, parse_list_env
from ca_common.errors import (
    CAError,
    ConfigurationError,
    ProviderError,
    ResolveError,
    SessionBusyError,
    SurfaceError,
    error_to_payload,
    wrap_error,
)
from ca_common.logging import configure_logging, request_log_context

__all__ = [
    "configure_logging",
    "request_log_context",
    "parse_bool_env",
    "parse_list_env",
    "CAError",
    "ConfigurationError",
    "ProviderError",
    "ResolveError",
    "SessionBusyError",
    "SurfaceError",
    "error_to_payload",
    "wrap_error",
]
