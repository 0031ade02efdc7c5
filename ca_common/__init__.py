"""Shared helpers for grouped-code-actions."""

from ca_common.api import configure_logging

__all__ = ["configure_logging"]
