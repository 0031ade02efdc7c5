"""Configuration helpers for ca_common."""

from .env import parse_bool_env, parse_list_env

__all__ = [
    "parse_bool_env",
    "parse_list_env",
]
