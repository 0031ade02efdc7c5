"""Environment variable parsing utilities."""

from __future__ import annotations


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_list_env(value: str | None) -> list[str] | None:
    """Parse a comma-separated list from an environment variable string.

    Example: "q, escape" -> ["q", "escape"]
    Returns None if value is None or holds no non-empty tokens.
    """
    if value is None:
        return None
    tokens = [token.strip() for token in value.split(",")]
    tokens = [token for token in tokens if token]
    return tokens or None
