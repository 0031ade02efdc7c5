"""Logging setup for the code action tools, routed through structlog."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog

from ca_common.config import parse_bool_env

# Full-screen menus own the terminal, so stderr stays quiet unless asked.
DEFAULT_LEVEL = logging.WARNING


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return DEFAULT_LEVEL
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value)
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LEVEL


def _read_logging_env() -> tuple[str | None, bool | None, str | None]:
    return (
        os.environ.get("CA_LOG_LEVEL"),
        parse_bool_env(os.environ.get("CA_LOG_JSON")),
        os.environ.get("CA_LOG_FILE"),
    )


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _make_formatter(as_json: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if as_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_pre_chain())


def _configure_structlog() -> None:
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Install one structlog-formatted handler on the root logger.

    Explicit arguments win over ``CA_LOG_LEVEL``, ``CA_LOG_JSON`` and
    ``CA_LOG_FILE``. Logs go to ``log_file`` when one is set, else stderr.
    Without ``force`` an already configured root logger keeps its handlers and
    only structlog is (re)configured.
    """
    env_level, env_json, env_log_file = _read_logging_env()
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        _configure_structlog()
        return

    target = env_log_file if log_file is None else log_file
    handler: logging.Handler = (
        logging.FileHandler(target) if target else logging.StreamHandler(sys.stderr)
    )
    handler.setFormatter(_make_formatter(env_json if json is None else bool(json)))

    if force:
        root_logger.handlers.clear()
    root_logger.setLevel(_resolve_level(level or env_level, debug))
    root_logger.addHandler(handler)
    _configure_structlog()


def request_log_context(**values: Any) -> AbstractContextManager[Any]:
    """Bind request fields (uri, generation, ...) to every record logged inside."""
    return structlog.contextvars.bound_contextvars(**values)
