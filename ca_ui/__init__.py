"""Presentation side of grouped code actions: menu, flows and CLI."""

from ca_ui.api import CodeActionGroupFlow, CodeActionsConfig, HeadlessUI, TUI, load_config

__all__ = ["CodeActionGroupFlow", "CodeActionsConfig", "HeadlessUI", "TUI", "load_config"]
