"""Dependency wiring for the code action CLI."""

from ca_ui.wiring.dependencies import UIContext

__all__ = ["UIContext"]
