"""Colors, notice templates and border glyphs shared by the rich and prompt_toolkit views."""

from __future__ import annotations

from typing import Mapping

from rich import box

ACCENT = "blue"
ACCENT_BOLD = f"bold {ACCENT}"

NOTICE_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

# top-left, top-right, bottom-left, bottom-right, horizontal, vertical
SURFACE_BORDERS: dict[str, tuple[str, str, str, str, str, str]] = {
    "rounded": ("╭", "╮", "╰", "╯", "─", "│"),
    "single": ("┌", "┐", "└", "┘", "─", "│"),
}

TABLE_BOXES: dict[str, box.Box] = {
    "rounded": box.ROUNDED,
    "single": box.SQUARE,
    "none": box.SIMPLE,
}


def presenter_message(level: str, message: str) -> str:
    return NOTICE_TEMPLATES.get(level, "{message}").format(message=message)


def surface_border(style: str) -> tuple[str, str, str, str, str, str] | None:
    """Glyphs for a surface border style; ``None`` means borderless."""
    if style == "none":
        return None
    return SURFACE_BORDERS.get(style, SURFACE_BORDERS["rounded"])


def prompt_toolkit_picker_style() -> Mapping[str, str]:
    return {
        "selected": "bg:#0000aa fg:white bold",
        "separator": "fg:#0000aa",
        "frame.border": "fg:#0000aa",
        "frame.label": "fg:#0000aa bold",
        "search": "bg:#eeeeee fg:#000000",
        "number": "fg:#6c6c6c",
        "description": "italic fg:#808080",
    }


def prompt_toolkit_surface_style() -> Mapping[str, str]:
    return {
        "surface": "bg:#1c1c1c fg:#d0d0d0",
        "surface.border": "fg:#0000aa",
        "surface.number": "fg:#6c6c6c",
        "surface.cursorline": "bg:#0000aa fg:white bold",
        "editor": "fg:#808080",
        "editor.cursor": "reverse",
    }
