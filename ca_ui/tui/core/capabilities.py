from __future__ import annotations

import os
import sys


def is_tty_available() -> bool:
    """Whether a full-screen prompt_toolkit menu can take over the terminal."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return False
    return os.environ.get("TERM", "") != "dumb"
