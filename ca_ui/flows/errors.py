from __future__ import annotations


class UIFlowError(RuntimeError):
    """Code action flow failure that the CLI turns into an exit code."""

    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code
