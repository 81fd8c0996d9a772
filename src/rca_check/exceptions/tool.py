"""Errors raised around the external rust-code-analysis-cli process."""

from .base import RcaCheckError


class ToolError(RcaCheckError):
    """Base class for analysis tool errors."""

    pass


class ToolNotFoundError(ToolError):
    """Raised when the analysis executable cannot be located."""

    def __init__(self, executable: str):
        super().__init__(
            f"{executable} is not installed or not on PATH",
            details={"executable": executable},
        )
        self.executable = executable


class ToolFailedError(ToolError):
    """Raised after reporting when the analysis tool exited with a non-zero code."""

    def __init__(self, exit_code: int):
        super().__init__(f"rust-code-analysis-check had exited with the {exit_code} exit code")
        self.exit_code = exit_code
