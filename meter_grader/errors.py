"""
Exceptions raised by the grading pipeline.

Parsing problems are never raised; the parsers fall back to zero values.
A failing test suite is not an error either, it is the result being reported.
"""


class HarnessError(Exception):
    """Base class for fatal pipeline errors."""


class ReadinessTimeout(HarnessError):
    """
    The containers never reported healthy within the retry budget.

    Attributes:
        attempts: Number of not-ready polls observed.
    """

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Containers not ready after {attempts} attempts")


class InvocationFailure(HarnessError):
    """
    An external command could not be run or produced nothing usable.

    Attributes:
        command: The command line that failed.
        exit_code: Process exit code, or None if it never started.
        output: Whatever output was captured.
    """

    def __init__(self, command: str, reason: str, exit_code: int | None = None, output: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"Command failed: {command} ({reason})")
