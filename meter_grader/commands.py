"""
Thin wrapper around subprocess for the external commands the harness runs.

Every command blocks until it finishes; no timeout is applied.
"""

import shlex
import subprocess
from pathlib import Path

from .errors import InvocationFailure
from .models import CommandResult


class CommandRunner:
    """
    Runs external commands and captures their output.

    List commands are executed directly; string commands go through the
    shell so globs such as `./__tests__/*.test.ts` are expanded.
    """

    def __init__(self, verbose: bool = False) -> None:
        """
        Initialize the command runner.

        Args:
            verbose: Echo each command before running it.
        """
        self.verbose = verbose

    def run(self, cmd: list[str] | str, cwd: Path | None = None) -> CommandResult:
        """
        Run a command and capture stdout and stderr.

        A non-zero exit status is returned, not raised.

        Args:
            cmd: Argument list, or a shell command line.
            cwd: Working directory.

        Returns:
            CommandResult with captured output and exit code.

        Raises:
            InvocationFailure: If the command could not be started.
        """
        command_line = cmd if isinstance(cmd, str) else shlex.join(cmd)
        if self.verbose:
            print(f"  Executing: {command_line}")

        try:
            process = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                shell=isinstance(cmd, str),
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise InvocationFailure(command_line, str(e)) from e

        return CommandResult(
            command=command_line,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
            exit_code=process.returncode,
        )

    def check(self, cmd: list[str] | str, cwd: Path | None = None) -> CommandResult:
        """
        Run a command that must succeed.

        Raises:
            InvocationFailure: If the command could not be started or exited non-zero.
        """
        result = self.run(cmd, cwd=cwd)
        if not result.succeeded:
            raise InvocationFailure(
                result.command,
                f"exit code {result.exit_code}: {result.stderr.strip() or result.stdout.strip()}",
                exit_code=result.exit_code,
                output=result.output,
            )
        return result
