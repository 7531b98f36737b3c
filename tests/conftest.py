"""Shared fixtures for the harness test suite.

Provides:
- A scripted command runner that never spawns processes
- Sample `docker ps` and TAP outputs
"""

from pathlib import Path

import pytest

from meter_grader.commands import CommandRunner
from meter_grader.models import CommandResult

DOCKER_PS_HEADER = "CONTAINER ID   IMAGE          COMMAND                  CREATED          STATUS                    PORTS                  NAMES"
HEALTHY_ROW = "a1b2c3d4e5f6   mysvc-api      \"docker-entrypoint.s…\"   2 minutes ago    Up 2 minutes (healthy)    0.0.0.0:80->80/tcp     mysvc-api-1"
RUNNING_ROW = "f6e5d4c3b2a1   postgres:16    \"docker-entrypoint.s…\"   2 minutes ago    Up 2 minutes              5432/tcp               mysvc-db-1"
STARTING_ROW = "0a0b0c0d0e0f   mysvc-api      \"docker-entrypoint.s…\"   3 seconds ago    Created                                          mysvc-api-1"

TAP_OUTPUT = """TAP version 13
# Subtest: /upload
ok 1 - /upload
  ---
  duration_ms: 120.5
  ...
# tests 12
# suites 3
# pass 10
# fail 2
# cancelled 0
# skipped 0
# todo 0
# duration_ms 543.21
"""


class ScriptedRunner(CommandRunner):
    """Command runner that returns canned results and records every call."""

    def __init__(self, responses=None, default=None):
        super().__init__(verbose=False)
        self.responses = list(responses or [])
        self.default = default
        self.calls: list[tuple[object, Path | None]] = []

    def run(self, cmd, cwd=None):
        self.calls.append((cmd, cwd))
        command_line = cmd if isinstance(cmd, str) else " ".join(cmd)
        if self.responses:
            response = self.responses.pop(0)
        elif self.default is not None:
            response = self.default
        else:
            response = CommandResult(command=command_line)
        if isinstance(response, Exception):
            raise response
        return response.model_copy(update={"command": command_line})

    def commands(self) -> list[str]:
        return [c if isinstance(c, str) else " ".join(c) for c, _ in self.calls]


def docker_ps(*rows: str) -> str:
    return "\n".join([DOCKER_PS_HEADER, *rows]) + "\n"


@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested delays."""
    delays: list[float] = []

    def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
