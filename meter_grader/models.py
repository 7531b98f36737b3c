"""
Pydantic models for the Meter API Grader.

Defines structured data types for container status listings, test run
summaries, command results and persisted harness results.
"""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field

from .config import HEALTHY_MARKER, RUN_STATE_INDEX, RUNNING_PREFIX


class ServiceStatusLine(BaseModel):
    """
    One row of a `docker ps` listing.

    Attributes:
        name: Container name (NAMES column).
        state_fields: Status tokens split on runs of two or more spaces.
    """

    name: str = Field(..., description="Container name")
    state_fields: list[str] = Field(default_factory=list, description="Whitespace-delimited status tokens")

    @computed_field
    @property
    def run_state(self) -> str:
        """The STATUS column, or an empty string when the row is too short."""
        if len(self.state_fields) > RUN_STATE_INDEX:
            return self.state_fields[RUN_STATE_INDEX]
        return ""

    @computed_field
    @property
    def is_healthy(self) -> bool:
        status = self.run_state
        return bool(status) and (status.startswith(RUNNING_PREFIX) or HEALTHY_MARKER in status)


class ReadinessSnapshot(BaseModel):
    """
    Aggregate readiness of every container at one poll tick.

    Attributes:
        services: Parsed status rows, header excluded.
    """

    services: list[ServiceStatusLine] = Field(default_factory=list, description="Parsed status rows")

    @computed_field
    @property
    def all_healthy(self) -> bool:
        # An empty listing means nothing is up yet
        return bool(self.services) and all(s.is_healthy for s in self.services)

    @property
    def unhealthy_services(self) -> list[ServiceStatusLine]:
        return [s for s in self.services if not s.is_healthy]


class TestRunSummary(BaseModel):
    """
    Counters extracted from the TAP summary of a test run.

    `passed + failed` is not required to equal `tests_total`; the test
    reporter may count suites and cancelled tests differently.

    Attributes:
        tests_total: Number of tests executed.
        suites_total: Number of suites executed.
        passed: Number of passing tests.
        failed: Number of failing tests.
        duration_ms: Elapsed time reported by the runner.
    """

    __test__ = False

    tests_total: int = Field(default=0, ge=0, description="Tests executed")
    suites_total: int = Field(default=0, ge=0, description="Suites executed")
    passed: int = Field(default=0, ge=0, description="Passing tests")
    failed: int = Field(default=0, ge=0, description="Failing tests")
    duration_ms: float = Field(default=0.0, ge=0, description="Elapsed time in milliseconds")


class GitHubInfo(BaseModel):
    """
    Owner and repository name parsed from a GitHub URL.
    """

    username: str = Field(..., description="Repository owner")
    repository_name: str = Field(..., description="Repository name")


class CommandResult(BaseModel):
    """
    Captured result of an external command.

    Attributes:
        command: The command line that was run.
        stdout: Captured standard output.
        stderr: Captured standard error.
        exit_code: Process exit code.
    """

    command: str = Field(..., description="Executed command line")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    exit_code: int = Field(default=0, description="Process exit code")

    @property
    def output(self) -> str:
        return self.stdout + self.stderr

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class HarnessResult(BaseModel):
    """
    Final result of grading one repository.

    Attributes:
        repository_url: URL the repository was cloned from.
        username: Repository owner, also the local directory name.
        repository_name: Repository name.
        summary: Parsed test summary.
        test_exit_code: Exit code of the test command.
        timestamp: When the run finished.
    """

    repository_url: str = Field(..., description="Repository URL")
    username: str = Field(..., description="Repository owner")
    repository_name: str = Field(..., description="Repository name")
    summary: TestRunSummary = Field(default_factory=TestRunSummary, description="Parsed test summary")
    test_exit_code: int = Field(default=0, description="Exit code of the test command")
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat(), description="Completion time")

    @property
    def all_passed(self) -> bool:
        return self.summary.failed == 0 and self.test_exit_code == 0
