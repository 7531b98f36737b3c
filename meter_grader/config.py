"""
Configuration constants for the Meter API Grader.
"""

from pathlib import Path


# Readiness polling
MAX_POLL_ATTEMPTS: int = 60
POLL_INTERVAL_SECONDS: float = 2.0
SETTLE_DELAY_SECONDS: float = 5.0

# `docker ps` columns: CONTAINER ID, IMAGE, COMMAND, CREATED, STATUS, PORTS, NAMES
STATUS_COLUMN_SEPARATOR: str = r"\s{2,}"
RUN_STATE_INDEX: int = 4
RUNNING_PREFIX: str = "Up"
HEALTHY_MARKER: str = "healthy"

# External commands
CLONE_COMMAND: list[str] = ["git", "clone"]
INSTALL_COMMAND: list[str] = ["npm", "install"]
START_COMMAND: list[str] = ["docker", "compose", "up", "-d", "--build"]
STATUS_COMMAND: list[str] = ["docker", "ps"]
# Run through the shell so the glob expands
TEST_COMMAND: str = "tsx --test ./__tests__/*.test.ts"
# /bin/sh: 126 found but not executable, 127 not found
SHELL_LAUNCH_FAILURE_CODES: tuple[int, ...] = (126, 127)

# File names
CONFIG_FILENAME: str = "harness_config.yml"
ENV_TEMPLATE_FILENAME: str = ".env.exemple"
ENV_FILENAME: str = ".env"
GIT_DIRNAME: str = ".git"
RESULTS_SUMMARY_FILENAME: str = "results_summary.json"
RESULTS_CSV_FILENAME: str = "results_summary.csv"

# Default paths (can be overridden via config file)
DEFAULT_REPOSITORIES_DIR: Path = Path("repositories")
DEFAULT_TESTS_DIR: Path = Path(".")

# TAP summary markers, e.g. "# tests 12" or "# duration_ms 543.21"
COUNT_PATTERN: str = r"\s*(\d+)"
DURATION_PATTERN: str = r"\s*(\d+(?:\.\d+)?)"
