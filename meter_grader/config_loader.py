"""
Configuration loader for the Meter API Grader.

Handles parsing and validation of YAML configuration files.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .config import (
    DEFAULT_REPOSITORIES_DIR,
    DEFAULT_TESTS_DIR,
    ENV_TEMPLATE_FILENAME,
    INSTALL_COMMAND,
    MAX_POLL_ATTEMPTS,
    POLL_INTERVAL_SECONDS,
    SETTLE_DELAY_SECONDS,
    START_COMMAND,
    STATUS_COMMAND,
    TEST_COMMAND,
)


class HarnessConfig(BaseModel):
    """
    Configuration model for the harness.
    """
    repositories_dir: Path = Field(DEFAULT_REPOSITORIES_DIR, description="Where submissions are cloned")
    env_template_path: Optional[Path] = Field(Path(ENV_TEMPLATE_FILENAME), description="Environment file copied to each submission, null to skip")
    tests_dir: Path = Field(DEFAULT_TESTS_DIR, description="Directory the test command runs from")
    results_dir: Optional[Path] = Field(None, description="Path to save harness results")

    install_command: list[str] | str = Field(default_factory=lambda: list(INSTALL_COMMAND), description="Dependency install command")
    start_command: list[str] | str = Field(default_factory=lambda: list(START_COMMAND), description="Service start command")
    status_command: list[str] | str = Field(default_factory=lambda: list(STATUS_COMMAND), description="Container status command")
    test_command: list[str] | str = Field(TEST_COMMAND, description="Black-box test suite command")

    max_poll_attempts: int = Field(MAX_POLL_ATTEMPTS, ge=0, description="Not-ready polls before giving up")
    poll_interval_seconds: float = Field(POLL_INTERVAL_SECONDS, ge=0, description="Delay between polls")
    settle_delay_seconds: float = Field(SETTLE_DELAY_SECONDS, ge=0, description="Grace period after readiness")

    keep_git_dir: bool = Field(False, description="Keep .git in cloned submissions")
    verbose: bool = Field(False, description="Enable verbose output")


def load_config(config_path: Path) -> HarnessConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        HarnessConfig object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
        ValidationError: If config data is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        return HarnessConfig()

    # Resolve relative paths relative to the config file location
    config_dir = config_path.parent
    for path_field in ["repositories_dir", "env_template_path", "tests_dir", "results_dir"]:
        if path_field in config_data and config_data[path_field]:
            path = Path(config_data[path_field])
            if not path.is_absolute():
                config_data[path_field] = config_dir / path

    return HarnessConfig(**config_data)
