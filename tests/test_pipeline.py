"""Tests for the end-to-end grading pipeline with scripted commands."""

import pytest

from meter_grader.config_loader import HarnessConfig
from meter_grader.errors import InvocationFailure, ReadinessTimeout
from meter_grader.models import CommandResult
from meter_grader.pipeline import run_harness_pipeline

from conftest import DOCKER_PS_HEADER, HEALTHY_ROW, STARTING_ROW, TAP_OUTPUT, ScriptedRunner, docker_ps

REPO_URL = "https://github.com/alice/meter-api"


@pytest.fixture
def config(tmp_path):
    """Config pointing at a repositories dir where alice is already cloned."""
    (tmp_path / "repositories" / "alice").mkdir(parents=True)
    return HarnessConfig(
        repositories_dir=tmp_path / "repositories",
        tests_dir=tmp_path,
        test_command="run-suite",
    )


def ok(stdout=""):
    return CommandResult(command="", stdout=stdout)


def test_full_run(config, no_sleep, capsys):
    """Start, poll until healthy, run tests and report."""
    runner = ScriptedRunner([
        ok(),
        ok(DOCKER_PS_HEADER),
        ok(docker_ps(HEALTHY_ROW)),
        CommandResult(command="", stdout=TAP_OUTPUT, exit_code=1),
    ])

    result = run_harness_pipeline(REPO_URL, config, runner=runner, sleep=no_sleep)

    assert runner.commands() == [
        "docker compose up -d --build",
        "docker ps",
        "docker ps",
        "run-suite",
    ]
    assert result.username == "alice"
    assert result.summary.passed == 10
    assert result.summary.failed == 2
    assert result.test_exit_code == 1
    assert result.all_passed is False
    assert no_sleep.delays == [2.0, 2.0, 5.0]

    out = capsys.readouterr().out
    assert "Test Summary:" in out
    assert "543.21" in out


def test_timeout_skips_tests(config, no_sleep):
    """The suite never runs against containers that are not ready."""
    runner = ScriptedRunner([ok()], default=ok(docker_ps(STARTING_ROW)))
    config.max_poll_attempts = 60

    with pytest.raises(ReadinessTimeout):
        run_harness_pipeline(REPO_URL, config, runner=runner, sleep=no_sleep)

    commands = runner.commands()
    assert commands.count("docker ps") == 61
    assert "run-suite" not in commands


def test_compose_failure_aborts(config, no_sleep):
    """A failing docker compose stops the run before polling."""
    runner = ScriptedRunner([CommandResult(command="", stderr="build failed", exit_code=1)])

    with pytest.raises(InvocationFailure):
        run_harness_pipeline(REPO_URL, config, runner=runner, sleep=no_sleep)

    assert runner.commands() == ["docker compose up -d --build"]
    assert no_sleep.delays == []


def test_invalid_url_runs_nothing(config, no_sleep):
    """An invalid URL fails before any command."""
    runner = ScriptedRunner()

    with pytest.raises(ValueError):
        run_harness_pipeline("https://github.com/alice", config, runner=runner, sleep=no_sleep)

    assert runner.calls == []


def test_results_saved_when_configured(config, tmp_path, no_sleep):
    """Results are written to the results directory."""
    config.results_dir = tmp_path / "results"
    runner = ScriptedRunner([
        ok(),
        ok(docker_ps(HEALTHY_ROW)),
        ok("# tests 1\n# pass 1\n"),
    ])

    result = run_harness_pipeline(REPO_URL, config, runner=runner, sleep=no_sleep)

    assert result.all_passed is True
    assert (tmp_path / "results" / "alice.json").exists()
    assert (tmp_path / "results" / "results_summary.csv").exists()
