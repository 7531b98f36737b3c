"""
The grading pipeline for a single repository.

ensure repository present -> start service -> wait for readiness
-> run test suite -> report -> save result

Steps run strictly in sequence. Any fatal error aborts the run without
cleaning up containers or cloned directories.
"""

import time
from typing import Callable

from .commands import CommandRunner
from .config_loader import HarnessConfig
from .models import HarnessResult
from .readiness import ReadinessPoller
from .reporter import display_summary, print_result_banner
from .repository import RepositoryManager, extract_github_info
from .results_aggregator import ResultsAggregator
from .test_invoker import TestRunInvoker


def run_harness_pipeline(
    repository_url: str,
    config: HarnessConfig,
    runner: CommandRunner | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> HarnessResult:
    """
    Run the complete validation pipeline against one repository.

    Args:
        repository_url: GitHub URL of the submission.
        config: Harness configuration.
        runner: Command runner shared by every step.
        sleep: Function used for polling and settle delays.

    Returns:
        HarnessResult with the parsed test summary.

    Raises:
        ValueError: If the repository URL is invalid.
        InvocationFailure: If an external command fails.
        ReadinessTimeout: If the containers never become healthy.
    """
    runner = runner or CommandRunner(verbose=config.verbose)

    info = extract_github_info(repository_url)
    print(f"Grading {info.username}/{info.repository_name}")

    repositories = RepositoryManager(
        runner=runner,
        repositories_dir=config.repositories_dir,
        env_template_path=config.env_template_path,
        install_command=config.install_command,
        start_command=config.start_command,
        keep_git_dir=config.keep_git_dir,
    )
    destination = repositories.ensure_present(repository_url, info)
    repositories.start_service(destination)

    poller = ReadinessPoller(
        status_check=lambda: runner.check(config.status_command).stdout,
        max_attempts=config.max_poll_attempts,
        poll_interval_seconds=config.poll_interval_seconds,
        settle_delay_seconds=config.settle_delay_seconds,
        sleep=sleep,
        verbose=config.verbose,
    )
    poller.wait_until_ready()

    print("Running tests...")
    invoker = TestRunInvoker(
        runner=runner,
        test_command=config.test_command,
        tests_dir=config.tests_dir,
    )
    summary = invoker.run()
    test_result = invoker.last_result

    if config.verbose and test_result is not None and test_result.output:
        print("  --- Test Log ---")
        for line in test_result.output.splitlines()[-20:]:
            print(f"  {line}")
        print("  ----------------")

    display_summary(summary)

    result = HarnessResult(
        repository_url=repository_url.strip(),
        username=info.username,
        repository_name=info.repository_name,
        summary=summary,
        test_exit_code=test_result.exit_code if test_result is not None else 0,
    )
    print_result_banner(result)

    if config.results_dir is not None:
        aggregator = ResultsAggregator(output_dir=config.results_dir)
        aggregator.add_result(result)
        output_files = aggregator.save_all()
        print(f"  Summary JSON: {output_files.get('summary_json')}")
        print(f"  Summary CSV:  {output_files.get('summary_csv')}")

    return result
