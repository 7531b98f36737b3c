"""
Console rendering of a test run summary.
"""

import pandas as pd

from .models import HarnessResult, TestRunSummary


def summary_rows(summary: TestRunSummary) -> list[dict[str, object]]:
    """
    Build the five table rows for a summary.

    Args:
        summary: Parsed test summary.

    Returns:
        List of {"Metric": ..., "Value": ...} rows.
    """
    return [
        {"Metric": "Tests", "Value": summary.tests_total},
        {"Metric": "Suites", "Value": summary.suites_total},
        {"Metric": "Pass", "Value": summary.passed},
        {"Metric": "Fail", "Value": summary.failed},
        {"Metric": "Duration (ms)", "Value": f"{summary.duration_ms:.2f}"},
    ]


def format_summary(summary: TestRunSummary) -> str:
    """
    Render a summary as a plain-text table.

    Args:
        summary: Parsed test summary.

    Returns:
        Table string with one row per metric.
    """
    df = pd.DataFrame(summary_rows(summary), columns=["Metric", "Value"])
    return df.to_string(index=False)


def display_summary(summary: TestRunSummary) -> None:
    """
    Print a summary table to the console.

    Args:
        summary: Parsed test summary.
    """
    print("Test Summary:")
    print(format_summary(summary))


def print_result_banner(result: HarnessResult) -> None:
    print(f"\n  {'='*50}")
    print(f"  Repository: {result.username}/{result.repository_name}")
    print(f"  Tests Passed: {'Yes' if result.all_passed else 'No'} ({result.summary.passed}/{result.summary.tests_total})")
    print(f"  {'='*50}\n")
