"""Tests for summary table rendering."""

from meter_grader.models import HarnessResult, TestRunSummary
from meter_grader.reporter import display_summary, format_summary, print_result_banner, summary_rows


def test_rows_are_fixed_and_ordered():
    """Five rows in a fixed order."""
    rows = summary_rows(TestRunSummary(tests_total=12, suites_total=3, passed=10, failed=2, duration_ms=543.21))

    assert [r["Metric"] for r in rows] == ["Tests", "Suites", "Pass", "Fail", "Duration (ms)"]
    assert [r["Value"] for r in rows] == [12, 3, 10, 2, "543.21"]


def test_duration_has_two_decimals():
    """Duration always shows exactly two decimal places."""
    assert summary_rows(TestRunSummary(duration_ms=7))[-1]["Value"] == "7.00"
    assert summary_rows(TestRunSummary(duration_ms=1.005))[-1]["Value"] in ("1.00", "1.01")
    assert summary_rows(TestRunSummary(duration_ms=12.3456))[-1]["Value"] == "12.35"


def test_format_summary_table():
    """The table has a header and one line per metric."""
    table = format_summary(TestRunSummary(tests_total=4, passed=4, duration_ms=99.5))
    lines = table.splitlines()

    assert len(lines) == 6
    assert "Metric" in lines[0] and "Value" in lines[0]
    assert "Duration (ms)" in lines[-1]
    assert "99.50" in lines[-1]


def test_display_summary_prints_title(capsys):
    """display_summary prints the title and the table."""
    display_summary(TestRunSummary(failed=1))
    out = capsys.readouterr().out

    assert out.startswith("Test Summary:\n")
    assert "Fail" in out
    assert "0.00" in out


def test_result_banner(capsys):
    """The banner reports whether everything passed."""
    result = HarnessResult(
        repository_url="https://github.com/alice/meter-api",
        username="alice",
        repository_name="meter-api",
        summary=TestRunSummary(tests_total=5, passed=5),
    )
    print_result_banner(result)
    out = capsys.readouterr().out

    assert "alice/meter-api" in out
    assert "Tests Passed: Yes (5/5)" in out
