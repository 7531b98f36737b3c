"""
Parsers for the raw text output of `docker ps` and of the test runner.

Both are pure functions. Malformed input never raises: rows that do not fit
are reported unhealthy and summary fields that are missing stay at zero.
"""

import re

from .config import COUNT_PATTERN, DURATION_PATTERN, STATUS_COLUMN_SEPARATOR
from .models import ReadinessSnapshot, ServiceStatusLine, TestRunSummary

_COLUMN_SPLIT = re.compile(STATUS_COLUMN_SEPARATOR)

# (marker, model field, converter), checked in this order for every line
_SUMMARY_MARKERS: list[tuple[str, str, type]] = [
    ("# tests", "tests_total", int),
    ("# suites", "suites_total", int),
    ("# pass", "passed", int),
    ("# fail", "failed", int),
    ("# duration_ms", "duration_ms", float),
]

_MARKER_PATTERNS: list[tuple[str, re.Pattern, str, type]] = [
    (
        marker,
        re.compile(re.escape(marker) + (DURATION_PATTERN if convert is float else COUNT_PATTERN)),
        field,
        convert,
    )
    for marker, field, convert in _SUMMARY_MARKERS
]


def parse_status_line(line: str) -> ServiceStatusLine:
    """
    Parse one data row of a `docker ps` listing.

    Columns are separated by two or more spaces so that single spaces inside
    a column ("Up 10 minutes (healthy)") stay in one token.

    Args:
        line: A non-blank data row.

    Returns:
        ServiceStatusLine for the row.
    """
    fields = [f for f in _COLUMN_SPLIT.split(line.strip()) if f]
    # NAMES is the last column; PORTS may be empty, so count from the end
    name = fields[-1] if fields else ""
    return ServiceStatusLine(name=name, state_fields=fields)


def extract_readiness(raw_status_output: str) -> ReadinessSnapshot:
    """
    Build a readiness snapshot from the full output of `docker ps`.

    The first line is the header and is discarded. Blank and whitespace-only
    lines are ignored. A listing with no data rows is not ready.

    Args:
        raw_status_output: Text printed by the status command.

    Returns:
        ReadinessSnapshot over every data row.
    """
    lines = (raw_status_output or "").splitlines()[1:]
    services = [parse_status_line(line) for line in lines if line.strip()]
    return ReadinessSnapshot(services=services)


def extract_test_summary(raw_test_output: str) -> TestRunSummary:
    """
    Extract the TAP summary counters from test runner output.

    Recognises lines starting with `# tests`, `# suites`, `# pass`, `# fail`
    and `# duration_ms` followed by a number. Markers may appear in any order
    and anywhere in the text; a repeated marker keeps the last value.

    Args:
        raw_test_output: Combined output of the test command.

    Returns:
        TestRunSummary with zero for every marker that was not found.
    """
    values: dict[str, int | float] = {}

    for line in (raw_test_output or "").splitlines():
        for marker, pattern, field, convert in _MARKER_PATTERNS:
            if not line.startswith(marker):
                continue
            match = pattern.match(line)
            if match:
                values[field] = convert(match.group(1))
            break

    return TestRunSummary(**values)
