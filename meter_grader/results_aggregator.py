"""
Results aggregator for persisting harness runs.

Saves one JSON file per graded repository and keeps JSON and CSV summaries
of every run in the results folder.
"""

import csv
import json
from datetime import datetime
from pathlib import Path

from .config import RESULTS_CSV_FILENAME, RESULTS_SUMMARY_FILENAME
from .models import HarnessResult


class ResultsAggregator:
    """
    Collects harness results and exports them to the results directory.
    """

    def __init__(self, output_dir: Path) -> None:
        """
        Initialize the results aggregator.

        Existing results in the summary file are loaded so that repeated
        runs accumulate rather than overwrite each other.

        Args:
            output_dir: Directory to save results in.
        """
        self.output_dir = output_dir
        self.results: list[HarnessResult] = load_results_from_dir(output_dir)
        self.timestamp = datetime.now().isoformat()

    def add_result(self, result: HarnessResult) -> None:
        """
        Add a result, replacing any earlier run of the same repository owner.

        Args:
            result: HarnessResult to add.
        """
        self.results = [r for r in self.results if r.username != result.username]
        self.results.append(result)

    def save_all(self) -> dict[str, Path]:
        """
        Save all results to the output directory.

        Creates:
        - Individual JSON files per repository owner
        - Summary JSON with all results
        - Summary CSV

        Returns:
            Dictionary of output file paths.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        output_files: dict[str, Path] = {}

        self.results.sort(key=lambda x: x.username)

        for result in self.results:
            individual_path = self.output_dir / f"{result.username}.json"
            with open(individual_path, "w", encoding="utf-8") as f:
                f.write(result.model_dump_json(indent=2))
            output_files[result.username] = individual_path

        summary_path = self.output_dir / RESULTS_SUMMARY_FILENAME
        summary_data = {
            "timestamp": self.timestamp,
            "total_repositories": len(self.results),
            "statistics": self._calculate_statistics(),
            "results": [result.model_dump() for result in self.results],
        }
        with open(summary_path, "w", encoding="utf-8") as f:
            json.dump(summary_data, f, indent=2)
        output_files["summary_json"] = summary_path

        csv_path = self.output_dir / RESULTS_CSV_FILENAME
        self._save_csv(csv_path)
        output_files["summary_csv"] = csv_path

        return output_files

    def _calculate_statistics(self) -> dict:
        if not self.results:
            return {}

        fully_passing = sum(1 for r in self.results if r.all_passed)
        return {
            "fully_passing_count": fully_passing,
            "fully_passing_percent": (fully_passing / len(self.results)) * 100,
            "average_passed": sum(r.summary.passed for r in self.results) / len(self.results),
            "average_failed": sum(r.summary.failed for r in self.results) / len(self.results),
        }

    def _save_csv(self, csv_path: Path) -> None:
        """
        Save results as CSV file.

        Args:
            csv_path: Path to save CSV file.
        """
        header = [
            "username",
            "repository_name",
            "repository_url",
            "tests",
            "suites",
            "pass",
            "fail",
            "duration_ms",
            "all_passed",
            "timestamp",
        ]

        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(header)

            for result in self.results:
                summary = result.summary
                writer.writerow([
                    result.username,
                    result.repository_name,
                    result.repository_url,
                    summary.tests_total,
                    summary.suites_total,
                    summary.passed,
                    summary.failed,
                    f"{summary.duration_ms:.2f}",
                    "Yes" if result.all_passed else "No",
                    result.timestamp,
                ])


def load_results_from_dir(results_dir: Path) -> list[HarnessResult]:
    """
    Load previously saved results from a results directory.

    Args:
        results_dir: Path to the results directory.

    Returns:
        List of HarnessResult objects, empty if nothing was saved yet.
    """
    summary_path = results_dir / RESULTS_SUMMARY_FILENAME
    if not summary_path.exists():
        return []

    with open(summary_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    results = [HarnessResult(**result_data) for result_data in data.get("results", [])]
    results.sort(key=lambda x: x.username)
    return results
