"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the page objects, and post-run processing of the
Allure results directory.

Features:
- JSON / text attachment helpers
- Result parsing and summary generation
- JSON summary file (test-results/results.json)
- HTML report generation (playwright-report/) with history carry-over

================================================================================
"""

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    allure.attach(
        json.dumps(data, indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    failures: List[Dict[str, str]] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "failures": self.failures,
            "timestamp": self.timestamp,
        }


class AllureReportProcessor:
    """
    Processes Allure results into the HTML report and the JSON summary.

    Usage:
        processor = AllureReportProcessor("test-results/allure-results", "playwright-report")
        processor.generate_report()
        processor.write_summary("test-results/results.json")
    """

    def __init__(
        self,
        results_dir: Union[str, Path],
        report_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Args:
            results_dir: Allure results directory
            report_dir: Output HTML report directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir) if report_dir else Path("playwright-report")

    def parse_results(self) -> List[Dict[str, Any]]:
        """
        Parse Allure result files.

        Unreadable files are logged and skipped.
        """
        results = []

        for result_file in sorted(self.results_dir.glob("*-result.json")):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")

        return results

    def generate_summary(self) -> TestResultSummary:
        """
        Aggregate statuses and durations.

        Retried tests leave one result file per attempt; only the latest
        attempt of each test (by historyId) is counted.
        """
        latest: Dict[str, Dict[str, Any]] = {}
        for result in self.parse_results():
            key = result.get("historyId") or result.get("uuid") or str(id(result))
            previous = latest.get(key)
            if previous is None or result.get("stop", 0) >= previous.get("stop", 0):
                latest[key] = result

        summary = TestResultSummary(total=len(latest))
        for result in latest.values():
            status = result.get("status", "unknown")
            if status in ("passed", "failed", "broken", "skipped"):
                setattr(summary, status, getattr(summary, status) + 1)
            else:
                summary.unknown += 1

            if status in ("failed", "broken"):
                details = result.get("statusDetails") or {}
                summary.failures.append({
                    "name": result.get("fullName") or result.get("name", ""),
                    "status": status,
                    "message": (details.get("message") or "").strip(),
                })

            summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

        return summary

    def write_summary(self, path: Union[str, Path]) -> Path:
        """Write the summary as JSON and return the file path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(self.generate_summary().to_dict(), indent=2),
            encoding="utf-8",
        )
        logger.info(f"JSON summary written to {path}")
        return path

    def copy_history(self):
        """Copy history from previous report to results."""
        history_source = self.report_dir / "history"
        history_dest = self.results_dir / "history"

        if history_source.exists():
            if history_dest.exists():
                shutil.rmtree(history_dest)
            shutil.copytree(history_source, history_dest)
            logger.info("Copied history from previous report")

    def generate_report(self) -> bool:
        """
        Generate the Allure HTML report.

        Returns:
            True if successful
        """
        self.copy_history()
        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean"
        ]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.error("Allure command not found. Install allure-commandline.")
            return False

        if result.returncode != 0:
            logger.error(f"Report generation failed: {result.stderr}")
            return False

        logger.info(f"Report generated at {self.report_dir}")
        return True

    def print_summary(self):
        """Print summary to console."""
        summary = self.generate_summary()

        print("\n" + "=" * 60)
        print("TEST EXECUTION SUMMARY")
        print("=" * 60)
        print(f"Total Tests:    {summary.total}")
        print(f"Passed:         {summary.passed} ✅")
        print(f"Failed:         {summary.failed} ❌")
        print(f"Broken:         {summary.broken} ⚠️")
        print(f"Skipped:        {summary.skipped} ⏭️")
        print(f"Pass Rate:      {summary.pass_rate:.2f}%")
        print(f"Duration:       {summary.duration_ms / 1000:.2f}s")
        for failure in summary.failures:
            print(f"  ❌ {failure['name']}")
        print("=" * 60 + "\n")


__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_json",
    "attach_text",
]
