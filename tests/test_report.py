"""
Unit tests for the run report.
"""

import csv

import pytest

from folder_sift.report import load_report, write_report
from folder_sift.types import (
    ActionStatus,
    Item,
    ReportStatus,
    SiftConfig,
    SiftMode,
    SiftResult,
)


def sample_results():
    return [
        SiftResult(
            Item("a.mkv", "/src/a.mkv"), 0, "/sieve/Films/a.mkv",
            ActionStatus.SUCCESS, "Moved successfully",
        ),
        SiftResult(
            Item("b.txt", "/src/b.txt"), None, None,
            ActionStatus.NO_MATCH, "Matched no sieve folder",
        ),
    ]


class TestReportStatus:
    """Tests for ReportStatus.from_result."""

    @pytest.mark.parametrize("mode,expected", [
        (SiftMode.MOVE, ReportStatus.MOVED),
        (SiftMode.LINK, ReportStatus.LINKED),
        (SiftMode.COPY, ReportStatus.COPIED),
    ])
    def test_success_per_mode(self, mode, expected):
        """Success is named after the mode's action."""
        assert ReportStatus.from_result(ActionStatus.SUCCESS, mode) == expected

    def test_other_statuses(self):
        """Non-success statuses map one to one."""
        assert ReportStatus.from_result(
            ActionStatus.NO_MATCH, SiftMode.TEST
        ) == ReportStatus.NO_MATCH
        assert ReportStatus.from_result(
            ActionStatus.SKIPPED_EXISTS, SiftMode.MOVE
        ) == ReportStatus.SKIPPED_EXISTS


class TestWriteReport:
    """Tests for write_report and load_report."""

    def test_csv_report(self, tmp_path):
        """CSV reports carry parameter rows and one row per result."""
        report = tmp_path / "report.csv"
        config = SiftConfig(mode=SiftMode.MOVE)

        count = write_report(report, sample_results(), config, "/src", "/sieve")

        assert count == 2
        with open(report, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        params = [r["message"] for r in rows if r["status"] == "PARAMETER"]
        assert "mode=move" in params
        assert params[-1] == "--- END PARAMETERS ---"
        assert rows[-2]["status"] == "MOVED"
        assert rows[-1]["status"] == "NO_MATCH"
        assert rows[-1]["dest_path"] == ""

    def test_load_skips_parameters(self, tmp_path):
        """Loading a report returns only result rows."""
        report = tmp_path / "report.csv"
        write_report(report, sample_results(), SiftConfig(mode=SiftMode.MOVE))

        entries = load_report(report)

        assert [(e.item, e.status) for e in entries] == [
            ("a.mkv", "MOVED"),
            ("b.txt", "NO_MATCH"),
        ]
        assert entries[0].dest_path == "/sieve/Films/a.mkv"

    def test_xlsx_report(self, tmp_path):
        """An .xlsx path produces an Excel workbook."""
        report = tmp_path / "report.xlsx"
        write_report(report, sample_results(), SiftConfig(mode=SiftMode.LINK))

        entries = load_report(report)

        assert [e.status for e in entries] == ["LINKED", "NO_MATCH"]
        assert entries[1].dest_path == ""
        assert entries[0].source_path == "/src/a.mkv"

    def test_load_missing_file(self, tmp_path):
        """Raises error for missing file."""
        with pytest.raises(FileNotFoundError):
            load_report(tmp_path / "nope.csv")

    def test_load_empty_file(self, tmp_path):
        """Raises error for empty file."""
        report = tmp_path / "report.csv"
        report.write_text("")

        with pytest.raises(ValueError) as exc_info:
            load_report(report)

        assert "empty or invalid" in str(exc_info.value)

    def test_load_missing_columns(self, tmp_path):
        """Raises error for missing columns."""
        report = tmp_path / "report.csv"
        report.write_text("wrong,columns,here\n1,2,3\n")

        with pytest.raises(ValueError) as exc_info:
            load_report(report)

        assert "missing required columns" in str(exc_info.value)
