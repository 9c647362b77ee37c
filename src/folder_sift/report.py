"""
Run report writer.

Writes one row per sift outcome, preceded by PARAMETER rows describing the
run. A path ending in .xlsx produces an Excel workbook (via openpyxl); any
other path produces CSV.
"""

import csv
import logging
from dataclasses import astuple, fields
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Union

import openpyxl

from . import __version__
from .types import ReportEntry, ReportStatus, SiftConfig, SiftResult

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [field.name for field in fields(ReportEntry)]
PARAMETER_STATUS = "PARAMETER"
END_PARAMETERS = "--- END PARAMETERS ---"


def _timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


def parameter_entries(
    config: SiftConfig,
    source: Union[str, Path],
    destination: Union[str, Path]
) -> List[ReportEntry]:
    """Build the PARAMETER rows recording how the run was configured."""
    now = _timestamp()
    params = [
        f"version={__version__}",
        f"mode={config.mode.value}",
        f"deep={config.deep}",
        f"source={source}",
        f"destination={destination}",
        END_PARAMETERS,
    ]
    return [
        ReportEntry(now, "", PARAMETER_STATUS, "", "", param)
        for param in params
    ]


def result_entries(
    results: Iterable[SiftResult],
    config: SiftConfig
) -> List[ReportEntry]:
    """Convert sift results into report rows."""
    now = _timestamp()
    return [
        ReportEntry(
            timestamp=now,
            item=result.item.name,
            status=ReportStatus.from_result(result.status, config.mode).value,
            source_path=result.item.path,
            dest_path=result.dest_path or "",
            message=result.message,
        )
        for result in results
    ]


def _write_csv(path: Path, entries: List[ReportEntry]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_COLUMNS)
        for entry in entries:
            writer.writerow(astuple(entry))


def _write_xlsx(path: Path, entries: List[ReportEntry]) -> None:
    workbook = openpyxl.Workbook()
    try:
        worksheet = workbook.active
        worksheet.title = "Sift Report"
        worksheet.append(REPORT_COLUMNS)
        for entry in entries:
            worksheet.append(list(astuple(entry)))
        workbook.save(path)
    finally:
        workbook.close()


def write_report(
    report_path: Union[str, Path],
    results: Iterable[SiftResult],
    config: SiftConfig,
    source: Union[str, Path] = "",
    destination: Union[str, Path] = ""
) -> int:
    """
    Write the run report.

    Args:
        report_path: Output file (.xlsx for Excel, anything else for CSV)
        results: Sift outcomes to record
        config: The run configuration
        source: Source folder, recorded as a parameter
        destination: Destination sieve, recorded as a parameter

    Returns:
        Number of result rows written

    Raises:
        OSError: If the report cannot be written
    """
    path = Path(report_path)
    rows = result_entries(results, config)
    entries = parameter_entries(config, source, destination) + rows

    if path.suffix.lower() == ".xlsx":
        _write_xlsx(path, entries)
    else:
        _write_csv(path, entries)

    logger.info(f"Wrote {len(rows)} report rows to {path}")
    return len(rows)


def load_report(report_path: Union[str, Path]) -> List[ReportEntry]:
    """
    Load the result rows of a CSV or XLSX report, skipping PARAMETER rows.

    Raises:
        FileNotFoundError: If the report doesn't exist
        ValueError: If the report is empty or lacks the report columns
    """
    path = Path(report_path)
    if not path.exists():
        raise FileNotFoundError(f"Report file not found: {path}")

    if path.suffix.lower() == ".xlsx":
        workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        try:
            rows = [
                ["" if cell is None else str(cell) for cell in row]
                for row in workbook.active.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()
    else:
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))

    if not rows:
        raise ValueError(f"Report file is empty or invalid: {path}")

    header = [column.strip() for column in rows[0]]
    missing = set(REPORT_COLUMNS) - set(header)
    if missing:
        raise ValueError(
            f"Report is missing required columns: {', '.join(sorted(missing))}"
        )

    entries: List[ReportEntry] = []
    for row in rows[1:]:
        record = dict(zip(header, (value.strip() for value in row)))
        if record.get("status") == PARAMETER_STATUS:
            continue
        entries.append(ReportEntry(**{
            column: record.get(column, "") for column in REPORT_COLUMNS
        }))
    return entries
