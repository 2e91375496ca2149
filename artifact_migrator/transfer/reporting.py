"""
Reporting for migration runs.

The report is rendered through logging once the transfer loop is over,
whether the run finished or was aborted. It is logged at WARNING so the
three lists and the summary are shown at the default verbosity.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.results import MigrationReport, MigrationState, ReportEntry
from ..utils.constants import PROGRESS_BAR_WIDTH
from ..utils.logging_utils import format_count_with_unit, format_duration, log_list_items, log_summary_separator


def format_report_summary(report: MigrationReport, elapsed_seconds: float) -> str:
    """
    Format the one-line summary of a report.

    Example:
        >>> format_report_summary(MigrationReport(), 1.5)
        'Migration finished in 1.5s: 0 succeeded, 0 skipped, 0 failed'
    """
    return (
        f"Migration finished in {format_duration(elapsed_seconds)}: "
        f"{report.succeeded_count} succeeded, {report.skipped_count} skipped, {report.failed_count} failed"
    )


def _log_entries(title: str, entries: List[ReportEntry]) -> None:
    if not entries:
        return
    logging.warning("%s (%s):", title, format_count_with_unit(len(entries), "artifact"))
    log_list_items(
        (f"{entry.display_name}  {entry.source_path}  {entry.message}" for entry in entries), level=logging.WARNING
    )


def generate_migration_report(
    report: MigrationReport,
    elapsed_seconds: float,
    state: Optional[MigrationState] = None,
) -> None:
    """
    Render a migration report through logging.

    Args:
        report: Report accumulated by the transfer loop
        elapsed_seconds: Duration of the transfer loop
        state: Terminal state of the run, when known
    """
    log_summary_separator("Migrate result:", width=PROGRESS_BAR_WIDTH, level=logging.WARNING)
    _log_entries("Succeeded", report.succeeded)
    _log_entries("Skipped", report.skipped)
    _log_entries("Failed", report.failed)

    logging.warning("%s", format_report_summary(report, elapsed_seconds))
    if state == MigrationState.ABORTED:
        logging.warning("Migration was aborted before all artifacts were processed")


def build_report_document(
    report: MigrationReport,
    elapsed_seconds: float,
    state: MigrationState,
    message: str = "",
) -> Dict[str, Any]:
    """Build the JSON document written by ``--report-file``."""
    document = report.to_json_dict()
    document["state"] = state.value
    document["message"] = message
    document["elapsed_seconds"] = round(elapsed_seconds, 3)
    return document


def write_report_file(
    path: str,
    report: MigrationReport,
    elapsed_seconds: float,
    state: MigrationState,
    message: str = "",
) -> Path:
    """
    Write a migration report as JSON.

    Args:
        path: Destination file; parent directories are created
        report: Report to write
        elapsed_seconds: Duration of the transfer loop
        state: Terminal state of the run
        message: Summary message of the run

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    document = build_report_document(report, elapsed_seconds, state, message)
    json_content = json.dumps(document, indent=2)

    report_path = Path(path).expanduser()
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json_content + "\n", encoding="utf-8")
    logging.info("Report written to %s", report_path)
    return report_path


__all__ = [
    "format_report_summary",
    "generate_migration_report",
    "build_report_document",
    "write_report_file",
]
