"""
Transfer operations for migrating artifacts.

Modules:
    - pipeline: Streaming download -> upload of a single artifact
    - reporting: Rendering and export of migration reports
"""

from .pipeline import classify_upload_status, transfer_artifact
from .reporting import (
    build_report_document,
    format_report_summary,
    generate_migration_report,
    write_report_file,
)

__all__ = [
    "classify_upload_status",
    "transfer_artifact",
    "build_report_document",
    "format_report_summary",
    "generate_migration_report",
    "write_report_file",
]
