"""Per-artifact outcomes and the migration report."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ..utils.constants import CONFLICT_MESSAGE, SUCCEEDED_MESSAGE
from .artifacts import ArtifactRef
from .base import MigratorBaseModel


class TransferStatus(str, Enum):
    """Classification of a single transfer."""

    SUCCEEDED = "succeeded"
    SKIPPED_CONFLICT = "skipped_conflict"
    FAILED = "failed"


class TransferOutcome(MigratorBaseModel):
    """
    Result of transferring one artifact.

    Attributes:
        status: Outcome classification
        message: Human readable detail (failure reason for failed outcomes)
        status_code: HTTP status that decided the outcome, when there was one
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: TransferStatus
    message: str = ""
    status_code: Optional[int] = None

    @classmethod
    def succeeded(cls, status_code: Optional[int] = None) -> "TransferOutcome":
        """Create a succeeded outcome."""
        return cls(status=TransferStatus.SUCCEEDED, message=SUCCEEDED_MESSAGE, status_code=status_code)

    @classmethod
    def conflict(cls) -> "TransferOutcome":
        """Create a skipped outcome for a 409 response."""
        return cls(status=TransferStatus.SKIPPED_CONFLICT, message=CONFLICT_MESSAGE, status_code=409)

    @classmethod
    def failed(cls, reason: str, status_code: Optional[int] = None) -> "TransferOutcome":
        """Create a failed outcome carrying the reason."""
        return cls(status=TransferStatus.FAILED, message=reason, status_code=status_code)

    @property
    def is_success(self) -> bool:
        """Check if the artifact was transferred."""
        return self.status == TransferStatus.SUCCEEDED

    @property
    def is_conflict(self) -> bool:
        """Check if the destination already held the artifact."""
        return self.status == TransferStatus.SKIPPED_CONFLICT

    @property
    def is_failure(self) -> bool:
        """Check if the transfer failed."""
        return self.status == TransferStatus.FAILED


class ReportEntry(MigratorBaseModel):
    """One line of the migration report."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    display_name: str
    source_path: str
    message: str


class MigrationReport(MigratorBaseModel):
    """
    Append-only ledger of per-artifact outcomes for one run.

    The orchestrator's transfer loop is the only writer; the renderer reads it
    once the loop is over.

    Example:
        >>> report = MigrationReport()
        >>> report.add_succeeded("a.jar", "libs/a.jar", "Succeeded")
        >>> report.total
        1
    """

    succeeded: List[ReportEntry] = Field(default_factory=list)
    skipped: List[ReportEntry] = Field(default_factory=list)
    failed: List[ReportEntry] = Field(default_factory=list)

    def add_succeeded(self, display_name: str, source_path: str, message: str) -> None:
        """Record a transferred artifact."""
        self.succeeded.append(ReportEntry(display_name=display_name, source_path=source_path, message=message))

    def add_skipped(self, display_name: str, source_path: str, message: str) -> None:
        """Record an artifact skipped because of a conflict."""
        self.skipped.append(ReportEntry(display_name=display_name, source_path=source_path, message=message))

    def add_failed(self, display_name: str, source_path: str, message: str) -> None:
        """Record an artifact that failed to transfer."""
        self.failed.append(ReportEntry(display_name=display_name, source_path=source_path, message=message))

    def record(self, ref: ArtifactRef, outcome: TransferOutcome) -> None:
        """Append an outcome to the list matching its status."""
        if outcome.is_success:
            self.add_succeeded(ref.display_name, ref.source_path, outcome.message)
        elif outcome.is_conflict:
            self.add_skipped(ref.display_name, ref.source_path, outcome.message)
        else:
            self.add_failed(ref.display_name, ref.source_path, outcome.message)

    @property
    def succeeded_count(self) -> int:
        """Number of transferred artifacts."""
        return len(self.succeeded)

    @property
    def skipped_count(self) -> int:
        """Number of skipped artifacts."""
        return len(self.skipped)

    @property
    def failed_count(self) -> int:
        """Number of failed artifacts."""
        return len(self.failed)

    @property
    def total(self) -> int:
        """Total number of recorded outcomes."""
        return self.succeeded_count + self.skipped_count + self.failed_count

    @property
    def has_failures(self) -> bool:
        """Check if any artifact failed."""
        return self.failed_count > 0

    def to_json_dict(self) -> Dict[str, Any]:
        """Export the three result lists and their counts."""
        return {
            "succeeded": [entry.model_dump() for entry in self.succeeded],
            "skipped": [entry.model_dump() for entry in self.skipped],
            "failed": [entry.model_dump() for entry in self.failed],
            "counts": {
                "succeeded": self.succeeded_count,
                "skipped": self.skipped_count,
                "failed": self.failed_count,
                "total": self.total,
            },
        }


class MigrationState(str, Enum):
    """States of one migration run."""

    LISTING = "listing"
    INDEXING = "indexing"
    FILTERING = "filtering"
    TRANSFERRING = "transferring"
    REPORTING = "reporting"
    DONE = "done"
    ABORTED = "aborted"


class MigrationResult(MigratorBaseModel):
    """
    Final state of a run that ended in DONE.

    Attributes:
        state: Terminal state of the run
        message: Summary message ("nothing to migrate", counts, ...)
        report: Report accumulated by the transfer loop
        elapsed_seconds: Wall-clock duration of the transfer loop
        listed_count: Number of artifacts returned by the source lister
        candidate_count: Number of artifacts left after filtering
    """

    state: MigrationState
    message: str
    report: MigrationReport = Field(default_factory=MigrationReport)
    elapsed_seconds: float = Field(default=0.0, ge=0)
    listed_count: int = Field(default=0, ge=0)
    candidate_count: int = Field(default=0, ge=0)


__all__ = [
    "TransferStatus",
    "TransferOutcome",
    "ReportEntry",
    "MigrationReport",
    "MigrationState",
    "MigrationResult",
]
