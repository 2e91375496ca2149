"""
Migration orchestrator.

A run moves through LISTING -> INDEXING -> FILTERING -> TRANSFERRING ->
REPORTING -> DONE, or ends in ABORTED. Transfers are strictly sequential: the
outcome of one artifact is recorded and its streams closed before the next
artifact starts. Once TRANSFERRING has been entered, the report is rendered
however the run ends.
"""

import logging
import threading
import time
from contextlib import ExitStack
from typing import Dict, List, Optional

import httpx

from ..api.coding_client import CodingClient, OpenApiError
from ..api.source_client import SourceClient
from ..exceptions import EmptySourceError, MigrationCancelled, MigrationError, TransferFailure
from ..models.artifacts import ArtifactRef, ExistenceIndex, IndexDiscipline
from ..models.context import Credentials, MigrationContext
from ..models.results import MigrationReport, MigrationResult, MigrationState, TransferOutcome
from ..protocols.progress_protocol import NullProgress, ProgressProtocol
from ..protocols.source_protocol import SourceListerProtocol
from ..sources import create_lister
from ..transfer.pipeline import transfer_artifact
from ..transfer.reporting import format_report_summary, generate_migration_report, write_report_file
from ..utils.credentials import CredentialStore
from ..utils.logging_utils import format_count_with_unit, log_operation_complete, log_operation_start
from ..utils.url import DestinationRef, parse_destination
from .existence_index import build_existence_index, existence_key

NOTHING_TO_MIGRATE = "nothing to migrate"


def filter_candidates(
    refs: List[ArtifactRef],
    index: Optional[ExistenceIndex],
    discipline: IndexDiscipline,
    prefix: Optional[str] = None,
) -> List[ArtifactRef]:
    """
    Select the artifacts to transfer, keeping listing order.

    Artifacts outside ``prefix`` and artifacts whose key is in ``index`` are
    dropped, then duplicates are removed by source path (first one wins).

    Args:
        refs: Artifacts produced by the source lister
        index: Destination existence index, None when the scan was skipped
        discipline: Discipline the index was built with
        prefix: Optional path prefix the artifacts must start with
    """
    seen = set()
    candidates: List[ArtifactRef] = []
    for ref in refs:
        if prefix and not ref.source_path.startswith(prefix):
            continue
        if index is not None and existence_key(ref, discipline) in index:
            continue
        if ref.source_path in seen:
            continue
        seen.add(ref.source_path)
        candidates.append(ref)
    return candidates


class MigrationService:
    """
    Runs one migration from a source repository into a destination repository.

    Collaborators not given explicitly are built from the context: clients are
    created (and closed at the end of ``run``) and the lister is chosen by
    ``context.src_type``. Destination credentials default to the ones stored
    for the destination host.

    Example:
        >>> service = MigrationService(context, progress=ClickProgress())
        >>> result = service.run()
        >>> result.report.succeeded_count
    """

    def __init__(
        self,
        context: MigrationContext,
        credentials: Optional[Credentials] = None,
        *,
        credential_store: Optional[CredentialStore] = None,
        source_client: Optional[SourceClient] = None,
        coding_client: Optional[CodingClient] = None,
        lister: Optional[SourceListerProtocol] = None,
        progress: Optional[ProgressProtocol] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.context = context
        self.credentials = credentials
        self.credential_store = credential_store
        self.source_client = source_client
        self.coding_client = coding_client
        self.lister = lister
        self.progress = progress or NullProgress()
        self.cancel_event = cancel_event
        self.state: Optional[MigrationState] = None
        self.report: Optional[MigrationReport] = None

    # ============================================================================
    # Run
    # ============================================================================

    def run(self) -> MigrationResult:
        """
        Run the migration.

        Returns:
            MigrationResult of a run that reached DONE

        Raises:
            ConfigurationError: Before any network call, for missing credentials
                or invalid URLs
            ListError: If the source cannot be enumerated
            ExistenceIndexError: If the destination cannot be scanned
            EmptySourceError: If the source holds no artifacts
            TransferFailure: On the first failed transfer in fail-fast mode
            MigrationCancelled: If the cancel event was set during transfers
        """
        try:
            destination = parse_destination(self.context.dst, self.context.artifact_type.value)
            credentials = self._resolve_credentials()
            with ExitStack() as stack:
                source_client = self.source_client or stack.enter_context(
                    SourceClient(
                        credentials=self.context.src_credentials,
                        timeout=self.context.timeout,
                        retries=self.context.connect_retries,
                    )
                )
                coding_client = self.coding_client or stack.enter_context(
                    CodingClient(credentials, timeout=self.context.timeout, retries=self.context.connect_retries)
                )
                lister = self.lister or create_lister(
                    self.context.src_type, source_client, self.context.src, self.context.page_size
                )
                return self._execute(destination, lister, source_client, coding_client)
        except MigrationError as e:
            self._enter(MigrationState.ABORTED)
            if e.report is None:
                e.report = self.report
            raise

    def _execute(
        self,
        destination: DestinationRef,
        lister: SourceListerProtocol,
        source_client: SourceClient,
        coding_client: CodingClient,
    ) -> MigrationResult:
        context = self.context
        discipline = context.index_discipline
        log_operation_start("migration", src=context.src, dst=context.dst, type=context.artifact_type.value)

        self._enter(MigrationState.LISTING)
        refs = lister.list_artifacts()
        if not refs:
            raise EmptySourceError(f"artifacts not found in {context.src}")
        logging.info("Found %s at the source", format_count_with_unit(len(refs), "artifact"))

        index: Optional[ExistenceIndex] = None
        if context.force:
            logging.info("Force mode: skipping the destination existence scan")
        else:
            self._enter(MigrationState.INDEXING)
            index = build_existence_index(coding_client, destination, discipline, page_size=context.page_size)

        self._enter(MigrationState.FILTERING)
        candidates = filter_candidates(refs, index, discipline, prefix=context.prefix)
        logging.info(
            "%s to migrate, %d filtered out",
            format_count_with_unit(len(candidates), "artifact"),
            len(refs) - len(candidates),
        )
        if not candidates:
            logging.warning("Nothing to migrate: every listed artifact is already present or excluded")
            self._enter(MigrationState.DONE)
            if context.report_file:
                write_report_file(
                    context.report_file, MigrationReport(), 0.0, MigrationState.DONE, NOTHING_TO_MIGRATE
                )
            return MigrationResult(
                state=MigrationState.DONE, message=NOTHING_TO_MIGRATE, listed_count=len(refs), candidate_count=0
            )

        report = MigrationReport()
        self.report = report
        self._enter(MigrationState.TRANSFERRING)
        started = time.monotonic()
        finished = False
        try:
            self._transfer_all(candidates, report, destination, lister.repository_root, source_client, coding_client)
            finished = True
        finally:
            elapsed = time.monotonic() - started
            self.progress.finish()
            self._enter(MigrationState.REPORTING)
            final_state = MigrationState.DONE if finished else MigrationState.ABORTED
            generate_migration_report(report, elapsed, final_state)
            if context.report_file:
                summary = format_report_summary(report, elapsed)
                write_report_file(context.report_file, report, elapsed, final_state, summary)

        self._enter(MigrationState.DONE)
        log_operation_complete(
            "migration",
            succeeded=report.succeeded_count,
            skipped=report.skipped_count,
            failed=report.failed_count,
        )
        return MigrationResult(
            state=MigrationState.DONE,
            message=format_report_summary(report, elapsed),
            report=report,
            elapsed_seconds=elapsed,
            listed_count=len(refs),
            candidate_count=len(candidates),
        )

    # ============================================================================
    # Transfers
    # ============================================================================

    def _transfer_all(
        self,
        candidates: List[ArtifactRef],
        report: MigrationReport,
        destination: DestinationRef,
        source_root: str,
        source_client: SourceClient,
        coding_client: CodingClient,
    ) -> None:
        destination_root = self.context.dst.rstrip("/")
        # Package-indexed destinations store each upload under a version, "latest" when none is sent
        send_version = self.context.index_discipline == IndexDiscipline.PACKAGE
        total = len(candidates)
        self.progress.start(total)
        logging.info("Begin to migrate %s", format_count_with_unit(total, "artifact"))

        for position, ref in enumerate(candidates, start=1):
            if self.cancel_event is not None and self.cancel_event.is_set():
                raise MigrationCancelled(
                    f"migration cancelled after {position - 1} of {total} artifacts",
                    details={"processed": position - 1, "total": total},
                )

            outcome = transfer_artifact(
                ref,
                source_root,
                destination_root,
                source_client,
                coding_client,
                version=ref.version if send_version else None,
            )
            if outcome.is_success and self.context.property_name:
                outcome = self._apply_property(coding_client, destination, ref, outcome)

            report.record(ref, outcome)
            self.progress.advance(ref, outcome)

            if outcome.is_conflict:
                logging.info("Skipped %s: already exists at the destination", ref.source_path)
            elif outcome.is_failure:
                logging.warning("Failed to migrate %s: %s", ref.source_path, outcome.message)
                if self.context.fail_fast:
                    raise TransferFailure(ref, outcome.message, report=report)

    def _apply_property(
        self, coding_client: CodingClient, destination: DestinationRef, ref: ArtifactRef, outcome: TransferOutcome
    ) -> TransferOutcome:
        """Attach the configured property to a migrated package version."""
        if self.context.index_discipline != IndexDiscipline.PACKAGE:
            return outcome
        package, _, version = existence_key(ref, IndexDiscipline.PACKAGE).rpartition(":")
        properties: Dict[str, str] = {self.context.property_name: self.context.property_value or ""}
        try:
            coding_client.create_artifact_properties(destination, package, version, properties)
        except (OpenApiError, httpx.HTTPError, ValueError) as e:
            logging.warning("Failed to set property %s on %s:%s: %s", self.context.property_name, package, version, e)
            return outcome.model_copy(update={"message": f"{outcome.message} (property not set: {e})"})
        logging.debug("Set property %s on %s:%s", self.context.property_name, package, version)
        return outcome

    # ============================================================================
    # Helpers
    # ============================================================================

    def _resolve_credentials(self) -> Credentials:
        if self.credentials is not None:
            return self.credentials
        store = self.credential_store or CredentialStore()
        return store.get(self.context.dst_host)

    def _enter(self, state: MigrationState) -> None:
        logging.debug("Migration state: %s -> %s", self.state.value if self.state else "start", state.value)
        self.state = state


__all__ = ["MigrationService", "filter_candidates", "NOTHING_TO_MIGRATE"]
