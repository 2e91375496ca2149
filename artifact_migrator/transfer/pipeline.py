"""
Streaming transfer of a single artifact.

The artifact is downloaded from the source and piped, chunk by chunk, into an
upload to the destination; it is never buffered whole in memory or on disk.
The pipeline never raises for per-item problems: every result, including
transport errors, is classified into a ``TransferOutcome``.
"""

import logging
from typing import Optional

import httpx

from ..api.coding_client import CodingClient
from ..api.source_client import SourceClient
from ..models.artifacts import ArtifactRef
from ..models.results import TransferOutcome
from ..utils.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_CONFLICT, TRANSFER_CHUNK_SIZE
from ..utils.url import resolve_artifact_url


def _content_length(response: httpx.Response) -> Optional[int]:
    """Length of the download body, when the source announced it for unencoded content."""
    if response.headers.get("Content-Encoding", "identity") != "identity":
        return None
    value = response.headers.get("Content-Length")
    if value is None or not value.isdigit():
        return None
    return int(value)


def classify_upload_status(status_code: int, body: str = "") -> TransferOutcome:
    """
    Classify the status of an upload response.

    Example:
        >>> classify_upload_status(201).status.value
        'succeeded'
        >>> classify_upload_status(409).status.value
        'skipped_conflict'
    """
    if status_code < HTTP_STATUS_BAD_REQUEST:
        return TransferOutcome.succeeded(status_code=status_code)
    if status_code == HTTP_STATUS_CONFLICT:
        return TransferOutcome.conflict()
    reason = f"upload failed: HTTP {status_code}"
    if body:
        reason = f"{reason}: {body[:200]}"
    return TransferOutcome.failed(reason, status_code=status_code)


def transfer_artifact(
    ref: ArtifactRef,
    source_root: str,
    destination_root: str,
    source_client: SourceClient,
    coding_client: CodingClient,
    version: Optional[str] = None,
) -> TransferOutcome:
    """
    Transfer one artifact from the source repository to the destination.

    Args:
        ref: Artifact to transfer
        source_root: Source repository root the artifact path is resolved against
        destination_root: Destination repository URL the artifact is uploaded under
        source_client: Client used for the download
        coding_client: Client used for the upload
        version: Version to store the artifact under, "latest" on the destination when None

    Returns:
        TransferOutcome: succeeded for < 400, skipped_conflict for 409 and
        failed for any other error status, transport error or stream error
    """
    download_url = resolve_artifact_url(source_root, ref.source_path)
    upload_url = resolve_artifact_url(destination_root, ref.source_path)
    logging.debug("Transferring %s -> %s", download_url, upload_url)

    try:
        with source_client.stream_download(download_url) as download:
            if download.status_code >= HTTP_STATUS_BAD_REQUEST:
                logging.debug("Download of %s failed with HTTP %s", download_url, download.status_code)
                return TransferOutcome.failed(
                    f"download failed: HTTP {download.status_code}", status_code=download.status_code
                )

            with coding_client.stream_upload(
                upload_url,
                content=download.iter_bytes(TRANSFER_CHUNK_SIZE),
                content_length=_content_length(download),
                version=version,
            ) as upload:
                body = ""
                if upload.status_code >= HTTP_STATUS_BAD_REQUEST and upload.status_code != HTTP_STATUS_CONFLICT:
                    body = upload.read().decode("utf-8", errors="replace").strip()
                outcome = classify_upload_status(upload.status_code, body)
    except (httpx.HTTPError, httpx.StreamError) as e:
        logging.debug("Transfer of %s failed: %s", ref.source_path, e)
        return TransferOutcome.failed(f"{type(e).__name__}: {e}")

    logging.debug("Transfer of %s: %s (HTTP %s)", ref.source_path, outcome.status.value, outcome.status_code)
    return outcome


__all__ = ["classify_upload_status", "transfer_artifact"]
