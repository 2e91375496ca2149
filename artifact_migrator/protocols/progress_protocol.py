"""
Progress protocol for the transfer loop.

The orchestrator announces the number of candidates, then emits exactly one
``advance`` per processed artifact whatever its outcome.
"""

from typing import Protocol

from ..models.artifacts import ArtifactRef
from ..models.results import TransferOutcome


class ProgressProtocol(Protocol):
    """Protocol for progress renderers."""

    def start(self, total: int) -> None:
        """Called once before the first transfer with the number of candidates."""
        ...

    def advance(self, ref: ArtifactRef, outcome: TransferOutcome) -> None:
        """Called once per processed artifact."""
        ...

    def finish(self) -> None:
        """Called once after the loop, including aborted loops."""
        ...


class NullProgress:
    """Progress renderer that renders nothing."""

    def start(self, total: int) -> None:
        pass

    def advance(self, ref: ArtifactRef, outcome: TransferOutcome) -> None:
        pass

    def finish(self) -> None:
        pass


__all__ = ["ProgressProtocol", "NullProgress"]
