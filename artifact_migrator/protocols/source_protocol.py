"""
Source lister protocol.

Every supported source kind provides a lister bound to one repository.
The orchestrator only depends on this interface.
"""

from typing import List, Protocol, runtime_checkable

from ..models.artifacts import ArtifactRef


@runtime_checkable
class SourceListerProtocol(Protocol):
    """
    Protocol defining how a source repository is enumerated.

    Attributes:
        repository_root: URL against which artifact paths are resolved for download
    """

    repository_root: str

    def list_artifacts(self) -> List[ArtifactRef]:
        """
        Enumerate every artifact of the repository, in arrival order.

        Returns:
            List of ArtifactRef; duplicates are possible

        Raises:
            ListError: If the source cannot be enumerated
        """
        ...


__all__ = ["SourceListerProtocol"]
