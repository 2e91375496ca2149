"""
Source registry listers.

One lister exists per source kind; the kind is chosen explicitly by the user
and never detected from the URL.
"""

from typing import Dict, Type

from ..api.source_client import SourceClient
from ..exceptions import ConfigurationError
from ..models.artifacts import SourceKind
from ..protocols.source_protocol import SourceListerProtocol
from ..utils.constants import DEFAULT_PAGE_SIZE
from .base import BaseLister
from .generic import GenericLister
from .jfrog import JfrogLister
from .nexus import NexusLister

LISTERS: Dict[SourceKind, Type[BaseLister]] = {
    SourceKind.GENERIC: GenericLister,
    SourceKind.NEXUS: NexusLister,
    SourceKind.JFROG: JfrogLister,
}


def create_lister(
    kind: SourceKind, client: SourceClient, src: str, page_size: int = DEFAULT_PAGE_SIZE
) -> SourceListerProtocol:
    """
    Create the lister for a source kind.

    Raises:
        ConfigurationError: If the kind is unsupported or the source URL does
            not match the layout the kind expects
    """
    try:
        lister_class = LISTERS[SourceKind(kind)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"unsupported source type: {kind}") from e
    return lister_class(client, src, page_size)


__all__ = ["BaseLister", "GenericLister", "NexusLister", "JfrogLister", "LISTERS", "create_lister"]
